# fitness_api/models/user.py
# Модель пользователя: email, hashed_password, профиль, флаг администратора.
from sqlalchemy import Boolean, Column, DateTime, String

from fitness_api.db.base import Base, new_id, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    mobile_no = Column(String(11), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
