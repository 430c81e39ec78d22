# fitness_api/models/workout.py
# Тренировка пользователя. user_id: просто ссылка на владельца,
# существование пользователя при создании не перепроверяется.
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String

from fitness_api.db.base import Base, new_id, utcnow

DEFAULT_STATUS = "pending"
COMPLETED_STATUS = "completed"


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    duration = Column(String, nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_STATUS)
    is_active = Column(Boolean, nullable=False, default=True)
    date_added = Column(DateTime, nullable=False, default=utcnow)
