# fitness_api/db/base.py
# Общая declarative база для SQLAlchemy.
# Этот модуль должен быть максимально простым и не импортировать модели,
# чтобы избежать циклических импортов. Модели должны импортировать Base отсюда.
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

# Единственная точка определения Base для всех моделей
Base = declarative_base()


def new_id() -> str:
    """Идентификатор документа: UUID в текстовом виде."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Текущее время в UTC без tzinfo: колонки DateTime хранят наивное UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Переводит время со смещением в наивное UTC; наивное считается уже UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
