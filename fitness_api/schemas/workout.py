# fitness_api/schemas/workout.py
# Pydantic-схемы запросов и ответов для /workouts.
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitness_api.db.base import to_naive_utc
from fitness_api.models.workout import DEFAULT_STATUS
from fitness_api.schemas.common import camel_field


def _duration_as_text(value):
    # Длительность хранится строкой ("30 mins"), числа принимаем как есть
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class WorkoutCreate(BaseModel):
    name: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    status: str = DEFAULT_STATUS
    date_added: Optional[datetime] = camel_field(None, "date_added", "dateAdded")

    @field_validator("duration", mode="before")
    @classmethod
    def normalize_duration(cls, value):
        return _duration_as_text(value)

    @field_validator("date_added")
    @classmethod
    def normalize_date_added(cls, value):
        return to_naive_utc(value) if value is not None else None


class WorkoutUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    duration: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = None

    @field_validator("duration", mode="before")
    @classmethod
    def normalize_duration(cls, value):
        return _duration_as_text(value)


class WorkoutSearch(BaseModel):
    name: str


class WorkoutOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str = camel_field(..., "user_id", "userId")
    name: str
    duration: str
    status: str
    is_active: bool = camel_field(True, "is_active", "isActive")
    date_added: datetime = camel_field(..., "date_added", "dateAdded")


class WorkoutActionResponse(BaseModel):
    """Ответ на изменение тренировки: сообщение и актуальное состояние."""

    message: str
    workout: WorkoutOut
