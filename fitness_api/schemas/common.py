# fitness_api/schemas/common.py
# Общие схемы ответов и помощник для camelCase-полей.
from pydantic import AliasChoices, BaseModel, Field


def camel_field(default, name: str, camel: str, **kwargs):
    """Поле, которое принимает camelCase и snake_case, а отдаёт camelCase."""
    return Field(
        default,
        validation_alias=AliasChoices(camel, name),
        serialization_alias=camel,
        **kwargs,
    )


class MessageResponse(BaseModel):
    message: str
