# fitness_api/schemas/user.py
# Pydantic-схемы запросов и ответов для /users.
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from fitness_api.schemas.common import camel_field


class UserRegister(BaseModel):
    email: str
    password: str
    first_name: Optional[str] = camel_field(None, "first_name", "firstName")
    last_name: Optional[str] = camel_field(None, "last_name", "lastName")
    mobile_no: str = camel_field(..., "mobile_no", "mobileNo")


class UserLogin(BaseModel):
    email: str
    password: str


class EmailCheck(BaseModel):
    email: str


class PasswordUpdate(BaseModel):
    new_password: str = camel_field(..., "new_password", "newPassword")


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = camel_field(None, "first_name", "firstName")
    last_name: Optional[str] = camel_field(None, "last_name", "lastName")
    mobile_no: Optional[str] = camel_field(None, "mobile_no", "mobileNo")


class UserOut(BaseModel):
    """Пользователь без пароля."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: Optional[str] = camel_field(None, "first_name", "firstName")
    last_name: Optional[str] = camel_field(None, "last_name", "lastName")
    mobile_no: Optional[str] = camel_field(None, "mobile_no", "mobileNo")
    is_admin: bool = camel_field(False, "is_admin", "isAdmin")
    created_at: Optional[datetime] = camel_field(None, "created_at", "createdAt")


class TokenResponse(BaseModel):
    access: str


class ProfileResponse(BaseModel):
    user: UserOut


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserOut


class AdminPromotionResponse(BaseModel):
    updated_user: UserOut = camel_field(..., "updated_user", "updatedUser")
    message: str
