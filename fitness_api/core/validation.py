# fitness_api/core/validation.py
# Проверки входных данных. Каждая функция тотальна: никогда не бросает,
# возвращает Check(ok, error). validate() превращает первую неудачу в 400.
import re
import uuid
from dataclasses import dataclass

from fitness_api.core.errors import ValidationError

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

EMAIL_INVALID = "Email Invalid"
LOGIN_EMAIL_INVALID = "Invalid Email"
MOBILE_NO_INVALID = "Mobile number invalid"
PASSWORD_TOO_SHORT = "Password must be atleast 8 characters"
WORKOUT_ID_INVALID = "Invalid Workout ID"
USER_ID_INVALID = "Invalid User ID"

MOBILE_NO_LENGTH = 11
PASSWORD_MIN_LENGTH = 8


@dataclass(frozen=True)
class Check:
    ok: bool
    error: str | None = None

    def raise_for_error(self) -> None:
        if not self.ok:
            raise ValidationError(self.error)


PASSED = Check(ok=True)


def _failed(message: str) -> Check:
    return Check(ok=False, error=message)


def check_email(value, message: str = EMAIL_INVALID) -> Check:
    if isinstance(value, str) and EMAIL_RE.fullmatch(value):
        return PASSED
    return _failed(message)


def check_mobile_no(value) -> Check:
    if isinstance(value, str) and len(value) == MOBILE_NO_LENGTH and value.isascii() and value.isdigit():
        return PASSED
    return _failed(MOBILE_NO_INVALID)


def check_password(value) -> Check:
    if isinstance(value, str) and len(value) >= PASSWORD_MIN_LENGTH:
        return PASSED
    return _failed(PASSWORD_TOO_SHORT)


def normalize_id(value) -> str | None:
    """Каноническая форма UUID или None, если строка не похожа на id хранилища."""
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def check_resource_id(value, message: str = WORKOUT_ID_INVALID) -> Check:
    if normalize_id(value) is None:
        return _failed(message)
    return PASSED


def validate(*checks: Check) -> None:
    """Бросает ValidationError для первой неудачной проверки (порядок важен)."""
    for check in checks:
        check.raise_for_error()
