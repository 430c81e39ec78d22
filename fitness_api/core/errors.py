# fitness_api/core/errors.py
# Иерархия ошибок приложения. Каждая ошибка знает свой HTTP-статус;
# обработчики в main.py превращают их в {"error": message}.
import enum


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, headers: dict | None = None):
        super().__init__(message)
        self.message = message
        self.headers = headers


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class ForbiddenError(AppError):
    status_code = 403


class AuthErrorKind(str, enum.Enum):
    missing = "missing"
    malformed = "malformed"
    invalid_signature = "invalid_signature"
    expired = "expired"
    bad_credentials = "bad_credentials"


AUTH_ERROR_MESSAGES = {
    AuthErrorKind.missing: "Authentication required",
    AuthErrorKind.malformed: "Invalid token",
    AuthErrorKind.invalid_signature: "Invalid token",
    AuthErrorKind.expired: "Token expired",
    AuthErrorKind.bad_credentials: "Email and password do not match",
}


class AuthError(AppError):
    """401. Вид ошибки (kind) различается внутри, снаружи ответ всегда 401."""

    status_code = 401

    def __init__(self, kind: AuthErrorKind, message: str | None = None):
        super().__init__(
            message or AUTH_ERROR_MESSAGES[kind],
            headers={"WWW-Authenticate": "Bearer"},
        )
        self.kind = kind
