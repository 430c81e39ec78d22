# fitness_api/core/security.py
# Хеширование паролей и выпуск/проверка JWT.
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext

from fitness_api.core.config import ConfigError, Settings
from fitness_api.core.errors import AuthError, AuthErrorKind

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Хешируем пароль для хранения в БД."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверяем пароль при логине."""
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class Identity:
    """Кто делает запрос: id пользователя и флаг администратора."""

    id: str
    is_admin: bool = False


class TokenService:
    """Выпускает и проверяет подписанные токены доступа.

    Токен самодостаточен: sub = id пользователя, isAdmin = роль,
    iat/exp = время выпуска и истечения. Серверных сессий нет.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        if not secret_key:
            raise ConfigError("SECRET_KEY is required to issue tokens")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.SECRET_KEY, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def create_access_token(self, identity: Identity, expires_delta: timedelta | None = None) -> str:
        """Создаём JWT токен с полями sub и isAdmin."""
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)
        to_encode = {
            "sub": identity.id,
            "isAdmin": identity.is_admin,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Проверяет подпись и срок действия, возвращает Identity или бросает AuthError."""
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            raise AuthError(AuthErrorKind.malformed)

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthError(AuthErrorKind.expired)
        except JWTClaimsError:
            # Подпись верна, но стандартные claims неверного типа (например, sub не строка)
            raise AuthError(AuthErrorKind.malformed)
        except JWTError:
            raise AuthError(AuthErrorKind.invalid_signature)

        user_id = payload.get("sub")
        is_admin = payload.get("isAdmin", False)
        if not isinstance(user_id, str) or not user_id or not isinstance(is_admin, bool):
            raise AuthError(AuthErrorKind.malformed)
        return Identity(id=user_id, is_admin=is_admin)
