# fitness_api/api/deps.py
# Зависимости FastAPI: сессия БД, сервис токенов и проверки доступа.
# Всё берётся из app.state, куда create_app кладёт объекты при старте.
import logging
from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fitness_api.core.errors import AuthError, AuthErrorKind, ForbiddenError
from fitness_api.core.security import Identity, TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Iterator[Session]:
    """Зависимость для получения сессии БД в эндпоинтах."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Возвращает Identity по Bearer-токену или бросает 401."""
    if credentials is None:
        raise AuthError(AuthErrorKind.missing)
    try:
        return tokens.verify(credentials.credentials)
    except AuthError as e:
        logger.info("🔒 Rejected bearer token: %s", e.kind.value)
        raise


def require_admin(identity: Identity = Depends(require_auth)) -> Identity:
    """Пропускает только администраторов (после require_auth)."""
    if not identity.is_admin:
        raise ForbiddenError("Admin access required")
    return identity
