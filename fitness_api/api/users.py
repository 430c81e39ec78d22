# fitness_api/api/users.py
# Роуты пользователей: регистрация, логин, профиль, смена пароля, роли.
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_db, get_token_service, require_admin, require_auth
from fitness_api.core import security
from fitness_api.core.errors import AuthError, AuthErrorKind, ConflictError, NotFoundError
from fitness_api.core.security import Identity, TokenService
from fitness_api.core.validation import (
    LOGIN_EMAIL_INVALID,
    USER_ID_INVALID,
    check_email,
    check_mobile_no,
    check_password,
    check_resource_id,
    normalize_id,
    validate,
)
from fitness_api.models.user import User
from fitness_api.schemas.common import MessageResponse
from fitness_api.schemas.user import (
    AdminPromotionResponse,
    EmailCheck,
    PasswordUpdate,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    TokenResponse,
    UserLogin,
    UserOut,
    UserRegister,
)

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_IN_USE = "Email already in use"


def _get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.post("", status_code=201, response_model=MessageResponse)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """
    Регистрация: сначала формат полей, потом уникальность email.
    Пароль хранится только в виде bcrypt-хеша.
    """
    validate(
        check_email(payload.email),
        check_mobile_no(payload.mobile_no),
        check_password(payload.password),
    )
    if db.query(User).filter(User.email == payload.email).first():
        raise ConflictError(EMAIL_IN_USE)

    user = User(
        email=payload.email,
        hashed_password=security.get_password_hash(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        mobile_no=payload.mobile_no,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Параллельная регистрация с тем же email
        db.rollback()
        raise ConflictError(EMAIL_IN_USE)
    logger.info("👤 Registered user %s", user.id)
    return {"message": "Registered Successfully"}


@router.post("/login", response_model=TokenResponse)
def login(
    payload: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Логин по email и паролю: возвращает access-токен."""
    validate(check_email(payload.email, LOGIN_EMAIL_INVALID))
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None:
        raise NotFoundError("No email found")
    if not security.verify_password(payload.password, user.hashed_password):
        raise AuthError(AuthErrorKind.bad_credentials)
    token = tokens.create_access_token(Identity(id=user.id, is_admin=user.is_admin))
    return {"access": token}


@router.post("/check-email", response_model=MessageResponse, responses={404: {"model": MessageResponse}})
def check_email_exists(payload: EmailCheck, db: Session = Depends(get_db)):
    """409 если email занят, 404 если свободен."""
    validate(check_email(payload.email, LOGIN_EMAIL_INVALID))
    if db.query(User).filter(User.email == payload.email).first():
        return JSONResponse(status_code=409, content={"message": "Duplicate email found"})
    return JSONResponse(status_code=404, content={"message": "No duplicate email found"})


@router.get("/profile", response_model=ProfileResponse)
def get_profile(identity: Identity = Depends(require_auth), db: Session = Depends(get_db)):
    user = _get_user(db, identity.id)
    return {"user": UserOut.model_validate(user)}


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdate,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    if payload.mobile_no is not None:
        validate(check_mobile_no(payload.mobile_no))
    user = _get_user(db, identity.id)
    for field in ("first_name", "last_name", "mobile_no"):
        value = getattr(payload, field)
        if value is not None:
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return {"message": "Profile updated successfully", "user": UserOut.model_validate(user)}


@router.patch("/password", response_model=MessageResponse)
def update_password(
    payload: PasswordUpdate,
    identity: Identity = Depends(require_auth),
    db: Session = Depends(get_db),
):
    validate(check_password(payload.new_password))
    user = _get_user(db, identity.id)
    user.hashed_password = security.get_password_hash(payload.new_password)
    db.commit()
    return {"message": "Password reset successfully"}


@router.patch("/{user_id}/admin", response_model=AdminPromotionResponse)
def set_as_admin(
    user_id: str,
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Выдаёт роль администратора. Вызывать может только администратор."""
    validate(check_resource_id(user_id, USER_ID_INVALID))
    user = _get_user(db, normalize_id(user_id))
    user.is_admin = True
    db.commit()
    db.refresh(user)
    logger.info("🛡️ User %s promoted to admin by %s", user.id, identity.id)
    return {"updatedUser": UserOut.model_validate(user), "message": "User updated successfully"}


@router.get("", response_model=List[UserOut])
def list_users(identity: Identity = Depends(require_auth), db: Session = Depends(get_db)):
    return [UserOut.model_validate(user) for user in db.query(User).order_by(User.created_at).all()]
