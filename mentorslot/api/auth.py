import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from mentorslot.config import settings
from mentorslot.crud import user as user_crud
from mentorslot.database import get_db
from mentorslot.errors import Unauthenticated, ValidationError
from mentorslot.schemas.auth import Identity, LoginRequest, RegisterRequest, RegisterResponse, Token
from mentorslot.services.token_service import issue_token
from mentorslot.utils.security import authenticate_user, get_current_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.access_token_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Create an identity. Profiles are completed later through onboarding."""
    if user_crud.get_user_by_email(db, user_data.email):
        raise ValidationError("User with this email already exists")

    try:
        user = user_crud.create_user(db, user_data.email, user_data.password, user_data.role)
    except user_crud.EmailAlreadyRegistered as exc:
        raise ValidationError(str(exc))

    logger.info("Registered user_id=%s role=%s", user.id, user.role.value)
    return RegisterResponse(message="User registered successfully", user_id=user.id, role=user.role)


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Verify credentials, set the auth cookie and return the access token"""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise Unauthenticated("Invalid email or password")

    access_token = issue_token(Identity(id=user.id, email=user.email, role=user.role))
    set_auth_cookie(response, access_token)

    return Token(
        access_token=access_token,
        token_type="bearer",
        role=user.role,
        has_profile=bool(user.has_profile),
    )


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=Identity)
def me(identity: Identity = Depends(get_current_identity)):
    return identity
