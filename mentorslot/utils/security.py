from typing import Optional

from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from mentorslot import models
from mentorslot.config import settings
from mentorslot.errors import Forbidden, InvalidToken, Unauthenticated
from mentorslot.models.user import Role
from mentorslot.schemas.auth import Identity
from mentorslot.services.token_service import verify_token


# ==========================
# AUTH CONFIG
# ==========================

# Bearer header is accepted alongside the auth cookie.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto"
)


# ==========================
# PASSWORD UTILS
# ==========================

def _truncate_for_bcrypt(password: str) -> str:
    """
    Bcrypt max input length = 72 bytes
    Truncate safely to avoid crash
    """
    password_bytes = password.encode("utf-8")

    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
        password = password_bytes.decode("utf-8", errors="ignore")

    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_truncate_for_bcrypt(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_truncate_for_bcrypt(password))


def authenticate_user(db: Session, email: str, password: str):
    user = db.query(models.User).filter(
        models.User.email == email.strip().lower()
    ).first()

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


# ==========================
# ACCESS GATEWAY
# ==========================

def authorize(token: Optional[str], required_role: Optional[Role] = None) -> Identity:
    """
    Verify a token and optionally require a role.

    Raises Unauthenticated when the token is missing or fails verification,
    and Forbidden when the verified role does not match ``required_role``.
    Never touches storage.
    """
    if not token:
        raise Unauthenticated()

    try:
        identity = verify_token(token)
    except InvalidToken:
        raise Unauthenticated("Invalid token")

    if required_role is not None and identity.role is not required_role:
        raise Forbidden()

    return identity


def extract_token(request: Request, bearer: Optional[str] = None) -> Optional[str]:
    """Cookie transport wins over the Authorization header."""
    cookie_token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie_token:
        return cookie_token
    return bearer or None


def require_identity(required_role: Optional[Role] = None):
    """
    FastAPI dependency factory guarding an endpoint.

    Usage: identity: Identity = Depends(require_identity(Role.MENTOR))
    """
    def dependency(
        request: Request,
        bearer: Optional[str] = Depends(oauth2_scheme),
    ) -> Identity:
        return authorize(extract_token(request, bearer), required_role)

    return dependency


get_current_identity = require_identity()
require_mentor = require_identity(Role.MENTOR)
require_student = require_identity(Role.STUDENT)
