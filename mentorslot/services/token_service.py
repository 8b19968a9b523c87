# mentorslot/services/token_service.py
"""
Token Service - signed identity credentials

Issues and verifies HS256 JWTs carrying {subject id, email, role}.
Pure functions of the process-wide signing key and the claims.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from mentorslot.config import settings
from mentorslot.errors import InvalidToken
from mentorslot.schemas.auth import Identity

logger = logging.getLogger(__name__)


class TokenPolicy:
    """Token lifetime policy. No refresh: re-authentication issues a new token."""
    LIFETIME = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)


def issue_token(
    identity: Identity,
    expires_delta: Optional[timedelta] = None,
    *,
    secret_key: Optional[str] = None,
) -> str:
    """
    Produce a signed, time-boxed credential for an identity.

    Args:
        identity: Subject id, email and role to embed
        expires_delta: Validity window (defaults to TokenPolicy.LIFETIME)
        secret_key: Signing key override (defaults to settings.SECRET_KEY)

    Returns:
        Encoded JWT string
    """
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta if expires_delta is not None else TokenPolicy.LIFETIME)

    to_encode = {
        "sub": str(identity.id),
        "email": identity.email,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        to_encode,
        secret_key or settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def verify_token(token: str, *, secret_key: Optional[str] = None) -> Identity:
    """
    Check signature and expiry and return the embedded claims.

    Malformed tokens, bad signatures, expired tokens and unusable claims all
    raise the same InvalidToken so callers cannot tell them apart.

    Raises:
        InvalidToken
    """
    if not token or not isinstance(token, str):
        raise InvalidToken()

    try:
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True},
        )
        return Identity(
            id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
        )
    except (JWTError, KeyError, TypeError, ValueError, PydanticValidationError):
        logger.debug("Rejected bearer token")
        raise InvalidToken()
