from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from mentorslot.models.user import Role
from mentorslot.schemas.session import CamelModel


# ======================
# TOKEN SCHEMAS
# ======================

class Identity(BaseModel):
    """Claims carried by a signed token: subject id, email and role."""

    id: int
    email: str
    role: Role

    model_config = ConfigDict(frozen=True, from_attributes=True)


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    role: Role
    has_profile: bool = False


# ======================
# USER AUTHENTICATION SCHEMAS
# ======================

class RegisterRequest(BaseModel):
    email: EmailStr
    # Bcrypt limit is 72 bytes
    password: str = Field(..., min_length=6, max_length=72)
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class RegisterResponse(CamelModel):
    message: str
    user_id: int
    role: Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
