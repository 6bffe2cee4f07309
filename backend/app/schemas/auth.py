"""Auth Schemas: registration, login, verification and profile payloads.

Invariants:
    - Emails are trimmed and lower-cased before they reach the store
    - Registration password: >= 8 chars with lower, upper, digit and one of @$!%*?&.
    - confirmPassword is optional; when present it must equal password
    - Login password: >= 6 chars (no policy, so older accounts can still sign in)
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from app.models.household import Household
from app.models.user import User
from app.schemas.common import CamelModel

_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "password must contain a lowercase letter"),
    (re.compile(r"[A-Z]"), "password must contain an uppercase letter"),
    (re.compile(r"\d"), "password must contain a digit"),
    (re.compile(r"[@$!%*?&.]"), "password must contain one of @$!%*?&."),
)


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=2, max_length=120)
    confirm_password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("name must have at least 2 characters")
        return v

    @field_validator("password")
    @classmethod
    def check_password_policy(cls, v: str) -> str:
        for pattern, message in _PASSWORD_RULES:
            if not pattern.search(v):
                raise ValueError(message)
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("passwords do not match")
        return self


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v


class ResendVerificationRequest(CamelModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v) if isinstance(v, str) else v


# --- Responses ---------------------------------------------------------------

class UserOut(CamelModel):
    id: UUID
    email: str
    name: str | None
    email_verified: bool
    household_id: UUID | None
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            email_verified=user.email_verified,
            household_id=user.household_id,
            created_at=user.created_at,
        )


class MemberOut(CamelModel):
    id: UUID
    name: str | None
    email: str


class HouseholdOut(CamelModel):
    id: UUID
    name: str
    owner_id: UUID
    created_at: datetime

    @classmethod
    def from_model(cls, household: Household) -> "HouseholdOut":
        return cls(
            id=household.id,
            name=household.name,
            owner_id=household.owner_id,
            created_at=household.created_at,
        )


class HouseholdDetailOut(HouseholdOut):
    members: list[MemberOut]

    @classmethod
    def from_model(cls, household: Household) -> "HouseholdDetailOut":
        return cls(
            id=household.id,
            name=household.name,
            owner_id=household.owner_id,
            created_at=household.created_at,
            members=[
                MemberOut(id=m.id, name=m.name, email=m.email)
                for m in household.members
            ],
        )


class RegisterResponse(CamelModel):
    user: UserOut
    message: str


class LoginResponse(CamelModel):
    user: UserOut
    household: HouseholdOut | None
    message: str


class MeResponse(CamelModel):
    user: UserOut
    household: HouseholdDetailOut | None
