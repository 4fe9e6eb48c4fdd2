"""User Schemas — registration and login bodies.

Invariants:
    - email is stripped and non-empty; no format check (registration is a
      profile mirror of an external identity provider, not a sign-up form)
"""

from pydantic import BaseModel, Field, field_validator


class UserRegister(BaseModel):
    """Body of POST /register."""
    email: str = Field(min_length=3, max_length=320)
    name: str | None = Field(None, max_length=200)
    photoURL: str | None = Field(None, max_length=2000)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("email cannot be empty or whitespace")
        return v


class UserLogin(BaseModel):
    """Body of POST /login."""
    email: str = Field(min_length=1, max_length=320)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()
