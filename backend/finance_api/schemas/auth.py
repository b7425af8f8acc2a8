from __future__ import annotations

import re
import uuid

from pydantic import BaseModel, field_validator

PASSWORD_SYMBOLS = "!@#$%^&*"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


class RegisterRequest(BaseModel):
    email: str
    password: str
    fullName: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Email is required.")
        if not _EMAIL_RE.match(value.strip()):
            raise ValueError("Email must be valid.")
        return value.strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required.")
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters.")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter.")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one digit.")
        if not any(c in PASSWORD_SYMBOLS for c in value):
            raise ValueError("Password must contain at least one special character.")
        return value

    @field_validator("fullName")
    @classmethod
    def check_full_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Full name is required.")
        if len(value) > 256:
            raise ValueError("Full name cannot exceed 256 characters.")
        return value


class RegisterResponse(BaseModel):
    userId: uuid.UUID
    email: str
    fullName: str


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    userId: uuid.UUID
    email: str
    fullName: str
    accessToken: str
    refreshToken: str
    expiresIn: int = 3600
    tokenType: str = "Bearer"


class RefreshTokenRequest(BaseModel):
    refreshToken: str = ""


class MessageResponse(BaseModel):
    message: str


class UserMe(BaseModel):
    userId: uuid.UUID
    email: str
    fullName: str
    role: str
