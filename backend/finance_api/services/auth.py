"""Register/login orchestration over the user store, hasher and token issuer."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from finance_api.core.security import PasswordHasher, TokenIssuer
from finance_api.domain.entities import User
from finance_api.domain.errors import DomainError, ErrorKind
from finance_api.repositories.base import UserStore

logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"


@dataclass(frozen=True)
class RegisterResult:
    user_id: uuid.UUID
    email: str
    full_name: str


@dataclass(frozen=True)
class LoginResult:
    user_id: uuid.UUID
    email: str
    full_name: str
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE


class AuthService:
    def __init__(self, users: UserStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, email: str, password: str, full_name: str) -> RegisterResult | None:
        """Create a user. Returns None when the e-mail is already registered."""
        if self.users.email_exists(email):
            logger.info("Registration rejected: email already registered")
            return None

        user = User.create(email, self.hasher.hash(password), full_name)
        try:
            self.users.add(user)
        except DomainError as exc:
            if exc.kind is not ErrorKind.CONFLICT:
                raise
            logger.info("Registration rejected by unique constraint")
            return None

        logger.info("Registered user %s", user.id)
        return RegisterResult(user_id=user.id, email=user.email, full_name=user.nickname)

    def login(self, email: str, password: str) -> LoginResult | None:
        """Authenticate and issue tokens. Returns None when credentials don't match."""
        if not email or not email.strip() or not password or not password.strip():
            return None

        user = self.users.get_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            return None
        if not user.is_active:
            logger.info("Login failed: user %s is inactive", user.id)
            return None
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: bad password for user %s", user.id)
            return None

        user.update_last_login()
        self.users.update(user)

        access_token = self.tokens.issue_access_token(user.id, user.email, user.role)
        refresh_token = self.tokens.issue_refresh_token()

        logger.info("User %s logged in", user.id)
        return LoginResult(
            user_id=user.id,
            email=user.email,
            full_name=user.nickname,
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.tokens.expire_seconds,
        )
