from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from finance_api.core.config import settings
from finance_api.domain.entities import UserRole

logger = logging.getLogger(__name__)


class PasswordHasher:
    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        if not password or not password.strip():
            raise ValueError("Password cannot be empty.")
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            # Unknown or malformed hash.
            return False


class TokenIssuer:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_seconds: int = 3600) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expire_seconds = expire_seconds

    def issue_access_token(self, user_id, email: str, role: UserRole) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "email": email,
            "role": UserRole(role).value,
            "iat": now,
            "exp": now + timedelta(seconds=self.expire_seconds),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def issue_refresh_token(self) -> str:
        return secrets.token_urlsafe(64)

    def validate(self, token: str) -> dict[str, Any] | None:
        if not token:
            return None
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.debug("Rejected token: %s", exc)
            return None
        if not claims.get("sub"):
            return None
        return claims


password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
token_issuer = TokenIssuer(
    settings.jwt_secret,
    algorithm=settings.jwt_algorithm,
    expire_seconds=settings.jwt_expire_seconds,
)
