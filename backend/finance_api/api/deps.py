from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from finance_api.core.config import settings
from finance_api.core.security import PasswordHasher, TokenIssuer, password_hasher, token_issuer
from finance_api.db.session import SessionLocal
from finance_api.domain.entities import User
from finance_api.repositories.categories import SqlAlchemyCategoryStore
from finance_api.repositories.transactions import SqlAlchemyTransactionStore
from finance_api.repositories.users import SqlAlchemyUserStore
from finance_api.services.auth import AuthService
from finance_api.services.categories import CategoryService
from finance_api.services.projection import BalanceProjectionService
from finance_api.services.transactions import TransactionService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Process-wide collaborators; overridable in tests via app.dependency_overrides.
def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(SqlAlchemyUserStore(db), hasher, tokens)


def get_transaction_service(db: Session = Depends(get_db)) -> TransactionService:
    return TransactionService(
        SqlAlchemyTransactionStore(db),
        SqlAlchemyCategoryStore(db),
        default_currency=settings.default_currency,
    )


def get_projection_service(db: Session = Depends(get_db)) -> BalanceProjectionService:
    return BalanceProjectionService(SqlAlchemyTransactionStore(db), default_currency=settings.default_currency)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(SqlAlchemyCategoryStore(db))


def get_current_user(
    request: Request,
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> User:
    token: str | None = None
    if cred and cred.credentials:
        token = cred.credentials
    else:
        token = request.cookies.get(settings.auth_cookie_name)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = tokens.validate(token)
    if claims is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = SqlAlchemyUserStore(db).get_by_id(user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User inactive")
    return user
