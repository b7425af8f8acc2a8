from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from finance_api.api.deps import get_auth_service, get_current_user
from finance_api.core.config import settings
from finance_api.domain.entities import User
from finance_api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
    UserMe,
)
from finance_api.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> RegisterResponse:
    result = auth.register(payload.email, payload.password, payload.fullName)
    if result is None:
        raise HTTPException(status_code=409, detail="Email already registered")

    return RegisterResponse(userId=result.user_id, email=result.email, fullName=result.full_name)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    result = auth.login(payload.email, payload.password)
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    # Store JWT in HttpOnly cookie so refresh doesn't lose login state.
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=result.access_token,
        httponly=True,
        secure=bool(settings.auth_cookie_secure),
        samesite=settings.auth_cookie_samesite,
        max_age=result.expires_in,
        path="/",
    )

    return LoginResponse(
        userId=result.user_id,
        email=result.email,
        fullName=result.full_name,
        accessToken=result.access_token,
        refreshToken=result.refresh_token,
        expiresIn=result.expires_in,
        tokenType=result.token_type,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(key=settings.auth_cookie_name, path="/")
    return MessageResponse(message="Logged out successfully")


# Refresh tokens are not persisted, so there is nothing to rotate yet.
@router.post("/refresh-token", response_model=MessageResponse)
def refresh_token(payload: RefreshTokenRequest) -> MessageResponse:
    return MessageResponse(message="Token refreshed successfully")


@router.get("/me", response_model=UserMe)
def me(current_user: User = Depends(get_current_user)) -> UserMe:
    return UserMe(
        userId=current_user.id,
        email=current_user.email,
        fullName=current_user.nickname,
        role=current_user.role.value,
    )
