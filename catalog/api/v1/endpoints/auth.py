from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_auth_service
from catalog.enums import AccountRole
from catalog.schemas import (
    AccountRead,
    ApiResponse,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)
from catalog.security import TokenPayload, access_token_dependency
from catalog.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a shopper account",
)
async def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    token = await service.register(payload)
    return ApiResponse(message="Account registered successfully", data=token)


@router.post(
    "/admin/register",
    response_model=ApiResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register an admin account (when enabled)",
)
async def register_admin(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    token = await service.register(payload, role=AccountRole.ADMIN)
    return ApiResponse(message="Admin registered successfully", data=token)


@router.post("/login", response_model=ApiResponse[TokenResponse], summary="Log in")
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    token = await service.login(payload)
    return ApiResponse(message="Login successful", data=token)


@router.get("/me", response_model=ApiResponse[AccountRead], summary="Current account")
async def me(
    token: TokenPayload = Depends(access_token_dependency),
    service: AuthService = Depends(get_auth_service),
):
    account = await service.get_account(token.account_id)
    return ApiResponse(message="Account fetched successfully", data=account)


@router.post("/password/reset", response_model=ApiResponse[None], summary="Change password")
async def reset_password(
    payload: PasswordResetRequest,
    token: TokenPayload = Depends(access_token_dependency),
    service: AuthService = Depends(get_auth_service),
):
    await service.reset_password(token.account_id, payload)
    return ApiResponse(message="Password updated successfully")
