"""/auth - registration, login, token refresh and the caller's profile"""

from fastapi import APIRouter, Depends, status

from university_erp.api.dependencies import get_auth_service, get_current_user
from university_erp.api.v1.schemas.auth import (
    AuthPayload,
    LoginRequest,
    MeSchema,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserSchema,
)
from university_erp.api.v1.schemas.common import ApiResponse, ok
from university_erp.infrastructure.security import CurrentUser
from university_erp.services.auth import AuthService

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create an account and return a token pair"""
    user, tokens = service.register(body)
    return ok({"user": user, "tokens": tokens}, "User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthPayload])
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    user, tokens = service.login(body.email, body.password)
    return ok({"user": user, "tokens": tokens}, "Login successful")


@router.post("/refresh", response_model=ApiResponse[TokenPair])
def refresh(body: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    return ok(service.refresh(body.refresh_token), "Token refreshed")


@router.get("/me", response_model=ApiResponse[UserSchema])
def me(current_user: CurrentUser = Depends(get_current_user), service: AuthService = Depends(get_auth_service)):
    return ok(service.get_profile(current_user.id))


@router.get("/me/permissions", response_model=ApiResponse[MeSchema])
def my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    return ok(
        {
            "id": current_user.id,
            "email": current_user.email,
            "role": current_user.role,
            "permissions": sorted(current_user.permissions),
        }
    )
