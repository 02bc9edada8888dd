"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_token, get_current_user, get_user_service
from src.models.user import User
from src.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    user, access_token = user_service.register(user_data)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    user = user_service.find_by_credentials(credentials.email, credentials.password)
    access_token = user_service.generate_auth_token(user)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout")
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
    token: Annotated[str, Depends(get_current_token)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Logout this session by discarding its token."""
    user_service.revoke_token(current_user, token)
    return {"message": "Logged out successfully"}


@router.post("/logout-all")
async def logout_all(
    current_user: Annotated[User, Depends(get_current_user)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Logout every session of the current user."""
    user_service.revoke_all_tokens(current_user)
    return {"message": "Logged out of all sessions"}
