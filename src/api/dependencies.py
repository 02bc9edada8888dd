"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import TokenIssuer, get_token_issuer
from src.services.task_service import TaskService
from src.services.user_service import UserService

security = HTTPBearer()


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service instance."""
    return TaskService(db)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    task_service: Annotated[TaskService, Depends(get_task_service)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, token_issuer, task_service)


def get_current_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> str:
    """Get the raw bearer token from the request."""
    return credentials.credentials


def get_current_user(
    token: Annotated[str, Depends(get_current_token)],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the current authenticated user from a session token on record."""
    user = user_service.find_by_token(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please authenticate",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
