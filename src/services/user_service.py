"""User service: account lifecycle, login and session tokens."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.user import User, UserToken
from src.schemas.user import UserCreate, UserUpdate
from src.services.auth import TokenIssuer, dummy_verify, get_password_hash, verify_password
from src.services.errors import (
    AuthenticationError,
    ConflictError,
    PersistenceError,
    ValidationError,
)
from src.services.task_service import TaskService

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts.

    Every write goes through the same ordered steps: validate the supplied
    fields, hash the password if one was supplied, then persist. Deletion
    removes the user's tasks before the user row.
    """

    def __init__(
        self,
        db: Session,
        token_issuer: TokenIssuer,
        task_service: TaskService | None = None,
    ):
        self.db = db
        self.token_issuer = token_issuer
        self.task_service = task_service or TaskService(db)

    # Lookups

    def get_user(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    # Lifecycle

    def create_user(self, data: UserCreate | Mapping[str, Any]) -> User:
        """Validate, hash and persist a new user."""
        fields = self._validate(UserCreate, data).model_dump()
        fields = self._hash_password(fields)

        user = User(**fields)
        self.db.add(user)
        self._persist(user)
        logger.info(f"Created user {user.id}")
        return user

    def update_user(self, user: User, data: UserUpdate | Mapping[str, Any]) -> User:
        """Apply the supplied fields to a user; the password is re-hashed only if given."""
        fields = self._validate(UserUpdate, data).model_dump(exclude_unset=True)
        fields = self._hash_password(fields)

        for field, value in fields.items():
            setattr(user, field, value)
        self._persist(user)
        return user

    def delete_user(self, user: User) -> int:
        """Delete the user's tasks, then the user. Returns the number of tasks removed.

        The two deletes are committed separately; if the second fails the user
        is left in place without tasks.
        """
        user_id = user.id
        deleted_tasks = self.task_service.delete_owned_tasks(user_id)

        self.db.delete(user)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to delete user") from e
        logger.info(f"Deleted user {user_id}")
        return deleted_tasks

    def register(self, data: UserCreate | Mapping[str, Any]) -> tuple[User, str]:
        """Create a user and issue their first session token."""
        user = self.create_user(data)
        token = self.generate_auth_token(user)
        return user, token

    # Session tokens

    def generate_auth_token(self, user: User) -> str:
        """Issue a session token and record it on the user.

        The token is only returned once it has been saved.
        """
        token = self.token_issuer.sign(user.id)
        user.tokens.append(UserToken(token=token))
        self._touch(user)
        self._persist(user)
        logger.info(f"Issued session token for user {user.id}")
        return token

    def find_by_token(self, token: str) -> User | None:
        """Get the user a token was issued to, if the token is still on record."""
        user_id = self.token_issuer.user_id_from(token)
        if user_id is None:
            return None
        return (
            self.db.query(User)
            .join(UserToken)
            .filter(User.id == user_id, UserToken.token == token)
            .first()
        )

    def revoke_token(self, user: User, token: str) -> None:
        """Remove a single session token (logout)."""
        user.tokens = [entry for entry in user.tokens if entry.token != token]
        self._touch(user)
        self._persist(user)

    def revoke_all_tokens(self, user: User) -> None:
        """Remove every session token (logout everywhere)."""
        user.tokens = []
        self._touch(user)
        self._persist(user)

    # Login

    def find_by_credentials(self, email: str, password: str) -> User:
        """Get the user matching an email and password.

        Raises the same AuthenticationError whether the email is unknown or the
        password is wrong.
        """
        user = self.get_user_by_email(email)
        if not user:
            dummy_verify()
            raise AuthenticationError()
        if not verify_password(password, user.password):
            raise AuthenticationError()
        return user

    # Write pipeline steps

    def _validate(self, schema: type[UserCreate] | type[UserUpdate], data: Any) -> Any:
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            raise ValidationError("Invalid user data", errors=errors) from e

    def _hash_password(self, fields: dict[str, Any]) -> dict[str, Any]:
        if fields.get("password") is not None:
            fields["password"] = get_password_hash(fields["password"])
        return fields

    def _persist(self, user: User) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to save user") from e
        self.db.refresh(user)

    def _touch(self, user: User) -> None:
        # Token rows live in their own table, so the user row is not otherwise updated
        user.updated_at = func.now()
