"""User model."""

from sqlalchemy import Column, ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User account: credentials, profile and issued session tokens.

    ``password`` only ever holds a bcrypt hash once flushed; hashing is done by
    ``UserService`` before each persist that changes it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False, default=0)
    avatar = Column(LargeBinary, nullable=True)  # raw image bytes

    # Relationships
    tokens = relationship(
        "UserToken",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserToken.id",
    )

    @property
    def token_values(self) -> list[str]:
        """Issued session tokens in issuance order."""
        return [entry.token for entry in self.tokens]


class UserToken(Base):
    """A session token issued to a user at login or registration."""

    __tablename__ = "user_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(512), nullable=False)

    # Relationships
    user = relationship("User", back_populates="tokens")
