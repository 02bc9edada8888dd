"""Authentication helpers for JWT and password handling."""

import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import get_settings

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """Spend the same time as a real verification when no user matched."""
    pwd_context.dummy_verify()


class TokenIssuer:
    """Signs and reads session tokens with a secret supplied by the caller.

    Tokens carry the user id in ``sub`` and a random ``jti`` so that two
    tokens for the same user never collide. No ``exp`` claim is set.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def sign(self, user_id: int) -> str:
        """Create a signed token for the user."""
        claims = {"sub": str(user_id), "jti": uuid.uuid4().hex}
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict | None:
        """Decode and validate a token, returning None if it is not ours."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None

    def user_id_from(self, token: str) -> int | None:
        """Extract the user id bound to a token."""
        payload = self.decode(token)
        if payload is None:
            return None
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return None


def get_token_issuer() -> TokenIssuer:
    """Build a token issuer from application settings."""
    return TokenIssuer(settings.jwt_secret, settings.jwt_algorithm)
