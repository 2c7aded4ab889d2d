"""Authentication service for JWT and password handling."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from cookbook.config import Settings, get_settings
from cookbook.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class InvalidTokenError(AuthenticationFailed):
    """Token is malformed, expired, or signed with another key."""


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    A token carries only the user id (``sub``). It does not know about the
    session token stored on the user; that check belongs to the caller that
    resolves the user.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Create a token for ``user_id`` expiring one lifetime after ``now``."""
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Validate signature and expiry and return the embedded user id.

        Raises:
            InvalidTokenError: on any malformed, expired or foreign token.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError() from None

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise InvalidTokenError() from None


def get_token_service() -> TokenService:
    """Get token service configured from settings."""
    return TokenService.from_settings(get_settings())
