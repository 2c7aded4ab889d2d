"""User accounts: registration, sessions, verification and profile updates."""

import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cookbook.config import get_settings
from cookbook.exceptions import AuthenticationFailed, Conflict, NotFound, store_errors
from cookbook.models.shopping_list import ShoppingList
from cookbook.models.user import User
from cookbook.services.auth import TokenService, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts.

    Each user holds at most one live session token. Registration and sign-in
    overwrite it, logout clears it, and ``resolve_session`` only accepts the
    token currently stored.
    """

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens

    def get_by_id(self, user_id: int) -> User | None:
        with store_errors(self.db):
            return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        with store_errors(self.db):
            return self.db.query(User).filter(User.email == email.lower()).first()

    def register(
        self, name: str, email: str, password: str, newsletter: bool = False
    ) -> tuple[User, str]:
        """Create a user and their empty shopping list in one transaction.

        Returns the user and the session token issued for them.

        Raises:
            Conflict: the email is already registered.
        """
        if self.get_by_email(email):
            raise Conflict("Email is already in use")

        user = User(
            name=name,
            email=email.lower(),
            password_hash=get_password_hash(password),
            newsletter=newsletter,
            avatar=get_settings().default_avatar_url,
            verification_token=secrets.token_hex(16),
        )
        with store_errors(self.db):
            try:
                self.db.add(user)
                self.db.flush()  # Get user.id
                self.db.add(ShoppingList(owner_id=user.id))
                token = self.tokens.issue(user.id)
                user.token = token
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise Conflict("Email is already in use") from None
            self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, token

    def sign_in(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and start a new session, replacing any previous one."""
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationFailed("Incorrect email or password")

        token = self.tokens.issue(user.id)
        with store_errors(self.db):
            user.token = token
            self.db.commit()
            self.db.refresh(user)
        return user, token

    def logout(self, user: User) -> None:
        with store_errors(self.db):
            user.token = None
            self.db.commit()

    def resolve_session(self, token: str) -> User:
        """Return the user a bearer token belongs to.

        The token must verify and must also be the user's current session
        token, so tokens replaced by a later sign-in or cleared by logout are
        rejected even before they expire.
        """
        user_id = self.tokens.verify(token)
        user = self.get_by_id(user_id)
        if user is None:
            raise AuthenticationFailed("User not found")
        if user.token is None or not secrets.compare_digest(user.token, token):
            logger.debug(f"Stale session token presented for user {user.id}")
            raise AuthenticationFailed()
        return user

    def verify_account(self, verification_token: str) -> User:
        with store_errors(self.db):
            user = (
                self.db.query(User)
                .filter(User.verification_token == verification_token)
                .first()
            )
            if user is None:
                raise NotFound("Verification token is invalid or user does not exist")
            user.verified = True
            user.verification_token = None
            self.db.commit()
            self.db.refresh(user)
        return user

    def update_name(self, user: User, name: str) -> User:
        with store_errors(self.db):
            user.name = name
            self.db.commit()
            self.db.refresh(user)
        return user

    def update_avatar(self, user: User, avatar_url: str) -> User:
        with store_errors(self.db):
            user.avatar = avatar_url
            self.db.commit()
            self.db.refresh(user)
        return user
