"""User model."""

from sqlalchemy import Boolean, Column, Integer, String

from cookbook.database import Base
from cookbook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    newsletter = Column(Boolean, nullable=False, default=False)
    avatar = Column(String(500), nullable=False)

    # Current session token; NULL means logged out
    token = Column(String(1000), nullable=True)

    verified = Column(Boolean, nullable=False, default=False)
    verification_token = Column(String(64), nullable=True, unique=True, index=True)
