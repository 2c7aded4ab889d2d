"""Pydantic schemas for API requests and responses."""

from cookbook.schemas.auth import (
    AuthResponse,
    UserEnvelope,
    UserLogin,
    UserNameUpdate,
    UserRegister,
    UserResponse,
)
from cookbook.schemas.common import Envelope, MessageResponse
from cookbook.schemas.recipe import RecipeCreate, RecipeResponse
from cookbook.schemas.shopping_list import ShoppingListItemCreate, ShoppingListItemResponse

__all__ = [
    "Envelope",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "UserNameUpdate",
    "UserResponse",
    "AuthResponse",
    "UserEnvelope",
    "RecipeCreate",
    "RecipeResponse",
    "ShoppingListItemCreate",
    "ShoppingListItemResponse",
]
