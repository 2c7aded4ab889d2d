"""FastAPI dependencies for authentication, services and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cookbook.config import Settings, get_settings
from cookbook.database import get_db
from cookbook.exceptions import AuthenticationFailed
from cookbook.models.user import User
from cookbook.services.auth import TokenService, get_token_service
from cookbook.services.favorites import FavoritesService
from cookbook.services.images import ImageService
from cookbook.services.ingredients import IngredientService
from cookbook.services.mailer import MailerService
from cookbook.services.recipes import RecipeService
from cookbook.services.shopping_list import ShoppingListService
from cookbook.services.users import UserService

# auto_error is off so a missing header is rejected in the error envelope as 401
security = HTTPBearer(auto_error=False)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, tokens)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Extract the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailed()
    return credentials.credentials


def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    return users.resolve_session(token)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_favorites_service(
    db: Annotated[Session, Depends(get_db)],
) -> FavoritesService:
    return FavoritesService(db)


def get_shopping_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ShoppingListService:
    return ShoppingListService(db)


def get_ingredient_service(
    db: Annotated[Session, Depends(get_db)],
) -> IngredientService:
    return IngredientService(db)


def get_image_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ImageService:
    return ImageService(settings)


def get_mailer_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> MailerService:
    return MailerService(settings)


CurrentUser = Annotated[User, Depends(get_current_user)]
