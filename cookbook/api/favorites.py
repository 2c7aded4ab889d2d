"""Favorite recipes API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cookbook.api.dependencies import CurrentUser, get_favorites_service
from cookbook.exceptions import NotFound
from cookbook.schemas.recipe import (
    FavoriteChangeEnvelope,
    FavoriteRecipe,
    FavoriteRequest,
    FavoritesEnvelope,
    RecipeResponse,
)
from cookbook.services.favorites import FavoritesService
from cookbook.services.pagination import Pagination, get_pagination

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoritesEnvelope)
async def list_favorites(
    current_user: CurrentUser,
    favorites: Annotated[FavoritesService, Depends(get_favorites_service)],
    pagination: Annotated[Pagination, Depends(get_pagination)],
):
    """List the current user's favorite recipes, paginated.

    404 when the user has no favorites at all; a page past the end is an
    empty 200.
    """
    result = favorites.list_for_user(current_user.id, pagination)
    if result.total_count == 0:
        raise NotFound("No favorites found")
    return FavoritesEnvelope(
        total_pages=result.total_pages,
        data=[FavoriteRecipe.model_validate(r) for r in result.items],
    )


@router.post("/add", response_model=FavoriteChangeEnvelope)
async def add_favorite(
    data: FavoriteRequest,
    current_user: CurrentUser,
    favorites: Annotated[FavoritesService, Depends(get_favorites_service)],
):
    """Add a recipe to favorites. Adding twice is harmless."""
    recipe = favorites.add(data.recipe_id, current_user.id)
    return FavoriteChangeEnvelope(
        message="Recipe added to favorites", data=RecipeResponse.model_validate(recipe)
    )


@router.delete("/delete", response_model=FavoriteChangeEnvelope)
async def remove_favorite(
    data: FavoriteRequest,
    current_user: CurrentUser,
    favorites: Annotated[FavoritesService, Depends(get_favorites_service)],
):
    """Remove a recipe from favorites. Removing an absent favorite is harmless."""
    favorites.remove(data.recipe_id, current_user.id)
    return FavoriteChangeEnvelope(message="Recipe deleted from favorites")
