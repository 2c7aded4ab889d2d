"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from cookbook.api.dependencies import CurrentUser, get_shopping_list_service
from cookbook.schemas.shopping_list import (
    ShoppingListEnvelope,
    ShoppingListItemCreate,
    ShoppingListItemResponse,
)
from cookbook.services.shopping_list import ShoppingListService

router = APIRouter(prefix="/shopping-list", tags=["shopping list"])


def _envelope(entries, message: str | None = None) -> ShoppingListEnvelope:
    return ShoppingListEnvelope(
        status="success",
        message=message,
        ingredients=[ShoppingListItemResponse.model_validate(e) for e in entries],
    )


@router.get(
    "",
    response_model=ShoppingListEnvelope,
    responses={status.HTTP_204_NO_CONTENT: {"description": "Shopping list is empty"}},
)
async def get_shopping_list(
    current_user: CurrentUser,
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Get the current user's shopping list. Empty lists answer 204."""
    entries = shopping_list.get(current_user.id)
    if not entries:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _envelope(entries)


@router.post("/add", response_model=ShoppingListEnvelope)
async def add_ingredient(
    item: ShoppingListItemCreate,
    current_user: CurrentUser,
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Append an ingredient. The same ingredient may appear more than once."""
    entries = shopping_list.add(
        current_user.id,
        ingredient_id=item.ingredient_id,
        title=item.title,
        thumb=item.thumb,
        measure=item.measure,
    )
    return _envelope(entries, message="Ingredient added")


@router.delete("/{index}", response_model=ShoppingListEnvelope)
async def remove_ingredient(
    index: int,
    current_user: CurrentUser,
    shopping_list: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Remove the entry at a zero-based position."""
    entries = shopping_list.remove_at(current_user.id, index)
    return _envelope(entries, message="Ingredient deleted")
