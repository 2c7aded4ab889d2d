"""Ingredient API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from cookbook.api.dependencies import CurrentUser, get_ingredient_service
from cookbook.exceptions import NotFound
from cookbook.schemas.reference import IngredientResponse, IngredientsEnvelope
from cookbook.services.ingredients import IngredientService

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("/list", response_model=IngredientsEnvelope)
async def list_ingredients(
    current_user: CurrentUser,
    ingredients: Annotated[IngredientService, Depends(get_ingredient_service)],
):
    """List all known ingredients."""
    found = ingredients.list_all()
    if not found:
        raise NotFound("No ingredients found")
    return IngredientsEnvelope(ingredients=[IngredientResponse.model_validate(i) for i in found])
