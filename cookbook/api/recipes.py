"""Recipe catalog API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cookbook.api.dependencies import CurrentUser, get_recipe_service
from cookbook.exceptions import NotFound
from cookbook.schemas.recipe import (
    MainPageEnvelope,
    PopularRecipesEnvelope,
    RecipeCard,
    RecipeEnvelope,
    RecipeListEnvelope,
    RecipeResponse,
    RecipeSearchHit,
    SearchEnvelope,
)
from cookbook.schemas.reference import CategoriesEnvelope, CategoryResponse
from cookbook.services.recipes import RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


# --- Static routes first (before /{recipe_id}) ---


@router.get("/category-list", response_model=CategoriesEnvelope)
async def list_categories(
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """List all recipe categories."""
    categories = recipes.list_categories()
    if not categories:
        raise NotFound("No categories found")
    return CategoriesEnvelope(
        categories=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.get("/category/{category}", response_model=RecipeListEnvelope)
async def list_category_recipes(
    category: str,
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """List every recipe in a category."""
    found = recipes.list_by_category(category, current_user.id)
    if not found:
        raise NotFound("No recipes found")
    return RecipeListEnvelope(data=[RecipeResponse.model_validate(r) for r in found])


@router.get("/popular-recipe", response_model=PopularRecipesEnvelope)
async def list_popular_recipes(
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get the most favorited recipes."""
    popular = recipes.list_popular(current_user.id)
    if not popular:
        raise NotFound("No popular recipes found")
    return PopularRecipesEnvelope(recipes=[RecipeCard.model_validate(r) for r in popular])


@router.get("/main-page", response_model=MainPageEnvelope)
async def get_main_page(
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a few recipes for each category featured on the main page."""
    sections = recipes.main_page(current_user.id)
    if not any(sections.values()):
        raise NotFound("No recipes found")
    return MainPageEnvelope(
        status="success",
        recipes={
            category: [RecipeResponse.model_validate(r) for r in found]
            for category, found in sections.items()
        },
    )


@router.get("/search", response_model=SearchEnvelope)
async def search_recipes(
    q: Annotated[str, Query(min_length=1, max_length=255)],
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Search catalog recipes by title."""
    found = recipes.search_by_title(q)
    if not found:
        raise NotFound("No recipes found")
    return SearchEnvelope(status="success", data=[RecipeSearchHit.model_validate(r) for r in found])


# --- Dynamic routes ---


@router.get("/{recipe_id}", response_model=RecipeEnvelope)
async def get_recipe(
    recipe_id: int,
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a recipe by id. Recipes owned by other users are forbidden."""
    recipe = recipes.get(recipe_id, current_user.id)
    return RecipeEnvelope(status="success", recipe=RecipeResponse.model_validate(recipe))
