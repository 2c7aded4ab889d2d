"""API endpoints for recipes submitted by the current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from cookbook.api.dependencies import CurrentUser, get_image_service, get_recipe_service
from cookbook.exceptions import NotFound
from cookbook.schemas.common import MessageResponse
from cookbook.schemas.recipe import (
    OwnRecipesEnvelope,
    OwnRecipesPage,
    RecipeCreate,
    RecipeEnvelope,
    RecipeResponse,
)
from cookbook.services.images import THUMBS_FOLDER, ImageService
from cookbook.services.pagination import Pagination, get_pagination
from cookbook.services.recipes import RecipeService

router = APIRouter(prefix="/ownRecipes", tags=["own recipes"])


@router.get("", response_model=OwnRecipesEnvelope)
async def list_own_recipes(
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
    pagination: Annotated[Pagination, Depends(get_pagination)],
):
    """List the current user's recipes, paginated."""
    result = recipes.list_own(current_user.id, pagination)
    if result.total_count == 0:
        raise NotFound("No recipes found")
    return OwnRecipesEnvelope(
        status="success",
        recipes=OwnRecipesPage(
            page=pagination.page,
            per_page=pagination.limit,
            total_pages=result.total_pages,
            total_recipes=result.total_count,
            data=[RecipeResponse.model_validate(r) for r in result.items],
        ),
    )


@router.post("/add", response_model=RecipeEnvelope, status_code=status.HTTP_201_CREATED)
async def add_own_recipe(
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
    images: Annotated[ImageService, Depends(get_image_service)],
    title: Annotated[str, Form()],
    category: Annotated[str, Form()],
    instructions: Annotated[str, Form()],
    description: Annotated[str, Form()],
    time: Annotated[str, Form()],
    ingredients: Annotated[str, Form()],
    thumb: Annotated[UploadFile | None, File()] = None,
    area: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form()] = None,
    youtube: Annotated[str | None, Form()] = None,
    preview: Annotated[str | None, Form()] = None,
):
    """Create a recipe owned by the current user.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    fields = {
        "title": title,
        "category": category,
        "instructions": instructions,
        "description": description,
        "time": time,
        "ingredients": ingredients,
        "area": area,
        "youtube": youtube,
        "preview": preview,
    }
    if tags:
        fields["tags"] = tags
    try:
        recipe_data = RecipeCreate.model_validate(fields)
    except ValidationError as e:
        # JSON-encoded form fields are checked here, not by FastAPI
        raise RequestValidationError(e.errors()) from None

    staged = await images.stage(thumb)
    thumb_url = images.publish_thumb(staged, current_user.id, recipe_data.title)

    try:
        recipe = recipes.create({**recipe_data.model_dump(), "thumb": thumb_url}, current_user.id)
    except Exception:
        images.discard_published(THUMBS_FOLDER, thumb_url)
        raise
    return RecipeEnvelope(
        status="success",
        code=status.HTTP_201_CREATED,
        message="Created",
        recipe=RecipeResponse.model_validate(recipe),
    )


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_own_recipe(
    recipe_id: int,
    current_user: CurrentUser,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete one of the current user's recipes."""
    recipes.delete(recipe_id, current_user.id)
    return MessageResponse(status="success", message="Recipe deleted")
