"""Recipe schemas."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cookbook.schemas.common import Envelope

# --- Recipe ---


class RecipeIngredientRef(BaseModel):
    """Ingredient used by a recipe: reference plus amount."""

    id: str = Field(..., min_length=1, max_length=64)
    measure: str = Field("", max_length=100)


class RecipeCreate(BaseModel):
    """User-submitted recipe fields (multipart form, thumb uploaded separately)."""

    title: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    instructions: str = Field(..., min_length=1, max_length=50000)
    description: str = Field(..., min_length=1, max_length=2000)
    time: str = Field(..., min_length=1, max_length=50)
    ingredients: list[RecipeIngredientRef] = Field(..., min_length=1)
    area: str | None = Field(None, max_length=100)
    tags: list[str] = []
    youtube: str | None = Field(None, max_length=500)
    preview: str | None = Field(None, max_length=500)

    @field_validator("ingredients", "tags", mode="before")
    @classmethod
    def parse_json_list(cls, value: Any) -> Any:
        """Form fields arrive as JSON text."""
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                raise ValueError("must be a JSON array") from None
        return value


class RecipeResponse(BaseModel):
    """Full recipe."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    category: str
    area: str | None
    instructions: str
    description: str
    thumb: str | None
    preview: str | None
    time: str
    youtube: str | None
    tags: list[str]
    ingredients: list[RecipeIngredientRef]
    favorites: list[int]
    owner: int | None = Field(validation_alias="owner_id")


class RecipeCard(BaseModel):
    """Recipe teaser used by the popular list."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    thumb: str | None


class FavoriteRecipe(RecipeCard):
    """Recipe teaser used by the favorites list."""

    time: str


class RecipeSearchHit(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    thumb: str | None


# --- Envelopes ---


class RecipeEnvelope(Envelope):
    message: str | None = None
    recipe: RecipeResponse


class RecipeListEnvelope(Envelope):
    data: list[RecipeResponse]


class PopularRecipesEnvelope(Envelope):
    recipes: list[RecipeCard]


class MainPageEnvelope(Envelope):
    recipes: dict[str, list[RecipeResponse]]


class SearchEnvelope(Envelope):
    data: list[RecipeSearchHit]


class OwnRecipesPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    per_page: int = Field(alias="perPage")
    total_pages: int = Field(alias="totalPages")
    total_recipes: int = Field(alias="totalRecipes")
    data: list[RecipeResponse]


class OwnRecipesEnvelope(Envelope):
    recipes: OwnRecipesPage


# --- Favorites ---


class FavoriteRequest(BaseModel):
    """Body of favorite add/remove."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: int = Field(validation_alias="recipeId")


class FavoritesEnvelope(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    total_pages: int = Field(alias="totalPages")
    data: list[FavoriteRecipe]


class FavoriteChangeEnvelope(Envelope):
    message: str
    data: RecipeResponse | None = None
