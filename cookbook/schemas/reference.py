"""Category and ingredient reference data schemas."""

from pydantic import BaseModel, ConfigDict, Field

from cookbook.schemas.common import Envelope


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str = Field(validation_alias="title")
    description: str | None
    thumb: str | None


class IngredientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str = Field(validation_alias="title")
    description: str | None
    thumb: str | None


class CategoriesEnvelope(Envelope):
    categories: list[CategoryResponse]


class IngredientsEnvelope(Envelope):
    ingredients: list[IngredientResponse]
