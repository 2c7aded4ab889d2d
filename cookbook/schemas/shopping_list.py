"""Shopping list schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from cookbook.schemas.common import Envelope


class ShoppingListItemCreate(BaseModel):
    """Ingredient snapshot to append to the shopping list."""

    model_config = ConfigDict(populate_by_name=True)

    ingredient_id: str = Field(
        ..., min_length=1, max_length=64, validation_alias=AliasChoices("id", "_id")
    )
    title: str = Field(..., min_length=1, max_length=255)
    thumb: str = Field(..., min_length=1, max_length=500)
    measure: str = Field(..., min_length=1, max_length=100)


class ShoppingListItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(validation_alias="ingredient_id")
    title: str
    thumb: str
    measure: str


class ShoppingListEnvelope(Envelope):
    message: str | None = None
    ingredients: list[ShoppingListItemResponse]
