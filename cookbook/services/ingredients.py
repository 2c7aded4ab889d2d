"""Ingredient lookup."""

from sqlalchemy.orm import Session

from cookbook.exceptions import store_errors
from cookbook.models.ingredient import Ingredient


class IngredientService:
    """Read-only access to ingredient reference data."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Ingredient]:
        with store_errors(self.db):
            return self.db.query(Ingredient).order_by(Ingredient.title).all()
