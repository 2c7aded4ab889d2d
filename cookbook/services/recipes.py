"""Recipe catalog and user-submitted recipes."""

import logging
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from cookbook.exceptions import store_errors
from cookbook.models.category import Category
from cookbook.models.recipe import Recipe, RecipeFavorite
from cookbook.services.ownership import authorize_delete, authorize_read, require_found
from cookbook.services.pagination import PageResult, Pagination

logger = logging.getLogger(__name__)

# Curated sections of the main page, in display order
MAIN_PAGE_CATEGORIES = ["Breakfast", "Miscellaneous", "Chicken", "Desserts"]
MAIN_PAGE_LIMIT = 4
POPULAR_LIMIT = 4


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecipeService:
    """Service for recipe-related operations.

    Catalog recipes (no owner) are visible to everybody. A recipe with an
    owner is visible only to that owner, so every listing that can contain
    user recipes is filtered by the viewer.
    """

    def __init__(self, db: Session):
        self.db = db

    def _visible_to(self, user_id: int):
        return or_(Recipe.owner_id.is_(None), Recipe.owner_id == user_id)

    def list_categories(self) -> list[Category]:
        with store_errors(self.db):
            return self.db.query(Category).order_by(Category.title).all()

    def list_by_category(self, category: str, user_id: int) -> list[Recipe]:
        """All recipes in ``category``. Unknown categories simply match nothing."""
        with store_errors(self.db):
            return (
                self.db.query(Recipe)
                .filter(Recipe.category == category, self._visible_to(user_id))
                .order_by(Recipe.id)
                .all()
            )

    def list_popular(self, user_id: int) -> list[Recipe]:
        """Up to four recipes with the most favorites (at least one)."""
        favorite_count = func.count(RecipeFavorite.id)
        with store_errors(self.db):
            return (
                self.db.query(Recipe)
                .join(RecipeFavorite, RecipeFavorite.recipe_id == Recipe.id)
                .filter(self._visible_to(user_id))
                .group_by(Recipe.id)
                .order_by(favorite_count.desc(), Recipe.id)
                .limit(POPULAR_LIMIT)
                .all()
            )

    def main_page(self, user_id: int) -> dict[str, list[Recipe]]:
        """Up to four recipes for each curated category, looked up independently."""
        result = {}
        with store_errors(self.db):
            for category in MAIN_PAGE_CATEGORIES:
                result[category] = (
                    self.db.query(Recipe)
                    .filter(Recipe.category == category, self._visible_to(user_id))
                    .order_by(Recipe.id)
                    .limit(MAIN_PAGE_LIMIT)
                    .all()
                )
        return result

    def search_by_title(self, query: str) -> list[Recipe]:
        """Case-insensitive substring search over catalog recipes only."""
        pattern = f"%{_escape_like(query)}%"
        with store_errors(self.db):
            return (
                self.db.query(Recipe)
                .filter(Recipe.title.ilike(pattern, escape="\\"), Recipe.owner_id.is_(None))
                .order_by(Recipe.title)
                .all()
            )

    def get(self, recipe_id: int, user_id: int) -> Recipe:
        """Get a recipe the user may see. 404 before 403."""
        with store_errors(self.db):
            recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        recipe = require_found(recipe)
        authorize_read(recipe, user_id)
        return recipe

    def create(self, data: dict[str, Any], owner_id: int) -> Recipe:
        """Persist a user-submitted recipe owned by ``owner_id``."""
        recipe = Recipe(
            title=data["title"],
            category=data["category"],
            area=data.get("area"),
            instructions=data["instructions"],
            description=data["description"],
            thumb=data.get("thumb"),
            preview=data.get("preview"),
            time=data["time"],
            youtube=data.get("youtube"),
            tags=data.get("tags") or [],
            ingredients=data.get("ingredients") or [],
            owner_id=owner_id,
        )
        with store_errors(self.db):
            self.db.add(recipe)
            self.db.commit()
            self.db.refresh(recipe)
        logger.info(f"User {owner_id} created recipe {recipe.id}")
        return recipe

    def delete(self, recipe_id: int, user_id: int) -> None:
        """Delete a recipe owned by the user. Catalog recipes cannot be deleted."""
        with store_errors(self.db):
            recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        recipe = require_found(recipe)
        authorize_delete(recipe, user_id)
        with store_errors(self.db):
            self.db.delete(recipe)
            self.db.commit()
        logger.info(f"User {user_id} deleted recipe {recipe_id}")

    def list_own(self, owner_id: int, pagination: Pagination) -> PageResult:
        base = self.db.query(Recipe).filter(Recipe.owner_id == owner_id)
        with store_errors(self.db):
            total = base.count()
            if pagination.is_past_end(total):
                return PageResult(items=[], total_count=total, pagination=pagination)
            recipes = (
                base.order_by(Recipe.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
                .all()
            )
        return PageResult(items=recipes, total_count=total, pagination=pagination)
