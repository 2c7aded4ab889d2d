"""Favorites: the set of users who favorited each recipe."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cookbook.exceptions import store_errors
from cookbook.models.recipe import Recipe, RecipeFavorite
from cookbook.services.ownership import authorize_read, require_found
from cookbook.services.pagination import PageResult, Pagination

logger = logging.getLogger(__name__)


class FavoritesService:
    """Service for favorite recipes.

    Membership has set semantics: adding twice or removing an absent user
    both succeed without changing anything.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_recipe(self, recipe_id: int, user_id: int) -> Recipe:
        with store_errors(self.db):
            recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        recipe = require_found(recipe, "Recipe not found")
        authorize_read(recipe, user_id)
        return recipe

    def _link(self, recipe_id: int, user_id: int) -> RecipeFavorite | None:
        return (
            self.db.query(RecipeFavorite)
            .filter(RecipeFavorite.recipe_id == recipe_id, RecipeFavorite.user_id == user_id)
            .first()
        )

    def add(self, recipe_id: int, user_id: int) -> Recipe:
        recipe = self._get_recipe(recipe_id, user_id)
        with store_errors(self.db):
            if self._link(recipe.id, user_id) is None:
                try:
                    self.db.add(RecipeFavorite(recipe_id=recipe.id, user_id=user_id))
                    self.db.commit()
                except IntegrityError:
                    # A concurrent request inserted the same pair first
                    self.db.rollback()
            self.db.refresh(recipe)
        return recipe

    def remove(self, recipe_id: int, user_id: int) -> Recipe:
        recipe = self._get_recipe(recipe_id, user_id)
        with store_errors(self.db):
            self.db.query(RecipeFavorite).filter(
                RecipeFavorite.recipe_id == recipe.id, RecipeFavorite.user_id == user_id
            ).delete(synchronize_session=False)
            self.db.commit()
            self.db.refresh(recipe)
        return recipe

    def list_for_user(self, user_id: int, pagination: Pagination) -> PageResult:
        """Page through the user's favorites.

        The favorited ids are collected first so the total count and the page
        come from the same base query.
        """
        with store_errors(self.db):
            recipe_ids = [
                recipe_id
                for (recipe_id,) in self.db.query(RecipeFavorite.recipe_id)
                .filter(RecipeFavorite.user_id == user_id)
                .order_by(RecipeFavorite.recipe_id)
                .all()
            ]
            recipes = []
            if not pagination.is_past_end(len(recipe_ids)):
                recipes = (
                    self.db.query(Recipe)
                    .filter(Recipe.id.in_(recipe_ids))
                    .order_by(Recipe.id)
                    .offset(pagination.offset)
                    .limit(pagination.limit)
                    .all()
                )
        return PageResult(items=recipes, total_count=len(recipe_ids), pagination=pagination)
