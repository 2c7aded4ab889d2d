"""Per-user shopping list."""

import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cookbook.exceptions import NotFound, ValidationFailed, store_errors
from cookbook.models.shopping_list import ShoppingList, ShoppingListEntry

logger = logging.getLogger(__name__)


class ShoppingListService:
    """Service for the shopping list every user owns.

    Appends and removals are single statements against the store, so two
    concurrent requests for the same user cannot overwrite each other's
    change. Entries are never merged: adding an ingredient twice yields two
    entries.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_or_create(self, user_id: int) -> ShoppingList:
        """Get the user's list, creating it if registration left none behind."""
        with store_errors(self.db):
            shopping_list = (
                self.db.query(ShoppingList).filter(ShoppingList.owner_id == user_id).first()
            )
            if shopping_list:
                return shopping_list

            logger.info(f"Creating missing shopping list for user {user_id}")
            try:
                shopping_list = ShoppingList(owner_id=user_id)
                self.db.add(shopping_list)
                self.db.commit()
            except IntegrityError:
                # Another request created it first
                self.db.rollback()
                shopping_list = (
                    self.db.query(ShoppingList).filter(ShoppingList.owner_id == user_id).one()
                )
            return shopping_list

    def _entries(self, shopping_list_id: int) -> list[ShoppingListEntry]:
        return (
            self.db.query(ShoppingListEntry)
            .filter(ShoppingListEntry.shopping_list_id == shopping_list_id)
            .order_by(ShoppingListEntry.position)
            .all()
        )

    def get(self, user_id: int) -> list[ShoppingListEntry]:
        shopping_list = self._get_or_create(user_id)
        with store_errors(self.db):
            return self._entries(shopping_list.id)

    def add(
        self, user_id: int, ingredient_id: str, title: str, thumb: str, measure: str
    ) -> list[ShoppingListEntry]:
        """Append a snapshot of an ingredient and return the updated list."""
        shopping_list = self._get_or_create(user_id)
        list_id = shopping_list.id
        next_position = (
            select(func.coalesce(func.max(ShoppingListEntry.position), -1) + 1)
            .where(ShoppingListEntry.shopping_list_id == list_id)
            .scalar_subquery()
        )
        with store_errors(self.db):
            self.db.execute(
                insert(ShoppingListEntry).values(
                    shopping_list_id=list_id,
                    position=next_position,
                    ingredient_id=ingredient_id,
                    title=title,
                    thumb=thumb,
                    measure=measure,
                )
            )
            self.db.commit()
            return self._entries(list_id)

    def remove_at(self, user_id: int, index: int) -> list[ShoppingListEntry]:
        """Remove the entry at zero-based ``index`` and return the updated list.

        Raises:
            ValidationFailed: negative index.
            NotFound: index at or past the end of the list.
        """
        if index < 0:
            raise ValidationFailed("Index must not be negative")

        shopping_list = self._get_or_create(user_id)
        list_id = shopping_list.id
        target_id = (
            select(ShoppingListEntry.id)
            .where(ShoppingListEntry.shopping_list_id == list_id)
            .order_by(ShoppingListEntry.position)
            .offset(index)
            .limit(1)
            .scalar_subquery()
        )
        with store_errors(self.db):
            result = self.db.execute(
                delete(ShoppingListEntry)
                .where(ShoppingListEntry.id == target_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                raise NotFound("Ingredient not found")
            self.db.commit()
            return self._entries(list_id)
