"""SQLAlchemy models."""

from cookbook.models.category import Category
from cookbook.models.ingredient import Ingredient
from cookbook.models.recipe import Recipe, RecipeFavorite
from cookbook.models.shopping_list import ShoppingList, ShoppingListEntry
from cookbook.models.user import User

__all__ = [
    "User",
    "Recipe",
    "RecipeFavorite",
    "Category",
    "Ingredient",
    "ShoppingList",
    "ShoppingListEntry",
]
