"""Recipe and RecipeFavorite models."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from cookbook.database import Base
from cookbook.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe model.

    Recipes without an owner form the shared catalog. Recipes with an owner
    were submitted by that user and are private to them.
    """

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    category = Column(String(100), nullable=False, index=True)
    area = Column(String(100), nullable=True)
    instructions = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    thumb = Column(String(500), nullable=True)
    preview = Column(String(500), nullable=True)
    time = Column(String(50), nullable=False)
    youtube = Column(String(500), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    # [{"id": <ingredient id>, "measure": "200 g"}, ...]
    ingredients = Column(JSON, nullable=False, default=list)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Relationships
    owner = relationship("User", backref="own_recipes")
    favorite_links = relationship(
        "RecipeFavorite", back_populates="recipe", cascade="all, delete-orphan"
    )

    @property
    def favorites(self) -> list[int]:
        """IDs of users who favorited this recipe."""
        return [link.user_id for link in self.favorite_links]


class RecipeFavorite(Base):
    """Membership of a user in a recipe's favorites set."""

    __tablename__ = "recipe_favorites"
    __table_args__ = (UniqueConstraint("recipe_id", "user_id", name="uq_recipe_favorite"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="favorite_links")
