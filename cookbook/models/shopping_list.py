"""ShoppingList and ShoppingListEntry models."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from cookbook.database import Base
from cookbook.models.mixins import TimestampMixin


class ShoppingList(Base, TimestampMixin):
    """The single shopping list owned by a user."""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    # Relationships
    owner = relationship("User")
    entries = relationship(
        "ShoppingListEntry",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListEntry.position",
    )


class ShoppingListEntry(Base):
    """Snapshot of an ingredient taken when it was added to a shopping list.

    Title, thumb and measure are copied, not referenced, so later changes to
    the ingredient catalog never alter a list.
    """

    __tablename__ = "shopping_list_entries"
    __table_args__ = (
        UniqueConstraint("shopping_list_id", "position", name="uq_shopping_list_position"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(
        Integer, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    ingredient_id = Column(String(64), nullable=False)
    title = Column(String(255), nullable=False)
    thumb = Column(String(500), nullable=False)
    measure = Column(String(100), nullable=False)

    # Relationships
    shopping_list = relationship("ShoppingList", back_populates="entries")
