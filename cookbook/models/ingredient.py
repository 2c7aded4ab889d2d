"""Ingredient model."""

from sqlalchemy import Column, String, Text

from cookbook.database import Base


class Ingredient(Base):
    """Ingredient reference data."""

    __tablename__ = "ingredients"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    thumb = Column(String(500), nullable=True)
