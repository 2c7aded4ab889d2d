"""Category model."""

from sqlalchemy import Column, String, Text

from cookbook.database import Base


class Category(Base):
    """Named grouping used to filter the recipe catalog (reference data)."""

    __tablename__ = "categories"

    id = Column(String(64), primary_key=True)
    title = Column(String(100), unique=True, nullable=False)
    thumb = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
