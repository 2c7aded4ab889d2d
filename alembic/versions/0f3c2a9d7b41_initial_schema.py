"""Initial schema

Revision ID: 0f3c2a9d7b41
Revises:
Create Date: 2026-10-18 10:12:44.018233

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0f3c2a9d7b41"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("newsletter", sa.Boolean(), nullable=False),
        sa.Column("avatar", sa.String(length=500), nullable=False),
        sa.Column("token", sa.String(length=1000), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("verification_token", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(
        op.f("ix_users_verification_token"), "users", ["verification_token"], unique=True
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("thumb", sa.String(length=500), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title"),
    )

    op.create_table(
        "ingredients",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumb", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title"),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("area", sa.String(length=100), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("thumb", sa.String(length=500), nullable=True),
        sa.Column("preview", sa.String(length=500), nullable=True),
        sa.Column("time", sa.String(length=50), nullable=False),
        sa.Column("youtube", sa.String(length=500), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipes_id"), "recipes", ["id"], unique=False)
    op.create_index(op.f("ix_recipes_title"), "recipes", ["title"], unique=False)
    op.create_index(op.f("ix_recipes_category"), "recipes", ["category"], unique=False)
    op.create_index(op.f("ix_recipes_owner_id"), "recipes", ["owner_id"], unique=False)

    op.create_table(
        "recipe_favorites",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("recipe_id", "user_id", name="uq_recipe_favorite"),
    )
    op.create_index(op.f("ix_recipe_favorites_id"), "recipe_favorites", ["id"], unique=False)
    op.create_index(
        op.f("ix_recipe_favorites_recipe_id"), "recipe_favorites", ["recipe_id"], unique=False
    )
    op.create_index(
        op.f("ix_recipe_favorites_user_id"), "recipe_favorites", ["user_id"], unique=False
    )

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_shopping_lists_id"), "shopping_lists", ["id"], unique=False)
    op.create_index(
        op.f("ix_shopping_lists_owner_id"), "shopping_lists", ["owner_id"], unique=True
    )

    op.create_table(
        "shopping_list_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("shopping_list_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("ingredient_id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("thumb", sa.String(length=500), nullable=False),
        sa.Column("measure", sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(["shopping_list_id"], ["shopping_lists.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("shopping_list_id", "position", name="uq_shopping_list_position"),
    )
    op.create_index(
        op.f("ix_shopping_list_entries_id"), "shopping_list_entries", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_shopping_list_entries_shopping_list_id"),
        "shopping_list_entries",
        ["shopping_list_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_table("shopping_list_entries")
    op.drop_table("shopping_lists")
    op.drop_table("recipe_favorites")
    op.drop_table("recipes")
    op.drop_table("ingredients")
    op.drop_table("categories")
    op.drop_table("users")
