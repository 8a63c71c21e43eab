"""Initial schema: users, recipes, remixes, their reviews and favorites.

Revision ID: 20251019000000
Revises:
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_IMAGE_URL = "https://upload.wikimedia.org/wikipedia/commons/1/14/No_Image_Available.jpg"


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def _dish_columns() -> list[sa.Column]:
    return [
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("ingredients", sa.Text(), nullable=False),
        sa.Column("directions", sa.Text(), nullable=False),
        sa.Column("cooking_time", sa.Integer(), server_default="0", nullable=False),
        sa.Column("servings", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "image_url", sa.Text(), server_default=DEFAULT_IMAGE_URL, nullable=False
        ),
        _created_at(),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        *_dish_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipes_user_id"), "recipes", ["user_id"])
    op.create_index(op.f("ix_recipes_name"), "recipes", ["name"])

    op.create_table(
        "recipe_reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_recipe_reviews_user_id"), "recipe_reviews", ["user_id"])
    op.create_index(op.f("ix_recipe_reviews_recipe_id"), "recipe_reviews", ["recipe_id"])

    op.create_table(
        "recipe_favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_recipe_favorites_user_recipe"),
    )

    op.create_table(
        "remixes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("purpose", sa.String(length=255), nullable=False),
        *_dish_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_remixes_user_id"), "remixes", ["user_id"])
    op.create_index(op.f("ix_remixes_recipe_id"), "remixes", ["recipe_id"])

    op.create_table(
        "remix_reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("remix_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["remix_id"], ["remixes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_remix_reviews_user_id"), "remix_reviews", ["user_id"])
    op.create_index(op.f("ix_remix_reviews_remix_id"), "remix_reviews", ["remix_id"])

    op.create_table(
        "remix_favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("remix_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["remix_id"], ["remixes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "remix_id", name="uq_remix_favorites_user_remix"),
    )


def downgrade() -> None:
    op.drop_table("remix_favorites")
    op.drop_index(op.f("ix_remix_reviews_remix_id"), table_name="remix_reviews")
    op.drop_index(op.f("ix_remix_reviews_user_id"), table_name="remix_reviews")
    op.drop_table("remix_reviews")
    op.drop_index(op.f("ix_remixes_recipe_id"), table_name="remixes")
    op.drop_index(op.f("ix_remixes_user_id"), table_name="remixes")
    op.drop_table("remixes")
    op.drop_table("recipe_favorites")
    op.drop_index(op.f("ix_recipe_reviews_recipe_id"), table_name="recipe_reviews")
    op.drop_index(op.f("ix_recipe_reviews_user_id"), table_name="recipe_reviews")
    op.drop_table("recipe_reviews")
    op.drop_index(op.f("ix_recipes_name"), table_name="recipes")
    op.drop_index(op.f("ix_recipes_user_id"), table_name="recipes")
    op.drop_table("recipes")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
