"""ORM models for remixes (forks of recipes), remix reviews and remix favorites."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from remix.models.base import Base
from remix.models.recipe import DEFAULT_IMAGE_URL


class Remix(Base):
    """
    A user's variation of an existing recipe.

    purpose states why the recipe was remixed. user_id is the remix author,
    recipe_id the original recipe.
    """

    __tablename__ = "remixes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    purpose = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=False)
    ingredients = Column(Text, nullable=False)
    directions = Column(Text, nullable=False)
    cooking_time = Column(Integer, nullable=False, default=0, server_default="0")
    servings = Column(Integer, nullable=False, default=0, server_default="0")
    image_url = Column(Text, nullable=False, default=DEFAULT_IMAGE_URL)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class RemixReview(Base):
    __tablename__ = "remix_reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    remix_id = Column(
        Integer, ForeignKey("remixes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class RemixFavorite(Base):
    __tablename__ = "remix_favorites"
    __table_args__ = (UniqueConstraint("user_id", "remix_id", name="uq_remix_favorites_user_remix"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    remix_id = Column(Integer, ForeignKey("remixes.id", ondelete="CASCADE"), nullable=False)
