"""Recipe data access: listing, search, details, creation, partial updates and reviews."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from remix.core.database import fetch_all, fetch_one
from remix.core.sql import build_set_clause, check_update_fields
from remix.errors import NotFoundError, raise_on_fail
from remix.models import DEFAULT_IMAGE_URL
from remix.repositories.validation import (
    DISH_COLUMNS,
    RECIPE_UPDATE_FIELDS,
    REVIEW_UPDATE_FIELDS,
    REVIEW_UPDATE_FIELDS_MESSAGE,
    check_dish_values,
    check_review_values,
    with_default_image,
)

RECIPE_SUMMARY_COLUMNS = (
    'rec.id, rec.name, u.username AS "recipeAuthor", rec.description, '
    'rec.image_url AS "imageUrl", rec.created_at AS "createdAt"'
)

RECIPE_RETURNING = (
    'id, user_id AS "userId", name, description, ingredients, directions, '
    'cooking_time AS "cookingTime", servings, image_url AS "imageUrl", created_at AS "createdAt"'
)

REVIEW_RETURNING = (
    'id AS "reviewId", user_id AS "userId", recipe_id AS "recipeId", title, content, '
    'created_at AS "createdAt"'
)


def _recipe_not_found(recipe_id: int) -> NotFoundError:
    return NotFoundError(f"The recipe with id of {recipe_id} was not found in the database.")


def _review_not_found(review_id: int) -> NotFoundError:
    return NotFoundError(f"The recipe review with id of {review_id} was not found in the database.")


class RecipeRepository:
    """SQL over the recipes and recipe_reviews tables for one session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _ensure_recipe_exists(self, recipe_id: int) -> None:
        if fetch_one(self.db, "SELECT id FROM recipes WHERE id = $1", [recipe_id]) is None:
            raise _recipe_not_found(recipe_id)

    def _ensure_user_exists(self, user_id: int) -> None:
        if fetch_one(self.db, "SELECT id FROM users WHERE id = $1", [user_id]) is None:
            raise NotFoundError(f"The user with id of {user_id} was not found in the database.")

    def get_all_recipes_basic_info(self) -> list[dict[str, Any]]:
        """Basic info of every recipe (not remixes), by name."""
        return fetch_all(
            self.db,
            f"""SELECT {RECIPE_SUMMARY_COLUMNS}
                FROM recipes rec
                JOIN users u ON u.id = rec.user_id
                ORDER BY rec.name""",
        )

    def search_recipes(self, search_term: str | None) -> list[dict[str, Any]]:
        """Recipes whose name contains search_term (case-insensitive); all recipes when term is empty."""
        if not search_term:
            return self.get_all_recipes_basic_info()
        return fetch_all(
            self.db,
            f"""SELECT {RECIPE_SUMMARY_COLUMNS}
                FROM recipes rec
                JOIN users u ON u.id = rec.user_id
                WHERE rec.name ILIKE $1
                ORDER BY rec.name""",
            [f"%{search_term}%"],
        )

    def get_remixes(self, recipe_id: int, limit: int | None = None) -> list[dict[str, Any]]:
        """Remixes of a recipe, most recent first."""
        self._ensure_recipe_exists(recipe_id)
        sql = """SELECT rem.id, rem.name, u.username AS "remixAuthor", rem.description,
                        rec.name AS "originalRecipe", rem.image_url AS "imageUrl",
                        rem.created_at AS "createdAt"
                 FROM remixes rem
                 JOIN recipes rec ON rec.id = rem.recipe_id
                 JOIN users u ON u.id = rem.user_id
                 WHERE rec.id = $1
                 ORDER BY rem.created_at DESC, rem.name"""
        values: list[Any] = [recipe_id]
        if limit is not None:
            sql += " LIMIT $2"
            values.append(limit)
        return fetch_all(self.db, sql, values)

    def get_recipe_reviews(self, recipe_id: int, limit: int | None = None) -> list[dict[str, Any]]:
        """Reviews of a recipe, most recent first."""
        self._ensure_recipe_exists(recipe_id)
        sql = """SELECT rr.id, u.username AS "reviewAuthor", rec.name AS "recipeName",
                        rr.title, rr.content, rr.created_at AS "createdAt"
                 FROM recipe_reviews rr
                 JOIN recipes rec ON rec.id = rr.recipe_id
                 JOIN users u ON u.id = rr.user_id
                 WHERE rr.recipe_id = $1
                 ORDER BY rr.created_at DESC, rr.id DESC"""
        values: list[Any] = [recipe_id]
        if limit is not None:
            sql += " LIMIT $2"
            values.append(limit)
        return fetch_all(self.db, sql, values)

    def get_recipe_details(
        self,
        recipe_id: int,
        remix_limit: int | None = None,
        review_limit: int | None = None,
    ) -> dict[str, Any]:
        """Full recipe with author, its most recent remixes and reviews."""
        recipe = fetch_one(
            self.db,
            """SELECT rec.id, u.username AS "recipeAuthor", rec.name, rec.description,
                      rec.ingredients, rec.directions, rec.cooking_time AS "cookingTime",
                      rec.servings, rec.image_url AS "imageUrl", rec.created_at AS "createdAt"
               FROM recipes rec
               JOIN users u ON u.id = rec.user_id
               WHERE rec.id = $1""",
            [recipe_id],
        )
        if recipe is None:
            raise _recipe_not_found(recipe_id)
        recipe["remixes"] = self.get_remixes(recipe_id, remix_limit)
        recipe["reviews"] = self.get_recipe_reviews(recipe_id, review_limit)
        return recipe

    def add_recipe(self, user_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a recipe authored by user_id; cookingTime, servings and imageUrl default when absent."""
        raise_on_fail(check_dish_values(data, "recipe"))
        data = with_default_image(data)
        row = fetch_one(
            self.db,
            f"""INSERT INTO recipes
                   (user_id, name, description, ingredients, directions, cooking_time, servings, image_url)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                RETURNING {RECIPE_RETURNING}""",
            [
                user_id,
                data["name"],
                data["description"],
                data["ingredients"],
                data["directions"],
                data.get("cookingTime", 0),
                data.get("servings", 0),
                data.get("imageUrl") or DEFAULT_IMAGE_URL,
            ],
        )
        self.db.commit()
        return row

    def get_recipe_author(self, recipe_id: int) -> dict[str, Any]:
        """{"username": ...} of the recipe's author. Raises NotFoundError for unknown ids."""
        author = fetch_one(
            self.db,
            """SELECT u.username
               FROM recipes rec
               JOIN users u ON u.id = rec.user_id
               WHERE rec.id = $1""",
            [recipe_id],
        )
        if author is None:
            raise _recipe_not_found(recipe_id)
        return author

    def update_recipe(self, recipe_id: int, update_payload: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a recipe; only keys present in update_payload change."""
        raise_on_fail(check_update_fields(update_payload, RECIPE_UPDATE_FIELDS))
        raise_on_fail(check_dish_values(update_payload, "recipe", updating=True))
        clause = build_set_clause(with_default_image(update_payload), DISH_COLUMNS)
        row = fetch_one(
            self.db,
            f"""UPDATE recipes
                SET {clause.set_clause}
                WHERE id = ${clause.next_index}
                RETURNING {RECIPE_RETURNING}""",
            [*clause.values, recipe_id],
        )
        if row is None:
            raise _recipe_not_found(recipe_id)
        self.db.commit()
        return row

    def get_recipe_review(self, review_id: int) -> dict[str, Any]:
        review = fetch_one(
            self.db,
            """SELECT rr.id, u.username AS "reviewAuthor", rec.name AS "recipeName",
                      rr.recipe_id AS "recipeId", rr.title, rr.content, rr.created_at AS "createdAt"
               FROM recipe_reviews rr
               JOIN recipes rec ON rec.id = rr.recipe_id
               JOIN users u ON u.id = rr.user_id
               WHERE rr.id = $1""",
            [review_id],
        )
        if review is None:
            raise _review_not_found(review_id)
        return review

    def get_review_author(self, review_id: int) -> dict[str, Any]:
        """{"username": ...} of the review's author. Raises NotFoundError for unknown ids."""
        author = fetch_one(
            self.db,
            """SELECT u.username
               FROM recipe_reviews rr
               JOIN users u ON u.id = rr.user_id
               WHERE rr.id = $1""",
            [review_id],
        )
        if author is None:
            raise _review_not_found(review_id)
        return author

    def add_review(self, user_id: int, recipe_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        raise_on_fail(check_review_values(data))
        self._ensure_user_exists(user_id)
        self._ensure_recipe_exists(recipe_id)
        row = fetch_one(
            self.db,
            f"""INSERT INTO recipe_reviews (user_id, recipe_id, title, content)
                VALUES ($1, $2, $3, $4)
                RETURNING {REVIEW_RETURNING}""",
            [user_id, recipe_id, data["title"], data["content"]],
        )
        self.db.commit()
        return row

    def update_review(self, review_id: int, update_payload: Mapping[str, Any]) -> dict[str, Any]:
        raise_on_fail(
            check_update_fields(update_payload, REVIEW_UPDATE_FIELDS, REVIEW_UPDATE_FIELDS_MESSAGE)
        )
        raise_on_fail(check_review_values(update_payload, updating=True))
        clause = build_set_clause(update_payload)
        row = fetch_one(
            self.db,
            f"""UPDATE recipe_reviews
                SET {clause.set_clause}
                WHERE id = ${clause.next_index}
                RETURNING {REVIEW_RETURNING}""",
            [*clause.values, review_id],
        )
        if row is None:
            raise _review_not_found(review_id)
        self.db.commit()
        return row
