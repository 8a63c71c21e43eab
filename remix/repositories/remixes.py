"""Remix data access: details, creation from a recipe, partial updates and remix reviews."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from remix.core.database import fetch_all, fetch_one
from remix.core.sql import build_set_clause, check_update_fields
from remix.errors import NotFoundError, raise_on_fail
from remix.models import DEFAULT_IMAGE_URL
from remix.repositories.validation import (
    DISH_COLUMNS,
    REMIX_UPDATE_FIELDS,
    REVIEW_UPDATE_FIELDS,
    REVIEW_UPDATE_FIELDS_MESSAGE,
    check_dish_values,
    check_review_values,
    with_default_image,
)

REMIX_RETURNING = (
    'id, user_id AS "userId", recipe_id AS "recipeId", purpose, name, description, '
    'ingredients, directions, cooking_time AS "cookingTime", servings, '
    'image_url AS "imageUrl", created_at AS "createdAt"'
)

REVIEW_RETURNING = (
    'id AS "reviewId", user_id AS "userId", remix_id AS "remixId", title, content, '
    'created_at AS "createdAt"'
)


def _remix_not_found(remix_id: int) -> NotFoundError:
    return NotFoundError(f"The remix with id of {remix_id} was not found in the database.")


def _review_not_found(review_id: int) -> NotFoundError:
    return NotFoundError(f"The remix review of id {review_id} was not found in the database.")


class RemixRepository:
    """SQL over the remixes and remix_reviews tables for one session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _ensure_remix_exists(self, remix_id: int) -> None:
        if fetch_one(self.db, "SELECT id FROM remixes WHERE id = $1", [remix_id]) is None:
            raise _remix_not_found(remix_id)

    def get_remix_reviews(self, remix_id: int, limit: int | None = None) -> list[dict[str, Any]]:
        """Reviews of a remix, most recently added first."""
        self._ensure_remix_exists(remix_id)
        sql = """SELECT rr.id, u.username AS "reviewAuthor", rem.name AS "remixName",
                        rr.title, rr.content, rr.created_at AS "createdAt"
                 FROM remix_reviews rr
                 JOIN remixes rem ON rem.id = rr.remix_id
                 JOIN users u ON u.id = rr.user_id
                 WHERE rr.remix_id = $1
                 ORDER BY rr.created_at DESC, rr.id DESC"""
        values: list[Any] = [remix_id]
        if limit is not None:
            sql += " LIMIT $2"
            values.append(limit)
        return fetch_all(self.db, sql, values)

    def get_remix_details(self, remix_id: int, review_limit: int | None = None) -> dict[str, Any]:
        """Full remix with its author, the original recipe's name and reviews."""
        remix = fetch_one(
            self.db,
            """SELECT rem.id, u.username AS "remixAuthor", rem.purpose, rem.name, rem.description,
                      rec.id AS "originalRecipeId", rec.name AS "originalRecipe",
                      rem.ingredients, rem.directions, rem.cooking_time AS "cookingTime",
                      rem.servings, rem.image_url AS "imageUrl", rem.created_at AS "createdAt"
               FROM remixes rem
               JOIN recipes rec ON rec.id = rem.recipe_id
               JOIN users u ON u.id = rem.user_id
               WHERE rem.id = $1""",
            [remix_id],
        )
        if remix is None:
            raise _remix_not_found(remix_id)
        remix["reviews"] = self.get_remix_reviews(remix_id, review_limit)
        return remix

    def add_remix(self, user_id: int, recipe_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a remix of recipe_id authored by user_id."""
        raise_on_fail(check_dish_values(data, "remix"))
        if fetch_one(self.db, "SELECT id FROM recipes WHERE id = $1", [recipe_id]) is None:
            raise NotFoundError(f"The recipe with id of {recipe_id} was not found in the database.")
        data = with_default_image(data)
        row = fetch_one(
            self.db,
            f"""INSERT INTO remixes
                   (user_id, recipe_id, purpose, name, description, ingredients, directions,
                    cooking_time, servings, image_url)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                RETURNING {REMIX_RETURNING}""",
            [
                user_id,
                recipe_id,
                data["purpose"],
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

    def get_remix_author(self, remix_id: int) -> dict[str, Any]:
        """{"username": ...} of the remix's author. Raises NotFoundError for unknown ids."""
        author = fetch_one(
            self.db,
            """SELECT u.username
               FROM remixes rem
               JOIN users u ON u.id = rem.user_id
               WHERE rem.id = $1""",
            [remix_id],
        )
        if author is None:
            raise _remix_not_found(remix_id)
        return author

    def update_remix(self, remix_id: int, update_payload: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a remix; only keys present in update_payload change."""
        raise_on_fail(check_update_fields(update_payload, REMIX_UPDATE_FIELDS))
        raise_on_fail(check_dish_values(update_payload, "remix", updating=True))
        clause = build_set_clause(with_default_image(update_payload), DISH_COLUMNS)
        row = fetch_one(
            self.db,
            f"""UPDATE remixes
                SET {clause.set_clause}
                WHERE id = ${clause.next_index}
                RETURNING {REMIX_RETURNING}""",
            [*clause.values, remix_id],
        )
        if row is None:
            raise _remix_not_found(remix_id)
        self.db.commit()
        return row

    def get_remix_review(self, review_id: int) -> dict[str, Any]:
        review = fetch_one(
            self.db,
            """SELECT rr.id, u.username AS "reviewAuthor", rem.name AS "remixName",
                      rr.remix_id AS "remixId", rr.title, rr.content, rr.created_at AS "createdAt"
               FROM remix_reviews rr
               JOIN remixes rem ON rem.id = rr.remix_id
               JOIN users u ON u.id = rr.user_id
               WHERE rr.id = $1""",
            [review_id],
        )
        if review is None:
            raise _review_not_found(review_id)
        return review

    def get_review_author(self, review_id: int) -> dict[str, Any]:
        """{"username": ...} of the remix review's author. Raises NotFoundError for unknown ids."""
        author = fetch_one(
            self.db,
            """SELECT u.username
               FROM remix_reviews rr
               JOIN users u ON u.id = rr.user_id
               WHERE rr.id = $1""",
            [review_id],
        )
        if author is None:
            raise _review_not_found(review_id)
        return author

    def add_review(self, user_id: int, remix_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a review of remix_id by user_id; returns it with the author's username and remix name."""
        raise_on_fail(check_review_values(data))
        user = fetch_one(self.db, "SELECT username FROM users WHERE id = $1", [user_id])
        if user is None:
            raise NotFoundError(f"The user with id of {user_id} was not found in the database.")
        remix = fetch_one(self.db, "SELECT name FROM remixes WHERE id = $1", [remix_id])
        if remix is None:
            raise _remix_not_found(remix_id)
        row = fetch_one(
            self.db,
            f"""INSERT INTO remix_reviews (user_id, remix_id, title, content)
                VALUES ($1, $2, $3, $4)
                RETURNING {REVIEW_RETURNING}""",
            [user_id, remix_id, data["title"], data["content"]],
        )
        self.db.commit()
        return {**row, "reviewAuthor": user["username"], "remixName": remix["name"]}

    def update_review(self, review_id: int, update_payload: Mapping[str, Any]) -> dict[str, Any]:
        raise_on_fail(
            check_update_fields(update_payload, REVIEW_UPDATE_FIELDS, REVIEW_UPDATE_FIELDS_MESSAGE)
        )
        raise_on_fail(check_review_values(update_payload, updating=True))
        clause = build_set_clause(update_payload)
        row = fetch_one(
            self.db,
            f"""UPDATE remix_reviews
                SET {clause.set_clause}
                WHERE id = ${clause.next_index}
                RETURNING {REVIEW_RETURNING}""",
            [*clause.values, review_id],
        )
        if row is None:
            raise _review_not_found(review_id)
        self.db.commit()
        return row
