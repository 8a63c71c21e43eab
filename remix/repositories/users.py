"""User data access: registration, login, profile reads/updates and favorites lists."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from remix.core.database import fetch_all, fetch_one, run_query
from remix.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    CredentialVerifier,
)
from remix.core.sql import build_set_clause, check_update_fields
from remix.errors import BadRequestError, NotFoundError, UnauthorizedError, raise_on_fail

logger = logging.getLogger(__name__)

USER_UPDATE_FIELDS = frozenset({"email", "password"})
USER_COLUMNS = {"password": "hashed_password"}

LOGIN_FAILED_MESSAGE = "Your username/password is incorrect. Please try again"


def _user_not_found(username: str) -> NotFoundError:
    return NotFoundError(f"The user {username} was not found in the database.")


class UserRepository:
    """SQL over users and the two favorites tables for one session."""

    def __init__(self, db: Session, credentials: CredentialVerifier) -> None:
        self.db = db
        self.credentials = credentials

    def _check_password(self, password: str) -> None:
        if (
            not isinstance(password, str)
            or len(password) < PASSWORD_MIN_LEN
            or len(password.encode("utf-8")) > PASSWORD_MAX_BYTES
        ):
            raise BadRequestError(
                f"The password must be at least {PASSWORD_MIN_LEN} characters "
                f"and at most {PASSWORD_MAX_BYTES} bytes long."
            )

    def register_new_user(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Create a user; returns {id, username, email}. Duplicate usernames are rejected."""
        if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
            raise BadRequestError(
                f"The username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters long."
            )
        self._check_password(password)
        existing = fetch_one(self.db, "SELECT username FROM users WHERE username = $1", [username])
        if existing is not None:
            raise BadRequestError(
                f"The username {username} is already taken. Please try another username."
            )
        user = fetch_one(
            self.db,
            """INSERT INTO users (username, email, hashed_password)
               VALUES ($1, $2, $3)
               RETURNING id, username, email""",
            [username, email, self.credentials.hash_password(password)],
        )
        self.db.commit()
        logger.info("user.registered user_id=%s", user["id"])
        return user

    def authenticate_user(self, username: str, password: str) -> dict[str, Any]:
        """Return {id, username, email} when the password matches; UnauthorizedError otherwise."""
        user = fetch_one(
            self.db,
            "SELECT id, username, email, hashed_password FROM users WHERE username = $1",
            [username],
        )
        if user is None or not self.credentials.verify_password(password, user["hashed_password"]):
            raise UnauthorizedError(LOGIN_FAILED_MESSAGE)
        del user["hashed_password"]
        return user

    def get_all_users(self, search_term: str | None = None) -> list[dict[str, Any]]:
        """Username and email of every user, optionally filtered by a case-insensitive substring."""
        if not search_term:
            return fetch_all(self.db, "SELECT username, email FROM users ORDER BY username")
        return fetch_all(
            self.db,
            """SELECT username, email
               FROM users
               WHERE username ILIKE $1
               ORDER BY username""",
            [f"%{search_term}%"],
        )

    def get_user_id(self, username: str) -> int:
        user = fetch_one(self.db, "SELECT id FROM users WHERE username = $1", [username])
        if user is None:
            raise _user_not_found(username)
        return user["id"]

    def get_user_details(self, username: str) -> dict[str, Any]:
        """Profile: username, email, the user's recipes and remixes, and their favorites."""
        user = fetch_one(
            self.db,
            """SELECT id, username, email, created_at AS "createdAt"
               FROM users
               WHERE username = $1""",
            [username],
        )
        if user is None:
            raise _user_not_found(username)
        user_id = user.pop("id")
        user["recipes"] = fetch_all(
            self.db,
            """SELECT id, name, description, image_url AS "imageUrl", created_at AS "createdAt"
               FROM recipes
               WHERE user_id = $1
               ORDER BY created_at DESC, name""",
            [user_id],
        )
        user["remixes"] = fetch_all(
            self.db,
            """SELECT id, name, description, image_url AS "imageUrl", created_at AS "createdAt"
               FROM remixes
               WHERE user_id = $1
               ORDER BY created_at DESC, name""",
            [user_id],
        )
        user.update(self._favorites(user_id))
        return user

    def update_user(self, username: str, update_payload: Mapping[str, Any]) -> dict[str, Any]:
        """Change email and/or password; a new password is hashed before storage."""
        raise_on_fail(check_update_fields(update_payload, USER_UPDATE_FIELDS))
        data = dict(update_payload)
        email = data.get("email", "")
        if not isinstance(email, str) or ("email" in data and not email.strip()):
            raise BadRequestError("The updated email cannot be blank.")
        if "password" in data:
            self._check_password(data["password"])
            data["password"] = self.credentials.hash_password(data["password"])
        clause = build_set_clause(data, USER_COLUMNS)
        user = fetch_one(
            self.db,
            f"""UPDATE users
                SET {clause.set_clause}
                WHERE username = ${clause.next_index}
                RETURNING username, email""",
            [*clause.values, username],
        )
        if user is None:
            raise _user_not_found(username)
        self.db.commit()
        return user

    def delete_user(self, username: str) -> None:
        deleted = fetch_one(
            self.db, "DELETE FROM users WHERE username = $1 RETURNING username", [username]
        )
        if deleted is None:
            raise _user_not_found(username)
        self.db.commit()
        logger.info("user.deleted")

    def _favorites(self, user_id: int) -> dict[str, list[dict[str, Any]]]:
        return {
            "favoriteRecipes": fetch_all(
                self.db,
                """SELECT rec.id, rec.name, rec.description, rec.image_url AS "imageUrl"
                   FROM recipe_favorites f
                   JOIN recipes rec ON rec.id = f.recipe_id
                   WHERE f.user_id = $1
                   ORDER BY rec.name""",
                [user_id],
            ),
            "favoriteRemixes": fetch_all(
                self.db,
                """SELECT rem.id, rem.name, rem.description, rem.image_url AS "imageUrl"
                   FROM remix_favorites f
                   JOIN remixes rem ON rem.id = f.remix_id
                   WHERE f.user_id = $1
                   ORDER BY rem.name""",
                [user_id],
            ),
        }

    def get_favorites(self, username: str) -> dict[str, list[dict[str, Any]]]:
        return self._favorites(self.get_user_id(username))

    def _add_favorite(self, username: str, kind: str, item_id: int) -> None:
        items, table, column = _FAVORITE_TABLES[kind]
        user_id = self.get_user_id(username)
        if fetch_one(self.db, f"SELECT id FROM {items} WHERE id = $1", [item_id]) is None:
            raise NotFoundError(f"The {kind} with id of {item_id} was not found in the database.")
        existing = fetch_one(
            self.db,
            f"SELECT id FROM {table} WHERE user_id = $1 AND {column} = $2",
            [user_id, item_id],
        )
        if existing is not None:
            raise BadRequestError(f"The {kind} with id of {item_id} is already in your favorites.")
        run_query(
            self.db,
            f"INSERT INTO {table} (user_id, {column}) VALUES ($1, $2)",
            [user_id, item_id],
        )
        self.db.commit()

    def _remove_favorite(self, username: str, kind: str, item_id: int) -> None:
        _, table, column = _FAVORITE_TABLES[kind]
        user_id = self.get_user_id(username)
        removed = fetch_one(
            self.db,
            f"DELETE FROM {table} WHERE user_id = $1 AND {column} = $2 RETURNING id",
            [user_id, item_id],
        )
        if removed is None:
            raise NotFoundError(f"The {kind} with id of {item_id} is not in your favorites.")
        self.db.commit()

    def add_recipe_favorite(self, username: str, recipe_id: int) -> None:
        self._add_favorite(username, "recipe", recipe_id)

    def remove_recipe_favorite(self, username: str, recipe_id: int) -> None:
        self._remove_favorite(username, "recipe", recipe_id)

    def add_remix_favorite(self, username: str, remix_id: int) -> None:
        self._add_favorite(username, "remix", remix_id)

    def remove_remix_favorite(self, username: str, remix_id: int) -> None:
        self._remove_favorite(username, "remix", remix_id)


# Favorite kind -> (item table, link table, item column). Fixed names, never caller input.
_FAVORITE_TABLES = {
    "recipe": ("recipes", "recipe_favorites", "recipe_id"),
    "remix": ("remixes", "remix_favorites", "remix_id"),
}
