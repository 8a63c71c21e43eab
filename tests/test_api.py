"""Route-level tests: auth chain wiring, error bodies and response shapes.

Uses TestClient against create_app() with get_db overridden by a mock
session and repository methods patched, so no database is needed.
"""

import unittest
from datetime import datetime
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from remix.core.config import Settings
from remix.core.database import get_db
from remix.core.security import CredentialVerifier
from remix.errors import NotFoundError
from remix.main import create_app
from remix.repositories import RecipeRepository, RemixRepository, UserRepository

SETTINGS = Settings(APP_ENV="test", SECRET_KEY="api-test-secret")


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(SETTINGS)
        self.db = MagicMock()
        self.app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(self.app)
        verifier = CredentialVerifier(SETTINGS)
        self.alice_token = verifier.issue_token(1, "alice1", "alice@example.com")
        self.bob_token = verifier.issue_token(2, "bobby2", "bob@example.com")

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestPublicReads(ApiTestCase):
    def test_anonymous_search_succeeds(self) -> None:
        rows = [{"id": 1, "name": "Tomato Soup", "createdAt": datetime(2025, 8, 2, 20, 59)}]
        with patch.object(RecipeRepository, "search_recipes", return_value=rows) as search:
            response = self.client.get("/recipes")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["recipeSearchResults"][0]["createdAt"], "August 2, 2025 at 8:59pm")
        search.assert_called_once_with(None)

    def test_forged_token_still_reads(self) -> None:
        with patch.object(RecipeRepository, "search_recipes", return_value=[]):
            response = self.client.get("/recipes", headers=self.auth("forged.token.value"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"recipeSearchResults": []})

    def test_search_term_passed_through(self) -> None:
        with patch.object(RecipeRepository, "search_recipes", return_value=[]) as search:
            self.client.get("/recipes", params={"recipeName": "soup"})
        search.assert_called_once_with("soup")

    def test_unexpected_query_key_is_bad_request(self) -> None:
        response = self.client.get("/recipes", params={"author": "alice1"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["error"]["message"],
            "The query string must only contain the non-empty property 'recipeName'.",
        )

    def test_recipe_details_embed_most_recent_review(self) -> None:
        details = {
            "id": 7,
            "name": "Soup",
            "createdAt": datetime(2025, 1, 15, 9, 5),
            "remixes": [],
            "reviews": [{"id": 3, "title": "Great", "createdAt": datetime(2025, 1, 16, 9, 5)}],
        }
        with patch.object(RecipeRepository, "get_recipe_details", return_value=details) as get:
            response = self.client.get("/recipes/7")
        self.assertEqual(response.status_code, 200)
        recipe = response.json()["recipeDetails"]
        self.assertEqual(recipe["mostRecentRecipeReview"]["id"], 3)
        self.assertNotIn("reviews", recipe)
        get.assert_called_once_with(7, 3, 1)

    def test_unknown_remix_is_not_found(self) -> None:
        error = NotFoundError("The remix with id of 99 was not found in the database.")
        with patch.object(RemixRepository, "get_remix_details", side_effect=error):
            response = self.client.get("/remixes/99")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"error": {"status": 404, "message": "The remix with id of 99 was not found in the database."}},
        )

    def test_unknown_route_is_not_found(self) -> None:
        response = self.client.get("/no-such-route")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": {"status": 404, "message": "Not Found"}})


class TestLoginGate(ApiTestCase):
    def test_anonymous_create_is_unauthorized(self) -> None:
        with patch.object(RecipeRepository, "add_recipe") as add:
            response = self.client.post("/recipes", json={"name": "Soup"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"error": {"status": 401, "message": "You must be logged in to access this!"}},
        )
        add.assert_not_called()

    def test_logged_in_create_uses_token_user(self) -> None:
        body = {"name": "Soup", "description": "Warm", "ingredients": "Water", "directions": "Boil"}
        with patch.object(RecipeRepository, "add_recipe", return_value={"id": 1, **body}) as add:
            response = self.client.post("/recipes", json=body, headers=self.auth(self.alice_token))
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["newRecipe"]["id"], 1)
        add.assert_called_once_with(1, body)

    def test_missing_required_field_is_bad_request(self) -> None:
        response = self.client.post(
            "/recipes", json={"name": "Soup"}, headers=self.auth(self.alice_token)
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["status"], 400)

    def test_users_list_requires_login(self) -> None:
        self.assertEqual(self.client.get("/users").status_code, 401)


class TestOwnership(ApiTestCase):
    def test_owner_can_update(self) -> None:
        with patch.object(
            RecipeRepository, "get_recipe_author", return_value={"username": "alice1"}
        ) as author, patch.object(
            RecipeRepository, "update_recipe", return_value={"id": 7, "name": "Soup"}
        ) as update:
            response = self.client.patch(
                "/recipes/7", json={"name": "Soup"}, headers=self.auth(self.alice_token)
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["updatedRecipe"]["name"], "Soup")
        author.assert_called_once_with(7)
        update.assert_called_once_with(7, {"name": "Soup"})

    def test_non_owner_is_forbidden(self) -> None:
        with patch.object(
            RecipeRepository, "get_recipe_author", return_value={"username": "alice1"}
        ), patch.object(RecipeRepository, "update_recipe") as update:
            response = self.client.patch(
                "/recipes/7", json={"name": "Soup"}, headers=self.auth(self.bob_token)
            )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"]["message"],
            "You can't edit this recipe because you didn't create it.",
        )
        update.assert_not_called()

    def test_forged_token_update_is_unauthorized(self) -> None:
        with patch.object(RecipeRepository, "get_recipe_author") as author:
            response = self.client.patch(
                "/recipes/7", json={"name": "Soup"}, headers=self.auth("forged.token.value")
            )
        self.assertEqual(response.status_code, 401)
        author.assert_not_called()

    def test_unknown_recipe_is_not_found(self) -> None:
        error = NotFoundError("The recipe with id of 99 was not found in the database.")
        with patch.object(RecipeRepository, "get_recipe_author", side_effect=error):
            response = self.client.patch(
                "/recipes/99", json={"name": "Soup"}, headers=self.auth(self.alice_token)
            )
        self.assertEqual(response.status_code, 404)

    def test_non_integer_id_is_bad_request(self) -> None:
        with patch.object(RecipeRepository, "get_recipe_author") as author:
            response = self.client.patch(
                "/recipes/abc", json={"name": "Soup"}, headers=self.auth(self.alice_token)
            )
        self.assertEqual(response.status_code, 400)
        author.assert_not_called()

    def test_anonymous_non_integer_id_is_unauthorized(self) -> None:
        with patch.object(RecipeRepository, "get_recipe_author") as author:
            response = self.client.patch("/recipes/abc", json={"name": "Soup"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json()["error"]["message"], "You must be logged in to access this!"
        )
        author.assert_not_called()

    def test_remix_non_owner_is_forbidden(self) -> None:
        with patch.object(
            RemixRepository, "get_remix_author", return_value={"username": "alice1"}
        ), patch.object(RemixRepository, "update_remix") as update:
            response = self.client.patch(
                "/remixes/4", json={"name": "Stew"}, headers=self.auth(self.bob_token)
            )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"]["message"],
            "You can't edit this remix because you didn't create it.",
        )
        update.assert_not_called()

    def test_unknown_remix_update_is_not_found(self) -> None:
        error = NotFoundError("The remix with id of 99 was not found in the database.")
        with patch.object(
            RemixRepository, "get_remix_author", side_effect=error
        ) as author, patch.object(RemixRepository, "update_remix") as update:
            response = self.client.patch(
                "/remixes/99", json={"name": "Stew"}, headers=self.auth(self.alice_token)
            )
        self.assertEqual(response.status_code, 404)
        author.assert_called_once_with(99)
        update.assert_not_called()

    def test_recipe_review_non_owner_is_forbidden(self) -> None:
        with patch.object(
            RecipeRepository, "get_review_author", return_value={"username": "alice1"}
        ) as author, patch.object(RecipeRepository, "update_review") as update:
            response = self.client.patch(
                "/recipes/7/reviews/3", json={"title": "Meh"}, headers=self.auth(self.bob_token)
            )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"]["message"],
            "You can't edit this recipe review because you didn't create it.",
        )
        author.assert_called_once_with(3)
        update.assert_not_called()

    def test_empty_update_is_bad_request(self) -> None:
        with patch.object(
            RecipeRepository, "get_recipe_author", return_value={"username": "alice1"}
        ):
            response = self.client.patch("/recipes/7", json={}, headers=self.auth(self.alice_token))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["message"], "Please provide data to update.")

    def test_remix_review_owner_check(self) -> None:
        with patch.object(
            RemixRepository, "get_review_author", return_value={"username": "alice1"}
        ), patch.object(RemixRepository, "update_review") as update:
            response = self.client.patch(
                "/remixes/4/reviews/8", json={"title": "Meh"}, headers=self.auth(self.bob_token)
            )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"]["message"],
            "You can't edit this remix review because you didn't create it.",
        )
        update.assert_not_called()

    def test_user_cannot_edit_another_account(self) -> None:
        with patch.object(UserRepository, "update_user") as update:
            response = self.client.patch(
                "/users/bobby2", json={"email": "x@example.com"}, headers=self.auth(self.alice_token)
            )
        self.assertEqual(response.status_code, 403)
        update.assert_not_called()

    def test_anonymous_account_update_is_unauthorized(self) -> None:
        with patch.object(UserRepository, "update_user") as update:
            response = self.client.patch("/users/alice1", json={"email": "x@example.com"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"error": {"status": 401, "message": "You must be logged in to access this!"}},
        )
        update.assert_not_called()

    def test_anonymous_account_delete_is_unauthorized(self) -> None:
        with patch.object(UserRepository, "delete_user") as delete:
            response = self.client.delete("/users/alice1")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"error": {"status": 401, "message": "You must be logged in to access this!"}},
        )
        delete.assert_not_called()


class TestHealth(ApiTestCase):
    def test_connected_reports_schema_revision(self) -> None:
        self.db.execute.return_value.mappings.return_value.first.return_value = {
            "version_num": "20251019000000"
        }
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "status": "ok",
                "environment": "test",
                "apiPrefix": "",
                "database": "connected",
                "schemaRevision": "20251019000000",
            },
        )

    def test_unreachable_database_is_degraded(self) -> None:
        self.db.execute.side_effect = SQLAlchemyError("connection refused")
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "degraded")
        self.assertEqual(body["database"], "disconnected")
        self.assertIsNone(body["schemaRevision"])


class TestAuthRoutes(ApiTestCase):
    def test_login_returns_usable_token(self) -> None:
        user = {"id": 1, "username": "alice1", "email": "alice@example.com"}
        with patch.object(UserRepository, "authenticate_user", return_value=user):
            response = self.client.post(
                "/auth/login", json={"username": "alice1", "password": "password123"}
            )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["userInfo"], {"username": "alice1", "email": "alice@example.com"})
        identity = CredentialVerifier(SETTINGS).verify_token(body["token"])
        self.assertEqual(identity.user_id, 1)

    def test_register_created(self) -> None:
        user = {"id": 5, "username": "chef123", "email": "chef@example.com"}
        with patch.object(UserRepository, "register_new_user", return_value=user) as register:
            response = self.client.post(
                "/auth/register",
                json={"username": "chef123", "email": "chef@example.com", "password": "password123"},
            )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Successfully registered new user")
        register.assert_called_once_with("chef123", "chef@example.com", "password123")


if __name__ == "__main__":
    unittest.main()
