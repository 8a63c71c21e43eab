"""Unit tests for Settings validation and environment-derived properties."""

import unittest

from pydantic import ValidationError

from remix.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_test_env_selects_test_database(self) -> None:
        settings = Settings(
            APP_ENV="test",
            DATABASE_URL="postgresql://u:p@localhost/remix",
            TEST_DATABASE_URL="postgresql://u:p@localhost/remix_test",
        )
        self.assertEqual(settings.database_url, "postgresql://u:p@localhost/remix_test")
        self.assertEqual(settings.bcrypt_work_factor, 4)

    def test_dev_env_selects_main_database(self) -> None:
        settings = Settings(APP_ENV="dev", DATABASE_URL="postgresql://u:p@localhost/remix")
        self.assertEqual(settings.database_url, "postgresql://u:p@localhost/remix")
        self.assertEqual(settings.bcrypt_work_factor, 12)

    def test_non_postgres_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="sqlite:///remix.db")

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(SECRET_KEY="  ")

    def test_api_prefix_normalized(self) -> None:
        self.assertEqual(Settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            Settings(API_PREFIX="api")

    def test_port_range(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(PORT=0)

    def test_settings_are_immutable(self) -> None:
        settings = Settings()
        with self.assertRaises(ValidationError):
            settings.PORT = 8080


if __name__ == "__main__":
    unittest.main()
