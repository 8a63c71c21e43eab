"""Unit tests for remix.core.sql: SET clause building and allowed-field checks."""

import re
import unittest

from remix.core.sql import SetClause, build_set_clause, check_update_fields
from remix.errors import BadRequestError, EmptyPayloadError, ErrorKind, Fail, Pass

RECIPE_COLUMNS = {"cookingTime": "cooking_time", "imageUrl": "image_url"}


class TestBuildSetClause(unittest.TestCase):
    def test_translates_mapped_keys_and_keeps_order(self) -> None:
        clause = build_set_clause(
            {"name": "Soup", "cookingTime": 60, "servings": 4},
            RECIPE_COLUMNS,
        )
        self.assertEqual(clause.set_clause, '"name"=$1, "cooking_time"=$2, "servings"=$3')
        self.assertEqual(clause.values, ["Soup", 60, 4])

    def test_without_translation_uses_keys_as_columns(self) -> None:
        clause = build_set_clause({"title": "Great", "content": "Loved it"})
        self.assertEqual(clause.set_clause, '"title"=$1, "content"=$2')
        self.assertEqual(clause.values, ["Great", "Loved it"])

    def test_placeholders_are_one_to_n_in_key_order(self) -> None:
        payload = {"a": 1, "b": 2, "c": 3, "d": 4, "e": 5}
        clause = build_set_clause(payload)
        indices = [int(n) for n in re.findall(r"\$(\d+)", clause.set_clause)]
        self.assertEqual(indices, [1, 2, 3, 4, 5])
        self.assertEqual(len(clause.values), len(payload))

    def test_values_never_appear_in_sql_text(self) -> None:
        hostile = "x'; DROP TABLE recipes; --"
        clause = build_set_clause({"name": hostile})
        self.assertNotIn(hostile, clause.set_clause)
        self.assertNotIn("DROP", clause.set_clause)
        self.assertEqual(clause.values, [hostile])

    def test_values_keep_types_including_none(self) -> None:
        clause = build_set_clause({"servings": 0, "imageUrl": None}, RECIPE_COLUMNS)
        self.assertEqual(clause.values, [0, None])

    def test_next_index_follows_last_placeholder(self) -> None:
        clause = build_set_clause({"name": "Soup", "servings": 2})
        self.assertEqual(clause.next_index, 3)
        self.assertEqual(SetClause(set_clause="", values=[]).next_index, 1)

    def test_empty_payload_raises_bad_request(self) -> None:
        with self.assertRaises(EmptyPayloadError) as ctx:
            build_set_clause({}, RECIPE_COLUMNS)
        self.assertIsInstance(ctx.exception, BadRequestError)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, "Please provide data to update.")


class TestCheckUpdateFields(unittest.TestCase):
    def test_allowed_fields_pass(self) -> None:
        outcome = check_update_fields({"title": "t"}, frozenset({"title", "content"}))
        self.assertIsInstance(outcome, Pass)
        self.assertTrue(outcome.ok)

    def test_empty_payload_passes(self) -> None:
        self.assertIsInstance(check_update_fields({}, frozenset({"title"})), Pass)

    def test_disallowed_field_fails_with_custom_message(self) -> None:
        outcome = check_update_fields(
            {"title": "t", "userId": 9},
            frozenset({"title", "content"}),
            "only title and content",
        )
        self.assertIsInstance(outcome, Fail)
        self.assertEqual(outcome.kind, ErrorKind.BAD_REQUEST)
        self.assertEqual(outcome.message, "only title and content")

    def test_disallowed_field_default_message_names_field(self) -> None:
        outcome = check_update_fields({"userId": 9}, frozenset({"title"}))
        self.assertFalse(outcome.ok)
        self.assertIn("userId", outcome.message)


if __name__ == "__main__":
    unittest.main()
