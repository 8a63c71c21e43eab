"""Unit tests for positional binding and the query helpers in remix.core.database."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import ProgrammingError

from remix.core.database import (
    bind_positional,
    fetch_all,
    fetch_one,
    get_schema_revision,
    run_query,
)


class TestBindPositional(unittest.TestCase):
    def test_rewrites_placeholders_as_named_binds(self) -> None:
        sql, params = bind_positional(
            'UPDATE recipes SET "name"=$1, "servings"=$2 WHERE id = $3',
            ["Soup", 4, 7],
        )
        self.assertEqual(sql, 'UPDATE recipes SET "name"=:p1, "servings"=:p2 WHERE id = :p3')
        self.assertEqual(params, {"p1": "Soup", "p2": 4, "p3": 7})

    def test_two_digit_placeholders(self) -> None:
        values = list(range(1, 12))
        sql, params = bind_positional("SELECT $10, $11, $1", values)
        self.assertEqual(sql, "SELECT :p10, :p11, :p1")
        self.assertEqual(params["p10"], 10)
        self.assertEqual(params["p11"], 11)

    def test_repeated_placeholder_shares_value(self) -> None:
        sql, params = bind_positional("SELECT $1 WHERE x = $1", ["a"])
        self.assertEqual(sql, "SELECT :p1 WHERE x = :p1")
        self.assertEqual(params, {"p1": "a"})

    def test_sql_without_placeholders_is_unchanged(self) -> None:
        sql, params = bind_positional("SELECT username FROM users ORDER BY username")
        self.assertEqual(sql, "SELECT username FROM users ORDER BY username")
        self.assertEqual(params, {})

    def test_missing_value_raises(self) -> None:
        with self.assertRaises(ValueError):
            bind_positional("SELECT $1, $2", ["only one"])


class TestQueryHelpers(unittest.TestCase):
    def test_run_query_executes_bound_text(self) -> None:
        db = MagicMock()
        run_query(db, "SELECT id FROM recipes WHERE id = $1", [5])
        statement, params = db.execute.call_args.args
        self.assertEqual(str(statement), "SELECT id FROM recipes WHERE id = :p1")
        self.assertEqual(params, {"p1": 5})

    def test_fetch_one_returns_dict_or_none(self) -> None:
        db = MagicMock()
        db.execute.return_value.mappings.return_value.first.return_value = {"id": 1}
        self.assertEqual(fetch_one(db, "SELECT id FROM users WHERE id = $1", [1]), {"id": 1})
        db.execute.return_value.mappings.return_value.first.return_value = None
        self.assertIsNone(fetch_one(db, "SELECT id FROM users WHERE id = $1", [2]))

    def test_fetch_all_returns_list_of_dicts(self) -> None:
        db = MagicMock()
        db.execute.return_value.mappings.return_value.all.return_value = [{"id": 1}, {"id": 2}]
        self.assertEqual(fetch_all(db, "SELECT id FROM users"), [{"id": 1}, {"id": 2}])


class TestSchemaRevision(unittest.TestCase):
    def test_returns_recorded_revision(self) -> None:
        db = MagicMock()
        db.execute.return_value.mappings.return_value.first.return_value = {
            "version_num": "20251019000000"
        }
        self.assertEqual(get_schema_revision(db), "20251019000000")

    def test_empty_version_table_is_none(self) -> None:
        db = MagicMock()
        db.execute.return_value.mappings.return_value.first.return_value = None
        self.assertIsNone(get_schema_revision(db))

    def test_missing_version_table_rolls_back(self) -> None:
        db = MagicMock()
        db.execute.side_effect = ProgrammingError("SELECT", {}, Exception("no such table"))
        self.assertIsNone(get_schema_revision(db))
        db.rollback.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
