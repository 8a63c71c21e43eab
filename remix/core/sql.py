"""Helpers for building parameterized SQL: partial-update SET clauses and allowed-field checks."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from remix.errors import EmptyPayloadError, ErrorKind, Fail, Outcome, Pass


@dataclass(frozen=True)
class SetClause:
    """SET fragment plus the values bound to its ``$1..$n`` placeholders, in order."""

    set_clause: str
    values: list[Any]

    @property
    def next_index(self) -> int:
        """Index the caller must use for its first extra positional parameter (e.g. WHERE id)."""
        return len(self.values) + 1


def build_set_clause(
    update_payload: Mapping[str, Any],
    name_translation: Mapping[str, str] | None = None,
) -> SetClause:
    """
    Turn a sparse update payload into a parameterized column assignment list.

    Keys are rendered in insertion order as ``"<column>"=$<i>``; a key found in
    name_translation uses the translated column name, any other key is used
    as-is. Values are returned separately for binding and never appear in the
    SQL text.

    Example:
        >>> build_set_clause({"name": "Soup", "cookingTime": 60}, {"cookingTime": "cooking_time"})
        SetClause(set_clause='"name"=$1, "cooking_time"=$2', values=['Soup', 60])

    Raises EmptyPayloadError if update_payload has no keys.
    """
    if not update_payload:
        raise EmptyPayloadError()
    translation = name_translation or {}
    columns = [
        f'"{translation.get(key, key)}"=${index}'
        for index, key in enumerate(update_payload, start=1)
    ]
    return SetClause(set_clause=", ".join(columns), values=list(update_payload.values()))


def check_update_fields(
    update_payload: Mapping[str, Any],
    allowed_fields: frozenset[str],
    message: str | None = None,
) -> Outcome:
    """Pass when every payload key is an allowed field; otherwise Fail as a bad request."""
    disallowed = [key for key in update_payload if key not in allowed_fields]
    if disallowed:
        return Fail(
            ErrorKind.BAD_REQUEST,
            message
            or f"Cannot update field(s): {', '.join(disallowed)}. Allowed: {', '.join(sorted(allowed_fields))}.",
        )
    return Pass()
