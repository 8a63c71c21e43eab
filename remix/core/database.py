"""PostgreSQL connection, session management and positional-parameter query helpers."""

import re
from collections.abc import Generator, Sequence
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from remix.core.config import settings

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# $1, $2, ... positional placeholders as written in repository SQL.
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def bind_positional(sql: str, values: Sequence[Any] = ()) -> tuple[str, dict[str, Any]]:
    """
    Rewrite ``$n`` placeholders as named binds (``:p<n>``) and key values to match.

    Raises ValueError if the SQL references a placeholder with no value.
    """
    params = {f"p{index}": value for index, value in enumerate(values, start=1)}

    def _named(match: re.Match[str]) -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(
                f"SQL references ${match.group(1)} but only {len(values)} value(s) were supplied"
            )
        return f":{name}"

    return _POSITIONAL_PARAM.sub(_named, sql), params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result[Any]:
    """Execute SQL written with ``$n`` placeholders, binding values by position."""
    statement, params = bind_positional(sql, values)
    return db.execute(text(statement), params)


def fetch_all(db: Session, sql: str, values: Sequence[Any] = ()) -> list[dict[str, Any]]:
    return [dict(row) for row in run_query(db, sql, values).mappings().all()]


def fetch_one(db: Session, sql: str, values: Sequence[Any] = ()) -> dict[str, Any] | None:
    row = run_query(db, sql, values).mappings().first()
    return dict(row) if row is not None else None


def get_schema_revision(db: Session) -> str | None:
    """Revision alembic recorded in alembic_version; None when the table is missing or empty."""
    try:
        row = fetch_one(db, "SELECT version_num FROM alembic_version")
    except SQLAlchemyError:
        db.rollback()
        return None
    return row["version_num"] if row is not None else None
