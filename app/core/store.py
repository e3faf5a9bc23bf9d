"""
Parameterized query execution on top of a SQLAlchemy session.

The SQL helpers emit 1-indexed positional placeholders ($1, $2, ...). Store
rewrites them into named bind parameters for ``sqlalchemy.text`` so values are
always bound by the driver and never interpolated into SQL text.
"""

import logging
import re
from typing import Any, Dict, List, Sequence, Tuple

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def bind_positional(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Translate $N placeholders into :pN named binds.

    Args:
        sql: SQL text using $1..$N placeholders
        values: Bind values, values[0] belongs to $1

    Returns:
        Tuple of (rewritten SQL, {"p1": values[0], ...})

    Raises:
        ValueError: If a placeholder has no value or a value has no placeholder
    """
    indexes = {int(n) for n in _PLACEHOLDER.findall(sql)}
    expected = set(range(1, len(values) + 1))
    if indexes != expected:
        raise ValueError(
            f"Placeholders {sorted(indexes)} do not match {len(values)} bind values"
        )

    statement = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{i}": value for i, value in enumerate(values, start=1)}
    return statement, params


class Store:
    """
    Request-scoped handle for running parameterized SQL.

    Wraps one SQLAlchemy session; rows come back as plain dicts keyed by the
    column labels of the statement.
    """

    def __init__(self, session: Session):
        self.session = session

    def execute(self, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """
        Run a statement and return its rows.

        Args:
            sql: SQL text with $N placeholders
            values: Positional bind values

        Returns:
            List of row dicts (empty for statements that return no rows)

        Raises:
            StoreError: If the database rejects the statement
        """
        statement, params = bind_positional(sql, values)
        logger.debug("Executing SQL with %d bind values", len(params))

        try:
            result = self.session.execute(text(statement), params)
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]
        except (SQLAlchemyError, OverflowError) as e:
            self.session.rollback()
            logger.error("Database error while executing statement", exc_info=e)
            raise StoreError("Database error") from e

    def commit(self) -> None:
        """Commit the current unit of work."""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Database error while committing", exc_info=e)
            raise StoreError("Database error") from e


def get_store(db: Session = Depends(get_db)) -> Store:
    """
    Dependency function to get a Store bound to the request's session.
    Used in FastAPI endpoints with Depends(get_store)
    """
    return Store(db)
