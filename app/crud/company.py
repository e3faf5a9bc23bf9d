"""
CRUD operations for companies.

All SQL goes through Store with positional placeholders. Records are plain
dicts using the API field names (numEmployees, logoUrl).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import DuplicateEntity, NotFound
from app.core.sql import Filter, ListQuery, build_list_query, sql_for_partial_update
from app.core.store import Store

logger = logging.getLogger(__name__)

RETURNING = (
    "handle, name, description, "
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

LIST_QUERY = ListQuery(
    select=f"SELECT {RETURNING}\nFROM companies",
    filters=(
        Filter("name", "name", "contains"),
        Filter("minEmployees", "num_employees", "min"),
        Filter("maxEmployees", "num_employees", "max"),
    ),
    bounds=(("minEmployees", "maxEmployees"),),
    order_by="name, handle",
)


def create(store: Store, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        store: Query execution handle
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company

    Raises:
        DuplicateEntity: If the handle is already taken
    """
    handle = data["handle"]
    duplicate = store.execute(
        "SELECT handle FROM companies WHERE handle = $1",
        [handle],
    )
    if duplicate:
        raise DuplicateEntity(f"Duplicate company: {handle}")

    rows = store.execute(
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
VALUES ($1, $2, $3, $4, $5)
RETURNING {RETURNING}""",
        [
            handle,
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )
    store.commit()

    logger.info(f"Created company {handle}")
    return rows[0]


def find_all(store: Store, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name.

    Args:
        store: Query execution handle
        filters: Optional {name, minEmployees, maxEmployees}

    Returns:
        List of companies

    Raises:
        InvalidFilter: On an unknown filter key or a bad value
        FilterConflict: If minEmployees > maxEmployees
    """
    query = build_list_query(LIST_QUERY, filters)
    return store.execute(query.sql, query.values)


def get(store: Store, handle: str) -> Dict[str, Any]:
    """
    Get a company together with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...], possibly empty

    Raises:
        NotFound: If no company has this handle
    """
    rows = store.execute(
        f"SELECT {RETURNING}\nFROM companies\nWHERE handle = $1",
        [handle],
    )
    if not rows:
        raise NotFound(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = store.execute(
        """SELECT id, title, salary, equity
FROM jobs
WHERE company_handle = $1
ORDER BY id""",
        [handle],
    )
    return company


def update(store: Store, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the supplied fields change.

    Args:
        store: Query execution handle
        handle: Company to update
        data: Any of {name, description, numEmployees, logoUrl}

    Returns:
        The updated company

    Raises:
        InvalidInput: If data is empty
        NotFound: If no company has this handle
    """
    partial = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = len(partial.values) + 1

    rows = store.execute(
        f"""UPDATE companies
SET {partial.set_cols}
WHERE handle = ${handle_idx}
RETURNING {RETURNING}""",
        [*partial.values, handle],
    )
    if not rows:
        raise NotFound(f"No company: {handle}")
    store.commit()

    logger.info(f"Updated company {handle}: {list(data)}")
    return rows[0]


def remove(store: Store, handle: str) -> None:
    """
    Delete a company and, through the foreign key, its jobs.

    Raises:
        NotFound: If no company has this handle
    """
    rows = store.execute(
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    )
    if not rows:
        raise NotFound(f"No company: {handle}")
    store.commit()

    logger.info(f"Deleted company {handle}")
