"""
CRUD operations for jobs.

Jobs are keyed by their generated id. Records are plain dicts using the API
field names (companyHandle).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import DuplicateEntity, InvalidInput, NotFound
from app.core.sql import Filter, ListQuery, build_list_query, sql_for_partial_update
from app.core.store import Store

logger = logging.getLogger(__name__)

RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Job fields already match their columns; companyHandle is not updatable
JS_TO_SQL: Dict[str, str] = {}

LIST_QUERY = ListQuery(
    select=f"SELECT {RETURNING}\nFROM jobs",
    filters=(
        Filter("title", "title", "contains"),
        Filter("minSalary", "salary", "min"),
        Filter("hasEquity", "equity", "flag"),
    ),
    order_by="title, id",
)


def create(store: Store, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Args:
        store: Query execution handle
        data: {title, salary, equity, companyHandle}

    Returns:
        The created job, including its generated id

    Raises:
        InvalidInput: If the company does not exist
        DuplicateEntity: If the company already has a job with this title
    """
    title = data["title"]
    handle = data["companyHandle"]

    company = store.execute(
        "SELECT handle FROM companies WHERE handle = $1",
        [handle],
    )
    if not company:
        raise InvalidInput(f"No company: {handle}")

    duplicate = store.execute(
        "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
        [title, handle],
    )
    if duplicate:
        raise DuplicateEntity(f"Duplicate job: {title} at {handle}")

    rows = store.execute(
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
VALUES ($1, $2, $3, $4)
RETURNING {RETURNING}""",
        [title, data.get("salary"), data.get("equity"), handle],
    )
    store.commit()

    job = rows[0]
    logger.info(f"Created job {job['id']}: {title} at {handle}")
    return job


def find_all(store: Store, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title.

    Args:
        store: Query execution handle
        filters: Optional {title, minSalary, hasEquity}

    Returns:
        List of jobs

    Raises:
        InvalidFilter: On an unknown filter key or a bad value
    """
    query = build_list_query(LIST_QUERY, filters)
    return store.execute(query.sql, query.values)


def get(store: Store, job_id: int) -> Dict[str, Any]:
    """
    Get a job by id.

    Raises:
        NotFound: If no job has this id
    """
    rows = store.execute(
        f"SELECT {RETURNING}\nFROM jobs\nWHERE id = $1",
        [job_id],
    )
    if not rows:
        raise NotFound(f"No job: {job_id}")
    return rows[0]


def update(store: Store, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the supplied fields change.

    Args:
        store: Query execution handle
        job_id: Job to update
        data: Any of {title, salary, equity}

    Returns:
        The updated job

    Raises:
        InvalidInput: If data is empty
        NotFound: If no job has this id
        DuplicateEntity: If another job at the same company has the new title
    """
    partial = sql_for_partial_update(data, JS_TO_SQL)

    if "title" in data:
        duplicate = store.execute(
            """SELECT id
FROM jobs
WHERE title = $1
  AND company_handle = (SELECT company_handle FROM jobs WHERE id = $2)
  AND id <> $2""",
            [data["title"], job_id],
        )
        if duplicate:
            raise DuplicateEntity(f"Duplicate job: {data['title']}")

    id_idx = len(partial.values) + 1

    rows = store.execute(
        f"""UPDATE jobs
SET {partial.set_cols}
WHERE id = ${id_idx}
RETURNING {RETURNING}""",
        [*partial.values, job_id],
    )
    if not rows:
        raise NotFound(f"No job: {job_id}")
    store.commit()

    logger.info(f"Updated job {job_id}: {list(data)}")
    return rows[0]


def remove(store: Store, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFound: If no job has this id
    """
    rows = store.execute(
        "DELETE FROM jobs WHERE id = $1 RETURNING id",
        [job_id],
    )
    if not rows:
        raise NotFound(f"No job: {job_id}")
    store.commit()

    logger.info(f"Deleted job {job_id}")
