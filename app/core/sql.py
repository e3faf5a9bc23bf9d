"""
SQL fragment builders.

Two narrow helpers shared by the repositories:

- sql_for_partial_update: SET clause for a sparse UPDATE
- build_list_query: validated, filtered SELECT for a list endpoint

Column names always come from code-owned tables; every caller-supplied value
is bound through a positional placeholder ($1, $2, ...).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from app.core.exceptions import FilterConflict, InvalidFilter, InvalidInput

logger = logging.getLogger(__name__)


class PartialUpdate(NamedTuple):
    """Assignments for an UPDATE ... SET clause and their bind values."""
    assignments: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        return ", ".join(self.assignments)


class SqlQuery(NamedTuple):
    """A complete statement and its positional bind values."""
    sql: str
    values: List[Any]


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """
    Build the SET clause for updating only the supplied fields.

    Fields missing from ``js_to_sql`` are used as column names unchanged.

    Args:
        data: Field name -> new value, in the order to assign
        js_to_sql: Field name -> column name

    Returns:
        PartialUpdate with '"column"=$N' assignments and aligned values

    Raises:
        InvalidInput: If data is empty

    Example:
        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(assignments=['"first_name"=$1', '"age"=$2'], values=['Aliya', 32])
    """
    if not data:
        raise InvalidInput("No data")

    assignments = [
        f'"{js_to_sql.get(name, name)}"=${idx}'
        for idx, name in enumerate(data, start=1)
    ]
    return PartialUpdate(assignments=assignments, values=list(data.values()))


class WhereClause:
    """
    Accumulates WHERE conditions together with their bind values.

    A condition template marks its placeholder with ``{}``; the placeholder
    number is taken from the current length of ``values`` so the Nth
    placeholder in the rendered clause always binds ``values[N - 1]``.
    """

    def __init__(self):
        self.conditions: List[str] = []
        self.values: List[Any] = []

    def add(self, template: str, value: Any) -> None:
        placeholder = f"${len(self.values) + 1}"
        self.conditions.append(template.format(placeholder))
        self.values.append(value)

    def add_literal(self, condition: str) -> None:
        """Add a condition that binds nothing."""
        self.conditions.append(condition)

    def render(self) -> str:
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)


# Largest value an INTEGER column holds
MAX_INT = 2**31 - 1


def _to_text(value: Any) -> str:
    return str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    number = int(value)
    if not -MAX_INT - 1 <= number <= MAX_INT:
        raise ValueError(f"out of range: {number}")
    return number


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so text matches literally (with ESCAPE '\\')."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True)
class Filter:
    """
    One accepted filter of a list endpoint.

    kind is one of:
        "contains": case-insensitive substring match on a text column
        "min" / "max": inclusive numeric bound
        "flag": true keeps rows whose column is above zero, false keeps the rest
    """
    name: str
    column: str
    kind: str

    def coerce(self, value: Any) -> Any:
        caster: Callable[[Any], Any] = {
            "contains": _to_text,
            "min": _to_int,
            "max": _to_int,
            "flag": _to_bool,
        }[self.kind]
        try:
            return caster(value)
        except (TypeError, ValueError):
            raise InvalidFilter(f"Invalid value for filter {self.name}")

    def apply(self, where: WhereClause, value: Any) -> None:
        if self.kind == "contains":
            where.add(
                f"LOWER({self.column}) LIKE LOWER({{}}) ESCAPE '\\'",
                f"%{escape_like(value)}%",
            )
        elif self.kind == "min":
            where.add(f"{self.column} >= {{}}", value)
        elif self.kind == "max":
            where.add(f"{self.column} <= {{}}", value)
        elif value:
            where.add_literal(f"{self.column} > 0")
        else:
            where.add_literal(f"({self.column} IS NULL OR {self.column} = 0)")


@dataclass(frozen=True)
class ListQuery:
    """
    Fixed shape of a list endpoint: what to select, which filters are
    accepted (in application order), which pairs bound each other, and the
    ordering of the result.
    """
    select: str
    filters: Tuple[Filter, ...]
    order_by: str
    bounds: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def allowed(self) -> List[str]:
        return [f.name for f in self.filters]


def validate_filters(query: ListQuery, options: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check filter options against the allow-list and coerce their values.

    Args:
        query: List endpoint description
        options: Raw filter options (e.g. request query parameters)

    Returns:
        Coerced options keyed by filter name

    Raises:
        InvalidFilter: On an unknown key or a value of the wrong type
        FilterConflict: When a minimum exceeds its paired maximum
    """
    unknown = set(options) - set(query.allowed)
    if unknown:
        logger.info(f"Rejected unknown filter option(s): {sorted(unknown)}")
        raise InvalidFilter("Invalid filter option", details={"invalid": sorted(unknown)})

    coerced = {f.name: f.coerce(options[f.name]) for f in query.filters if f.name in options}

    for low, high in query.bounds:
        if low in coerced and high in coerced and coerced[low] > coerced[high]:
            raise FilterConflict(f"{low} cannot be greater than {high}")

    return coerced


def build_list_query(query: ListQuery, options: Optional[Mapping[str, Any]] = None) -> SqlQuery:
    """
    Build the SELECT statement for a list endpoint.

    Filters are applied in declaration order; placeholders are numbered in
    the order filters are actually applied.

    Args:
        query: List endpoint description
        options: Raw filter options; absent keys are not filtered on

    Returns:
        SqlQuery with the full statement and its bind values

    Raises:
        InvalidFilter: On an unknown key or a value of the wrong type
        FilterConflict: When a minimum exceeds its paired maximum
    """
    coerced = validate_filters(query, options or {})

    where = WhereClause()
    for f in query.filters:
        if f.name in coerced:
            f.apply(where, coerced[f.name])

    parts = [query.select]
    clause = where.render()
    if clause:
        parts.append(clause)
    parts.append(f"ORDER BY {query.order_by}")

    return SqlQuery(sql="\n".join(parts), values=where.values)
