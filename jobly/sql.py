"""
SQL fragment builders.

Each builder turns a sparse set of optional fields into a parameterized
clause plus the ordered list of values bound to its placeholders. The Nth
``$N`` placeholder in a clause always binds the Nth value.
"""

from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from .errors import BadRequestError


class EquityFilter(Enum):
    """Tri-state ``hasEquity`` filter."""

    TRUE = "true"
    FALSE = "false"
    ABSENT = "absent"

    @classmethod
    def coerce(cls, value: Any) -> "EquityFilter":
        """Map True/False/"true"/"false"/None onto the enum; anything else is ABSENT."""
        if isinstance(value, cls):
            return value
        if value is True or value == "true":
            return cls.TRUE
        if value is False or value == "false":
            return cls.FALSE
        return cls.ABSENT


def column_for(key: str, js_to_sql: Optional[Mapping[str, str]] = None) -> str:
    if not js_to_sql:
        return key
    return js_to_sql.get(key, key)


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the SET part of an UPDATE statement.

    Args:
        data: Ordered mapping of field name to new value
        js_to_sql: Optional API field name to column name map; unmapped
            fields are used verbatim

    Returns:
        Tuple of (set_cols, values)

    Example:
        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name"})
        -> ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If data is empty
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{column_for(key, js_to_sql)}"=${idx}' for idx, key in enumerate(keys, start=1)]
    return ", ".join(cols), [data[key] for key in keys]


def sql_for_company_filter(
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE part of a company listing.

    A min of 0 is a real bound; a max of 0 is treated as no bound.

    Example:
        sql_for_company_filter("Joo", 100, 200)
        -> ("LOWER(name) LIKE LOWER($1) AND num_employees >= $2 AND num_employees <= $3",
            ["%Joo%", 100, 200])

    Raises:
        BadRequestError: If both bounds are given and min exceeds max
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where_cols: List[str] = []
    values: List[Any] = []

    if name:
        values.append(f"%{name}%")
        where_cols.append(f"LOWER(name) LIKE LOWER(${len(values)})")
    if min_employees is not None:
        values.append(min_employees)
        where_cols.append(f"num_employees >= ${len(values)}")
    if max_employees:
        values.append(max_employees)
        where_cols.append(f"num_employees <= ${len(values)}")

    return " AND ".join(where_cols), values


def sql_for_job_filter(
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Any = EquityFilter.ABSENT,
    company: Optional[str] = None,
    *,
    equity_false_filters: bool = False,
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE part of a job listing.

    ``has_equity`` TRUE keeps jobs with non-zero equity. FALSE adds no
    predicate unless ``equity_false_filters`` is set, in which case it keeps
    jobs with zero or missing equity. ``company`` matches the handle exactly.

    Example:
        sql_for_job_filter("engineer", 100000, "true")
        -> ("LOWER(title) LIKE LOWER($1) AND salary >= $2 AND equity > 0",
            ["%engineer%", 100000])
    """
    equity = EquityFilter.coerce(has_equity)
    where_cols: List[str] = []
    values: List[Any] = []

    if title:
        values.append(f"%{title}%")
        where_cols.append(f"LOWER(title) LIKE LOWER(${len(values)})")
    if min_salary is not None:
        values.append(min_salary)
        where_cols.append(f"salary >= ${len(values)}")
    if equity is EquityFilter.TRUE:
        where_cols.append("equity > 0")
    elif equity is EquityFilter.FALSE and equity_false_filters:
        where_cols.append("(equity = 0 OR equity IS NULL)")
    if company:
        values.append(company)
        where_cols.append(f"company_handle = ${len(values)}")

    return " AND ".join(where_cols), values
