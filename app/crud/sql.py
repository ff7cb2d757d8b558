"""
SQL fragment builders shared by the CRUD modules.

Each builder returns clause text with positional `$N` placeholders plus the
ordered values that bind to them. Column names only ever come from the fixed
vocabulary in this module or a caller-owned translation table; request data
only flows into the values list.
"""

from typing import Any, List, Mapping, NamedTuple

from app.core.exceptions import BadRequestError


class ClauseResult(NamedTuple):
    """SQL clause text and the values for its `$1..$N` placeholders."""
    clause: str
    values: List[Any]


# Company filter name -> condition template
COMPANY_FILTERS = {
    "maxEmployees": "num_employees <= ${idx}",
    "minEmployees": "num_employees >= ${idx}",
    "nameLike": "name ILIKE ${idx}",
}


def sql_for_partial_update(data: Mapping[str, Any], column_names: Mapping[str, str]) -> ClauseResult:
    """
    Build the SET list for a partial update.

    Args:
        data: Fields to update, e.g. {"firstName": "Aliya", "age": 32}
        column_names: Field name -> column name; unmapped fields are used as-is

    Returns:
        ClauseResult('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If data is empty
    """
    if not data:
        raise BadRequestError("No data")

    cols = [
        f'"{column_names.get(field, field)}"=${idx}'
        for idx, field in enumerate(data, start=1)
    ]

    return ClauseResult(", ".join(cols), list(data.values()))


def sql_for_company_filters(filters: Mapping[str, Any]) -> ClauseResult:
    """
    Build the WHERE clause for a company search.

    Supports maxEmployees, minEmployees and nameLike. Placeholders are
    numbered in the order the filters are given.

    Raises:
        BadRequestError: On a filter name outside the supported set
    """
    if not filters:
        return ClauseResult("", [])

    conditions = []
    for idx, name in enumerate(filters, start=1):
        template = COMPANY_FILTERS.get(name)
        if template is None:
            raise BadRequestError(f"Unsupported company filter: {name}")
        conditions.append(template.format(idx=idx))

    return ClauseResult(f"WHERE {' AND '.join(conditions)}", list(filters.values()))


def sql_for_job_filters(filters: Mapping[str, Any]) -> ClauseResult:
    """
    Build the WHERE clause for a job search.

    Filters are always checked as hasEquity, minSalary, title, whatever order
    they arrive in. hasEquity only narrows the search when it is the string
    "true" and never takes a placeholder.
    """
    if not filters:
        return ClauseResult("", [])

    conditions = []
    values = []

    if filters.get("hasEquity") == "true":
        conditions.append("equity > 0")

    if "minSalary" in filters:
        values.append(filters["minSalary"])
        conditions.append(f"salary >= ${len(values)}")

    if "title" in filters:
        values.append(filters["title"])
        conditions.append(f"title ILIKE ${len(values)}")

    if not conditions:
        return ClauseResult("", [])

    return ClauseResult(f"WHERE {' AND '.join(conditions)}", values)
