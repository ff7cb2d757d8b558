"""
CRUD operations for Company model.

Filtered listing and partial updates go through the SQL fragment builders;
single-row reads and writes use the ORM.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError
from app.crud.sql import sql_for_company_filters, sql_for_partial_update
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# API field name -> column name for partial updates
COLUMN_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company in the database.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        Created Company instance

    Raises:
        BadRequestError: If the handle or name is already taken
    """
    if get_by_handle(db, company_data.handle):
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {company_data.name}")
    db.refresh(db_company)

    return db_company


def get_by_handle(db: Session, handle: str) -> Optional[Company]:
    """
    Retrieve a company by its handle.

    Returns:
        Company instance if found, None otherwise
    """
    return db.query(Company).filter(Company.handle == handle).first()


def find_all(db: Session, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    List companies matching the given filters, ordered by name.

    Args:
        db: Database session
        filters: Any of maxEmployees, minEmployees, nameLike, in the order
            they should appear in the WHERE clause

    Returns:
        List of company rows as dicts

    Raises:
        BadRequestError: On an unsupported filter name
    """
    conditions, values = sql_for_company_filters(filters)
    result = run_query(
        db,
        f"""SELECT handle,
                   name,
                   description,
                   num_employees,
                   logo_url
            FROM companies
            {conditions}
            ORDER BY name""",
        values,
    )
    return [dict(row) for row in result.mappings()]


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Optional[Company]:
    """
    Partially update a company.

    Only the fields present in `data` change.

    Args:
        db: Database session
        handle: Company to update
        data: API field names (name, description, numEmployees, logoUrl) to new values

    Returns:
        Updated Company instance if found, None otherwise

    Raises:
        BadRequestError: If data is empty or the new name is taken
    """
    set_cols, values = sql_for_partial_update(data, COLUMN_NAMES)
    handle_idx = len(values) + 1

    try:
        result = run_query(
            db,
            f"UPDATE companies SET {set_cols} WHERE handle = ${handle_idx}",
            [*values, handle],
        )
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data.get('name')}")

    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")

    return get_by_handle(db, handle)


def delete(db: Session, handle: str) -> bool:
    """
    Delete a company (and its jobs) by handle.

    Returns:
        True if deleted, False if not found
    """
    company = get_by_handle(db, handle)
    if not company:
        return False

    db.delete(company)
    db.commit()

    return True
