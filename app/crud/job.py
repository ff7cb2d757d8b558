"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError
from app.crud.sql import sql_for_job_filters, sql_for_partial_update
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

# Editable job fields (title, salary, equity) share their column names
COLUMN_NAMES: Dict[str, str] = {}


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If the company does not exist
    """
    if db.get(Company, job_data.company_handle) is None:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Args:
        db: Database session
        job_id: Job ID to retrieve

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def find_all(db: Session, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    List jobs matching the given filters, ordered by title.

    Args:
        db: Database session
        filters: Any of hasEquity ("true"/"false"), minSalary, title (ILIKE pattern)

    Returns:
        List of job rows as dicts
    """
    conditions, values = sql_for_job_filters(filters)
    result = run_query(
        db,
        f"""SELECT id,
                   title,
                   salary,
                   equity,
                   company_handle
            FROM jobs
            {conditions}
            ORDER BY title, id""",
        values,
    )
    return [dict(row) for row in result.mappings()]


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Optional[Job]:
    """
    Partially update a job.

    This is a "partial update": it's fine if data doesn't contain all the
    fields; this only changes provided ones.

    Args:
        db: Database session
        job_id: Job ID to update
        data: API field names (title, salary, equity) to new values

    Returns:
        Updated Job instance if found, None otherwise

    Raises:
        BadRequestError: If data is empty
    """
    set_cols, values = sql_for_partial_update(data, COLUMN_NAMES)
    id_idx = len(values) + 1

    result = run_query(
        db,
        f"UPDATE jobs SET {set_cols} WHERE id = ${id_idx}",
        [*values, job_id],
    )
    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")

    return get_by_id(db, job_id)


def delete(db: Session, job_id: int) -> bool:
    """
    Delete a job by ID.

    Args:
        db: Database session
        job_id: Job ID to delete

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True
