import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin
from app.core.exceptions import BadRequestError
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobUpdateRequest, JobResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

JOB_FILTERS = ("minSalary", "title", "hasEquity")


def job_filters(
    request: Request,
    minSalary: Optional[int] = Query(None, ge=0),
    title: Optional[str] = Query(None, min_length=1),
    hasEquity: Optional[str] = Query(None, pattern="^(true|false)$"),
) -> Dict[str, Any]:
    """
    Collect job search filters.

    title becomes a substring pattern; hasEquity stays the string
    "true"/"false".

    Raises:
        BadRequestError: On a query key that is not a job filter
    """
    for key in request.query_params.keys():
        if key not in JOB_FILTERS:
            raise BadRequestError(f"Unsupported job filter: {key}")

    filters: Dict[str, Any] = {}
    if minSalary is not None:
        filters["minSalary"] = minSalary
    if title is not None:
        filters["title"] = f"%{title}%"
    if hasEquity is not None:
        filters["hasEquity"] = hasEquity
    return filters


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a new job posting for an existing company. Admin only.
    """
    new_job = job_crud.create(db, request)
    logger.info(f"Created job {new_job.id}: {new_job.title} ({new_job.company_handle})")
    return new_job


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.
    """
    job = job_crud.get_by_id(db, job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.get("/", response_model=list[JobResponse])
def list_jobs(
    filters: Dict[str, Any] = Depends(job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs ordered by title.

    Optional filters:
        minSalary: Minimum salary
        title: Case-insensitive substring of the job title
        hasEquity: "true" to only list jobs offering equity
    """
    return job_crud.find_all(db, filters)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a job. Admin only.

    Fields can be: title, salary, equity
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    job = job_crud.update(db, job_id, data)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.delete("/{job_id}", status_code=204)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Delete a job by ID. Admin only.
    """
    deleted = job_crud.delete(db, job_id)

    if not deleted:
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info(f"Deleted job {job_id}")
    return None
