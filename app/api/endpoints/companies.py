import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyResponse,
    CompanyDetailResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def company_filters(
    request: Request,
    minEmployees: Optional[int] = Query(None, ge=0),
    maxEmployees: Optional[int] = Query(None, ge=0),
    nameLike: Optional[str] = Query(None, min_length=1),
) -> Dict[str, Any]:
    """
    Collect company search filters in the order they appear in the query string.

    Known filters carry their validated value (nameLike becomes a substring
    pattern); unknown keys pass through untouched so the filter builder can
    reject them.
    """
    if minEmployees is not None and maxEmployees is not None and minEmployees > maxEmployees:
        raise HTTPException(
            status_code=400,
            detail="minEmployees cannot be greater than maxEmployees"
        )

    typed = {
        "minEmployees": minEmployees,
        "maxEmployees": maxEmployees,
        "nameLike": f"%{nameLike}%" if nameLike is not None else None,
    }
    return {
        key: typed[key] if key in typed else request.query_params[key]
        for key in request.query_params.keys()
    }


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a new company. Admin only.
    """
    new_company = company_crud.create(db, request)
    logger.info(f"Created company {new_company.handle} by {admin['sub']}")
    return new_company


@router.get("/", response_model=list[CompanyResponse])
def list_companies(
    filters: Dict[str, Any] = Depends(company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies ordered by name.

    Optional filters:
        minEmployees: Minimum number of employees
        maxEmployees: Maximum number of employees
        nameLike: Case-insensitive substring of the company name
    """
    return company_crud.find_all(db, filters)


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company by handle, including its jobs.
    """
    company = company_crud.get_by_handle(db, handle)

    if not company:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    return company


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a company. Admin only.

    Fields can be: name, description, numEmployees, logoUrl
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    company = company_crud.update(db, handle, data)

    if not company:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    return company


@router.delete("/{handle}", status_code=204)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Delete a company and its jobs. Admin only.
    """
    deleted = company_crud.delete(db, handle)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
    return None
