"""
Pydantic schemas for companies.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel


def _check_logo_url(v: Optional[str]) -> Optional[str]:
    """Logo must be an absolute http(s) URL."""
    if v is not None and not v.startswith(("http://", "https://")):
        raise ValueError("logoUrl must be an http(s) URL")
    return v


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_logo_url(v)


class CompanyUpdateRequest(CamelModel):
    """Schema for a partial company update. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """These columns are NOT NULL; omit the field instead of sending null."""
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_logo_url(v)


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJobResponse(CamelModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with its job postings"""
    jobs: List[CompanyJobResponse] = []
