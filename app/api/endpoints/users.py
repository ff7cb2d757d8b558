"""
User management endpoints.

Admins can list and create users (including other admins). Each user can
read, update and delete their own account and apply to jobs; admins can do
all of this for any user.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_correct_user_or_admin
from app.core.security import create_user_token
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserResponse,
    UserDetailResponse,
    UserCreateResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


def _user_not_found(username: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"No user: {username}")


@router.post("/", status_code=201, response_model=UserCreateResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a user. Admin only.

    Unlike /auth/register this can create admins. Returns the new user
    and a token for them.
    """
    new_user = user_crud.register(db, request)
    logger.info(f"Admin {admin['sub']} created user {new_user.username}")

    return UserCreateResponse(
        user=UserResponse.model_validate(new_user),
        access_token=create_user_token(new_user.username, new_user.is_admin),
    )


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """List all users. Admin only."""
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(ensure_correct_user_or_admin)
):
    """
    Get a user's profile and the ids of the jobs they applied to.
    """
    user = user_crud.get_by_username(db, username)
    if not user:
        raise _user_not_found(username)

    return UserDetailResponse(
        **UserResponse.model_validate(user).model_dump(),
        jobs=user_crud.get_applied_job_ids(db, username),
    )


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    claims: dict = Depends(ensure_correct_user_or_admin)
):
    """
    Partially update a user.

    Fields can be: firstName, lastName, email, password
    """
    data = request.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)
    user = user_crud.update(db, username, data)

    if not user:
        raise _user_not_found(username)

    return user


@router.delete("/{username}", status_code=204)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    claims: dict = Depends(ensure_correct_user_or_admin)
):
    """Delete a user and their applications."""
    deleted = user_crud.delete(db, username)

    if not deleted:
        raise _user_not_found(username)

    logger.info(f"Deleted user {username} (by {claims['sub']})")
    return None


@router.post("/{username}/jobs/{job_id}", status_code=201)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    claims: dict = Depends(ensure_correct_user_or_admin)
):
    """
    Apply a user to a job.

    Returns {"applied": job_id}
    """
    if not user_crud.get_by_username(db, username):
        raise _user_not_found(username)
    if not job_crud.get_by_id(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")

    user_crud.apply_to_job(db, username, job_id)
    return {"applied": job_id}
