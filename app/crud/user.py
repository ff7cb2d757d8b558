"""
CRUD operations for User model and job applications.
"""

import logging
from typing import Any, List, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError
from app.core.security import get_password_hash, verify_password
from app.crud.sql import sql_for_partial_update
from app.models.application import Application
from app.models.user import User
from app.schemas.user import UserCreateRequest, UserRegisterRequest

logger = logging.getLogger(__name__)

# API field name -> column name for partial updates
COLUMN_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "password": "hashed_password",
}


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """
    Look up a user and check their password.

    Returns:
        The User if the credentials match, None otherwise
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def register(db: Session, user_data: UserRegisterRequest) -> User:
    """
    Create a user with a hashed password.

    Admin status is only honored for UserCreateRequest (admin-created users).

    Raises:
        BadRequestError: If the username is taken
    """
    if get_by_username(db, user_data.username):
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    is_admin = user_data.is_admin if isinstance(user_data, UserCreateRequest) else False

    db_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )

    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate username: {user_data.username}")
    db.refresh(db_user)

    logger.info(f"New user registered: {db_user.username} (admin: {db_user.is_admin})")
    return db_user


def get_by_username(db: Session, username: str) -> Optional[User]:
    """Retrieve a user by username, or None."""
    return db.query(User).filter(User.username == username).first()


def find_all(db: Session) -> List[User]:
    """List all users ordered by username."""
    return db.query(User).order_by(User.username).all()


def update(db: Session, username: str, data: Mapping[str, Any]) -> Optional[User]:
    """
    Partially update a user.

    A new password is hashed before it is stored.

    Args:
        db: Database session
        username: User to update
        data: API field names (firstName, lastName, email, password) to new values

    Returns:
        Updated User instance if found, None otherwise

    Raises:
        BadRequestError: If data is empty
    """
    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, COLUMN_NAMES)
    username_idx = len(values) + 1

    result = run_query(
        db,
        f"UPDATE users SET {set_cols} WHERE username = ${username_idx}",
        [*values, username],
    )
    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")

    return get_by_username(db, username)


def delete(db: Session, username: str) -> bool:
    """
    Delete a user (and their applications).

    Returns:
        True if deleted, False if not found
    """
    user = get_by_username(db, username)
    if not user:
        return False

    db.delete(user)
    db.commit()

    return True


def apply_to_job(db: Session, username: str, job_id: int) -> Application:
    """
    Record that a user applied to a job.

    Caller must ensure both the user and the job exist.

    Raises:
        BadRequestError: If the user already applied to this job
    """
    if db.get(Application, (username, job_id)) is not None:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    application = Application(username=username, job_id=job_id)
    db.add(application)
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
    return application


def get_applied_job_ids(db: Session, username: str) -> List[int]:
    """Ids of the jobs a user has applied to, ascending."""
    result = run_query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )
    return list(result.scalars())
