"""
User model for authentication.

Users log in with their username; admins may manage companies, jobs and
other users.
"""

from sqlalchemy import Column, String, Text, Boolean
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """User account. The username is the primary key and the JWT subject."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # Authentication credentials
    hashed_password = Column(Text, nullable=False)

    # User profile
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    # Admin role for protected endpoints
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
