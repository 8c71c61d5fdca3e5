"""
User Model
Identity record mirrored from the external identity provider
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from src.config.database import Base


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    memberships = relationship("OrganizationMembership", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", foreign_keys="Expense.user_id")

    def __repr__(self):
        return f"<User {self.email}>"

    @property
    def display_name(self) -> str:
        """Name if known, otherwise the email address"""
        return self.name or self.email
