"""
Expense Category Model
Organization-defined buckets that expenses and policies attach to
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from src.config.database import Base


class ExpenseCategory(Base):
    """Expense category model"""
    __tablename__ = "expense_categories"
    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_category_organization_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="categories")
    policies = relationship("Policy", back_populates="category", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="category")

    def __repr__(self):
        return f"<ExpenseCategory {self.name}>"
