"""
Expense Review Model
Append-only audit record of every expense status transition
"""

from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime

from src.config.database import Base
from src.models.expense import ExpenseStatus


class ExpenseReview(Base):
    """Expense review model"""
    __tablename__ = "expense_reviews"

    id = Column(Integer, primary_key=True, index=True)

    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    # NULL for decisions taken automatically by policy
    reviewer_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    status = Column(Enum(ExpenseStatus), nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    expense = relationship("Expense", back_populates="reviews")
    reviewer = relationship("User", foreign_keys=[reviewer_id])

    def __repr__(self):
        return f"<ExpenseReview expense={self.expense_id} - {self.status.value}>"

    @property
    def is_system(self) -> bool:
        return self.reviewer_id is None
