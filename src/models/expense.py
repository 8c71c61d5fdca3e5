"""
Expense Model
Represents expense claims submitted by organization members
"""

from sqlalchemy import Column, Integer, DateTime, Date, Enum, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from src.config.database import Base


class ExpenseStatus(str, enum.Enum):
    """Expense status"""
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Expense(Base):
    """Expense model"""
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expense_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)

    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("expense_categories.id"), nullable=False, index=True)

    # Expense details, amount in minor currency units
    amount = Column(Integer, nullable=False)
    expense_date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)

    status = Column(Enum(ExpenseStatus), default=ExpenseStatus.SUBMITTED, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="expenses")
    user = relationship("User", back_populates="expenses", foreign_keys=[user_id])
    category = relationship("ExpenseCategory", back_populates="expenses")
    reviews = relationship(
        "ExpenseReview",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseReview.id"
    )

    def __repr__(self):
        return f"<Expense {self.id} - {self.amount} - {self.status.value}>"

    @property
    def is_pending(self) -> bool:
        return self.status == ExpenseStatus.SUBMITTED
