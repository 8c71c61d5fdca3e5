"""
Policy Model
Spending rule for a category, organization-wide or narrowed to one member
"""

from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, Boolean, CheckConstraint
from sqlalchemy.orm import relationship
from dataclasses import dataclass
from datetime import datetime
from typing import Union
import enum

from src.config.database import Base


class PolicyPeriod(str, enum.Enum):
    """Period the limit is expressed over"""
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class OrgWide:
    """Policy applies to every member of the organization"""

    @property
    def user_id(self):
        return None


@dataclass(frozen=True)
class UserSpecific:
    """Policy applies to a single member and overrides the org-wide one"""
    user_id: int


PolicyScope = Union[OrgWide, UserSpecific]


class Policy(Base):
    """Policy model"""
    __tablename__ = "policies"
    __table_args__ = (
        CheckConstraint("max_amount > 0", name="ck_policy_max_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("expense_categories.id", ondelete="CASCADE"), nullable=False, index=True)

    # NULL encodes the org-wide scope; use Policy.scope instead of reading this directly
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    # Limit in minor currency units
    max_amount = Column(Integer, nullable=False)
    period = Column(Enum(PolicyPeriod), default=PolicyPeriod.MONTHLY, nullable=False)
    auto_approve = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    organization = relationship("Organization", back_populates="policies")
    category = relationship("ExpenseCategory", back_populates="policies")
    user = relationship("User")

    def __repr__(self):
        return f"<Policy {self.id} - {self.scope} - {self.max_amount}/{self.period.value}>"

    @property
    def scope(self) -> PolicyScope:
        if self.user_id is None:
            return OrgWide()
        return UserSpecific(user_id=self.user_id)

    @scope.setter
    def scope(self, value: PolicyScope):
        self.user_id = value.user_id

    @property
    def is_user_specific(self) -> bool:
        return isinstance(self.scope, UserSpecific)

    @staticmethod
    def scope_clause(scope: PolicyScope):
        """SQL criterion selecting policies with the given scope"""
        if isinstance(scope, UserSpecific):
            return Policy.user_id == scope.user_id
        return Policy.user_id.is_(None)

    def allows(self, amount: int) -> bool:
        """Whether amount (minor units) is within the limit, boundary inclusive"""
        return amount <= self.max_amount
