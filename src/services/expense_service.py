"""
Expense Service
Business logic for expense submission and retrieval
"""

from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from src.models.category import ExpenseCategory
from src.models.expense import Expense, ExpenseStatus
from src.models.review import ExpenseReview
from src.models.organization import MemberRole
from src.schemas.expense import ExpenseSubmit
from src.services.disposition_service import disposition_service, Disposition
from src.services.membership_service import membership_service
from src.services.policy_resolver import policy_resolver
from src.utils.exceptions import NotFoundError, ForbiddenError
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()


class ExpenseService:
    """Service for expense-related business logic"""

    def __init__(self):
        """Initialize with dependent services"""
        self.policy_resolver = policy_resolver
        self.disposition_service = disposition_service
        self.membership_service = membership_service

    def submit_expense(
        self,
        db: Session,
        user_id: int,
        data: ExpenseSubmit
    ) -> Tuple[Expense, Disposition]:
        """
        Submit an expense and apply the governing policy

        The expense row and, for automatic decisions, the system review row are
        written in one transaction.

        Args:
            db: Database session
            user_id: Submitting user
            data: Validated submission

        Returns:
            Tuple of (expense, disposition)

        Raises:
            ForbiddenError: If the user is not a member of the organization
            NotFoundError: If the category is not part of the organization
        """
        self.membership_service.require_member(db, data.organization_id, user_id)

        category = db.query(ExpenseCategory).filter(ExpenseCategory.id == data.category_id).first()
        if not category or category.organization_id != data.organization_id:
            raise NotFoundError("Category not found in this organization")

        policy = self.policy_resolver.find(db, data.organization_id, user_id, data.category_id)
        disposition = self.disposition_service.decide(policy, data.amount)

        expense = Expense(
            organization_id=data.organization_id,
            user_id=user_id,
            category_id=data.category_id,
            amount=data.amount,
            expense_date=data.expense_date,
            description=data.description,
            status=disposition.status
        )

        try:
            db.add(expense)
            db.flush()

            if disposition.is_automatic:
                db.add(ExpenseReview(
                    expense_id=expense.id,
                    reviewer_id=None,
                    status=disposition.status,
                    comment=disposition.message
                ))

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(expense)

        logger.info(
            f"Expense {expense.id} submitted by user {user_id} in organization "
            f"{data.organization_id}: {disposition.status.value} "
            f"(policy {policy.id if policy else 'none'})"
        )
        if disposition.is_automatic:
            log_audit(None, f"auto_{disposition.status.value.lower()}_expense", f"expense={expense.id} | {disposition.message}")

        return expense, disposition

    def list_expenses(
        self,
        db: Session,
        user_id: int,
        organization_id: int,
        status: Optional[ExpenseStatus] = None
    ) -> List[Expense]:
        """
        List expenses visible to the user, newest first

        Admins see every expense of the organization, members only their own.
        """
        membership = self.membership_service.require_member(db, organization_id, user_id)

        query = db.query(Expense).filter(Expense.organization_id == organization_id)
        if membership.role != MemberRole.ADMIN:
            query = query.filter(Expense.user_id == user_id)
        if status is not None:
            query = query.filter(Expense.status == status)

        return query.order_by(Expense.created_at.desc(), Expense.id.desc()).all()

    def get_expense(self, db: Session, user_id: int, expense_id: int) -> Expense:
        """
        Fetch one expense for its submitter or an organization admin

        Raises:
            NotFoundError: If the expense does not exist
            ForbiddenError: If the caller is neither the submitter nor an admin
        """
        expense = db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError("Expense not found")

        membership = self.membership_service.require_member(db, expense.organization_id, user_id)
        if expense.user_id != user_id and membership.role != MemberRole.ADMIN:
            raise ForbiddenError("Access denied")

        return expense


# Create singleton instance
expense_service = ExpenseService()
