"""
Review Service
Manual approval workflow: SUBMITTED -> APPROVED | REJECTED
"""

from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional

from src.models.expense import Expense, ExpenseStatus
from src.models.review import ExpenseReview
from src.services.membership_service import membership_service
from src.utils.exceptions import NotFoundError, InvalidStateError
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()

# Target status -> verb used in user-facing messages
_VERBS = {
    ExpenseStatus.APPROVED: ("approve", "approved"),
    ExpenseStatus.REJECTED: ("reject", "rejected"),
}


class ReviewService:
    """Service for admin review of pending expenses"""

    def __init__(self):
        self.membership_service = membership_service

    def approve_expense(
        self,
        db: Session,
        expense_id: int,
        reviewer_id: int,
        comment: Optional[str] = None
    ) -> Expense:
        """Approve a submitted expense"""
        return self._transition(db, expense_id, reviewer_id, ExpenseStatus.APPROVED, comment)

    def reject_expense(
        self,
        db: Session,
        expense_id: int,
        reviewer_id: int,
        comment: Optional[str] = None
    ) -> Expense:
        """Reject a submitted expense"""
        return self._transition(db, expense_id, reviewer_id, ExpenseStatus.REJECTED, comment)

    def list_pending(
        self,
        db: Session,
        user_id: int,
        organization_id: int
    ) -> List[Expense]:
        """
        List expenses awaiting review, oldest first

        Raises:
            ForbiddenError: If the caller is not an admin of the organization
        """
        self.membership_service.require_admin(
            db, organization_id, user_id, "Only admins can list pending expenses"
        )

        return db.query(Expense).filter(
            Expense.organization_id == organization_id,
            Expense.status == ExpenseStatus.SUBMITTED
        ).order_by(Expense.created_at.asc(), Expense.id.asc()).all()

    def _transition(
        self,
        db: Session,
        expense_id: int,
        reviewer_id: int,
        new_status: ExpenseStatus,
        comment: Optional[str]
    ) -> Expense:
        """
        Move a SUBMITTED expense to new_status and append the review row

        The status write is conditional on the row still being SUBMITTED, so a
        concurrent review that committed first makes this one fail instead of
        writing a second review.

        Raises:
            NotFoundError: If the expense does not exist
            ForbiddenError: If the reviewer is not an admin of the expense's organization
            InvalidStateError: If the expense is not (or no longer) SUBMITTED
        """
        verb, past = _VERBS[new_status]

        expense = db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError("Expense not found")

        self.membership_service.require_admin(
            db, expense.organization_id, reviewer_id, f"Only admins can {verb} expenses"
        )

        invalid_state = f"Only submitted expenses can be {past}"
        if not expense.is_pending:
            raise InvalidStateError(invalid_state)

        try:
            updated = db.query(Expense).filter(
                Expense.id == expense_id,
                Expense.status == ExpenseStatus.SUBMITTED
            ).update(
                {Expense.status: new_status, Expense.updated_at: datetime.utcnow()},
                synchronize_session=False
            )

            if updated != 1:
                logger.warning(f"Expense {expense_id} left SUBMITTED before {verb} by user {reviewer_id} committed")
                raise InvalidStateError(invalid_state)

            db.add(ExpenseReview(
                expense_id=expense_id,
                reviewer_id=reviewer_id,
                status=new_status,
                comment=comment
            ))
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(expense)

        logger.info(f"Expense {expense_id} {past} by user {reviewer_id}")
        log_audit(reviewer_id, f"{verb}_expense", f"expense={expense_id} | comment={comment or ''}")

        return expense


# Create singleton instance
review_service = ReviewService()
