"""
Disposition Service
Decides the initial status of a newly submitted expense from its policy
"""

from dataclasses import dataclass
from typing import Optional

from src.models.expense import ExpenseStatus
from src.models.policy import Policy
from src.utils.exceptions import ValidationFailedError
from src.utils.helpers import format_currency


@dataclass(frozen=True)
class Disposition:
    """Status to create the expense in, and the message shown to the submitter"""
    status: ExpenseStatus
    message: str

    @property
    def is_automatic(self) -> bool:
        """Auto-approved and auto-rejected expenses get a system review row"""
        return self.status != ExpenseStatus.SUBMITTED


class DispositionService:
    """Pure policy-to-outcome decision procedure"""

    def decide(self, policy: Optional[Policy], amount: int) -> Disposition:
        """
        Decide the disposition of an expense

        Rules, in order:
            1. no policy -> SUBMITTED for manual review
            2. amount above max_amount -> REJECTED, whatever auto_approve says
            3. within limit and auto_approve -> APPROVED
            4. within limit otherwise -> SUBMITTED for manual review

        Args:
            policy: Resolved policy, or None
            amount: Expense amount in minor currency units

        Returns:
            Disposition

        Raises:
            ValidationFailedError: If amount is not a positive integer
        """
        # bool is an int subclass; floats are refused so the boundary stays exact
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationFailedError("Amount must be a positive whole number of cents")

        if policy is None:
            return Disposition(
                status=ExpenseStatus.SUBMITTED,
                message=(
                    "Expense submitted for manual review. "
                    "No policy found for this category and user combination."
                )
            )

        limit = format_currency(policy.max_amount)
        period = policy.period.value.lower()

        if not policy.allows(amount):
            return Disposition(
                status=ExpenseStatus.REJECTED,
                message=(
                    f"Expense auto-rejected: amount {format_currency(amount)} exceeds "
                    f"the {period} policy limit of {limit}."
                )
            )

        if policy.auto_approve:
            return Disposition(
                status=ExpenseStatus.APPROVED,
                message=f"Expense auto-approved: amount is within the {period} policy limit of {limit}."
            )

        return Disposition(
            status=ExpenseStatus.SUBMITTED,
            message=(
                "Expense submitted for manual review. "
                "Amount is within policy limits but requires manual approval."
            )
        )


# Create singleton instance
disposition_service = DispositionService()
