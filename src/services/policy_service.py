"""
Policy Service
Policy administration and member-facing resolution
"""

from sqlalchemy.orm import Session
from typing import List

from src.models.category import ExpenseCategory
from src.models.policy import Policy, PolicyPeriod, UserSpecific, OrgWide
from src.schemas.policy import PolicyCreate, PolicyUpdate
from src.services.membership_service import membership_service
from src.services.policy_resolver import policy_resolver, PolicyDebugResult
from src.utils.exceptions import NotFoundError
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()


class PolicyService:
    """Service for spending policies"""

    def __init__(self):
        self.membership_service = membership_service
        self.policy_resolver = policy_resolver

    def list_policies(self, db: Session, user_id: int, organization_id: int) -> List[Policy]:
        """List an organization's policies, org-wide first, then by category"""
        self.membership_service.require_member(db, organization_id, user_id)

        return db.query(Policy).filter(
            Policy.organization_id == organization_id
        ).order_by(
            Policy.user_id.is_not(None),
            Policy.user_id.asc(),
            Policy.category_id.asc(),
            Policy.id.asc()
        ).all()

    def get_policy(self, db: Session, user_id: int, policy_id: int) -> Policy:
        """Fetch a policy visible to a member of its organization"""
        policy = self._load(db, policy_id)
        self.membership_service.require_member(db, policy.organization_id, user_id)
        return policy

    def create_policy(self, db: Session, user_id: int, data: PolicyCreate) -> Policy:
        """
        Create an org-wide or user-specific policy

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the category or target user is outside the organization
        """
        self.membership_service.require_admin(
            db, data.organization_id, user_id, "Only admins can create policies"
        )

        category = db.query(ExpenseCategory).filter(ExpenseCategory.id == data.category_id).first()
        if not category or category.organization_id != data.organization_id:
            raise NotFoundError("Category not found in this organization")

        if data.user_id is not None:
            target = self.membership_service.get_membership(db, data.organization_id, data.user_id)
            if target is None:
                raise NotFoundError("User is not a member of this organization")
            scope = UserSpecific(user_id=data.user_id)
        else:
            scope = OrgWide()

        policy = Policy(
            organization_id=data.organization_id,
            category_id=data.category_id,
            max_amount=data.max_amount,
            period=PolicyPeriod(data.period.value),
            auto_approve=data.auto_approve
        )
        policy.scope = scope

        db.add(policy)
        db.commit()
        db.refresh(policy)

        logger.info(f"Policy {policy.id} created in organization {policy.organization_id} ({scope})")
        log_audit(user_id, "create_policy", f"policy={policy.id} | max_amount={policy.max_amount} | period={policy.period.value} | auto_approve={policy.auto_approve}")
        return policy

    def update_policy(self, db: Session, user_id: int, policy_id: int, data: PolicyUpdate) -> Policy:
        """
        Change limit, period and auto-approve flag

        Expenses already decided under the old values are left as they are.
        """
        policy = self._load(db, policy_id)
        self.membership_service.require_admin(
            db, policy.organization_id, user_id, "Only admins can update policies"
        )

        policy.max_amount = data.max_amount
        policy.period = PolicyPeriod(data.period.value)
        policy.auto_approve = data.auto_approve

        db.commit()
        db.refresh(policy)

        log_audit(user_id, "update_policy", f"policy={policy.id} | max_amount={policy.max_amount} | period={policy.period.value} | auto_approve={policy.auto_approve}")
        return policy

    def delete_policy(self, db: Session, user_id: int, policy_id: int) -> None:
        """Delete a policy"""
        policy = self._load(db, policy_id)
        self.membership_service.require_admin(
            db, policy.organization_id, user_id, "Only admins can delete policies"
        )

        db.delete(policy)
        db.commit()

        log_audit(user_id, "delete_policy", f"policy={policy_id}")

    def resolve_policy(
        self,
        db: Session,
        actor_id: int,
        organization_id: int,
        user_id: int,
        category_id: int
    ) -> Policy:
        """Resolve the policy governing user_id's expenses in category_id"""
        self.membership_service.require_member(db, organization_id, actor_id)
        return self.policy_resolver.resolve(db, organization_id, user_id, category_id)

    def debug_policy(
        self,
        db: Session,
        actor_id: int,
        organization_id: int,
        user_id: int,
        category_id: int
    ) -> PolicyDebugResult:
        """Explain which policy would govern user_id's expenses in category_id"""
        self.membership_service.require_member(db, organization_id, actor_id)
        return self.policy_resolver.debug(db, organization_id, user_id, category_id)

    def _load(self, db: Session, policy_id: int) -> Policy:
        policy = db.query(Policy).filter(Policy.id == policy_id).first()
        if not policy:
            raise NotFoundError("Policy not found")
        return policy


# Create singleton instance
policy_service = PolicyService()
