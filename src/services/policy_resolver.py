"""
Policy Resolver
Finds the spending policy that governs a (organization, user, category) triple

Precedence is two-tier: a policy scoped to the user always wins over the
organization-wide policy for the same category, whichever limit is stricter.
Neither tier is expected to hold more than one row; if storage does hold
duplicates the lowest id is taken rather than raising.
"""

from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from src.models.policy import Policy, PolicyScope, OrgWide, UserSpecific
from src.utils.exceptions import NotFoundError
from src.utils.logger import setup_logger

logger = setup_logger()

NO_POLICY_FOUND = "No policy found for this user and category"

REASON_USER_SPECIFIC = "User-specific policy takes precedence over organization-wide policy"
REASON_ORGANIZATION = "No user-specific policy found, using organization-wide policy"
REASON_NONE = "No policy found for this user and category combination"


@dataclass
class PolicyDebugResult:
    """Diagnostic view of a resolution"""
    user_specific_policy: Optional[Policy]
    organization_policy: Optional[Policy]
    selected_policy: Optional[Policy]
    reason: str


class PolicyResolver:
    """Read-only policy lookup with user-over-organization precedence"""

    def find_policy(
        self,
        db: Session,
        organization_id: int,
        category_id: int,
        scope: PolicyScope
    ) -> Optional[Policy]:
        """
        Return the first policy with exactly the given scope

        Args:
            db: Database session
            organization_id: Organization the policy belongs to
            category_id: Expense category the policy covers
            scope: OrgWide() or UserSpecific(user_id)
        """
        return db.query(Policy).filter(
            Policy.organization_id == organization_id,
            Policy.category_id == category_id,
            Policy.scope_clause(scope)
        ).order_by(Policy.id.asc()).first()

    def find(
        self,
        db: Session,
        organization_id: int,
        user_id: int,
        category_id: int
    ) -> Optional[Policy]:
        """Resolve the applicable policy, or None when neither tier has one"""
        policy = self.find_policy(db, organization_id, category_id, UserSpecific(user_id=user_id))
        if policy is not None:
            return policy
        return self.find_policy(db, organization_id, category_id, OrgWide())

    def resolve(
        self,
        db: Session,
        organization_id: int,
        user_id: int,
        category_id: int
    ) -> Policy:
        """
        Resolve the applicable policy

        Raises:
            NotFoundError: If no user-specific or org-wide policy exists
        """
        policy = self.find(db, organization_id, user_id, category_id)
        if policy is None:
            raise NotFoundError(NO_POLICY_FOUND)
        return policy

    def debug(
        self,
        db: Session,
        organization_id: int,
        user_id: int,
        category_id: int
    ) -> PolicyDebugResult:
        """
        Explain a resolution: both candidates, the selected one and why

        Never raises for a missing policy; selected_policy is None instead.
        """
        user_policy = self.find_policy(db, organization_id, category_id, UserSpecific(user_id=user_id))
        organization_policy = self.find_policy(db, organization_id, category_id, OrgWide())

        if user_policy is not None:
            selected, reason = user_policy, REASON_USER_SPECIFIC
        elif organization_policy is not None:
            selected, reason = organization_policy, REASON_ORGANIZATION
        else:
            selected, reason = None, REASON_NONE

        logger.debug(
            f"Policy debug org={organization_id} user={user_id} category={category_id}: "
            f"selected={selected.id if selected else None} ({reason})"
        )

        return PolicyDebugResult(
            user_specific_policy=user_policy,
            organization_policy=organization_policy,
            selected_policy=selected,
            reason=reason
        )


# Create singleton instance
policy_resolver = PolicyResolver()
