"""
Membership Service
Single authorization guard for organization-scoped operations
"""

from typing import Optional
from sqlalchemy.orm import Session

from src.models.organization import OrganizationMembership, MemberRole
from src.utils.exceptions import ForbiddenError
from src.utils.logger import setup_logger

logger = setup_logger()

NOT_A_MEMBER = "You are not a member of this organization"


class MembershipService:
    """Looks up memberships and enforces member / admin roles"""

    def get_membership(
        self,
        db: Session,
        organization_id: int,
        user_id: int
    ) -> Optional[OrganizationMembership]:
        """
        Fetch the membership for (organization, user)

        Returns:
            OrganizationMembership or None if the user does not belong to the organization
        """
        return db.query(OrganizationMembership).filter(
            OrganizationMembership.organization_id == organization_id,
            OrganizationMembership.user_id == user_id
        ).first()

    def require_member(
        self,
        db: Session,
        organization_id: int,
        user_id: int,
        message: str = NOT_A_MEMBER
    ) -> OrganizationMembership:
        """
        Require that user_id belongs to organization_id

        Raises:
            ForbiddenError: If the user is not a member
        """
        membership = self.get_membership(db, organization_id, user_id)
        if membership is None:
            logger.warning(f"User {user_id} denied access to organization {organization_id}: not a member")
            raise ForbiddenError(message)
        return membership

    def require_admin(
        self,
        db: Session,
        organization_id: int,
        user_id: int,
        message: str
    ) -> OrganizationMembership:
        """
        Require that user_id is an ADMIN of organization_id

        Args:
            message: Operation-specific refusal, e.g. "Only admins can approve expenses"

        Raises:
            ForbiddenError: If the user is not a member or not an admin
        """
        membership = self.get_membership(db, organization_id, user_id)
        if membership is None or membership.role != MemberRole.ADMIN:
            logger.warning(f"User {user_id} denied admin action in organization {organization_id}: {message}")
            raise ForbiddenError(message)
        return membership


# Create singleton instance
membership_service = MembershipService()
