"""
Organization Service
Organizations and their memberships
"""

from sqlalchemy.orm import Session
from typing import List, Tuple

from src.models.organization import Organization, OrganizationMembership, MemberRole
from src.models.user import User
from src.services.membership_service import membership_service
from src.utils.exceptions import NotFoundError, ConflictError, InvalidStateError
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()


class OrganizationService:
    """Service for organizations and memberships"""

    def __init__(self):
        self.membership_service = membership_service

    def create_organization(self, db: Session, user_id: int, name: str) -> Organization:
        """Create an organization with the creator as its first ADMIN"""
        organization = Organization(name=name)
        organization.memberships.append(
            OrganizationMembership(user_id=user_id, role=MemberRole.ADMIN)
        )
        db.add(organization)
        db.commit()
        db.refresh(organization)

        logger.info(f"Organization {organization.id} '{organization.name}' created by user {user_id}")
        return organization

    def list_organizations(self, db: Session, user_id: int) -> List[Tuple[Organization, MemberRole]]:
        """Organizations the user belongs to, with the user's role in each"""
        rows = db.query(Organization, OrganizationMembership.role).join(
            OrganizationMembership,
            OrganizationMembership.organization_id == Organization.id
        ).filter(
            OrganizationMembership.user_id == user_id
        ).order_by(Organization.created_at.asc(), Organization.id.asc()).all()
        return [(organization, role) for organization, role in rows]

    def get_organization(self, db: Session, user_id: int, organization_id: int) -> Tuple[Organization, MemberRole]:
        """
        Fetch an organization for one of its members

        Returns:
            Tuple of (organization, caller's role)
        """
        membership = self.membership_service.require_member(db, organization_id, user_id)
        return membership.organization, membership.role

    def update_organization(self, db: Session, user_id: int, organization_id: int, name: str) -> Organization:
        """Rename an organization"""
        membership = self.membership_service.require_admin(
            db, organization_id, user_id, "Only admins can update organization details"
        )
        organization = membership.organization
        organization.name = name
        db.commit()
        db.refresh(organization)
        return organization

    def get_current_membership(self, db: Session, user_id: int, organization_id: int) -> OrganizationMembership:
        """The caller's own membership"""
        return self.membership_service.require_member(db, organization_id, user_id)

    def list_members(self, db: Session, user_id: int, organization_id: int) -> List[OrganizationMembership]:
        """Members in the order they joined"""
        self.membership_service.require_member(db, organization_id, user_id)
        return db.query(OrganizationMembership).filter(
            OrganizationMembership.organization_id == organization_id
        ).order_by(OrganizationMembership.created_at.asc(), OrganizationMembership.id.asc()).all()

    def invite_user(
        self,
        db: Session,
        user_id: int,
        organization_id: int,
        email: str,
        role: MemberRole = MemberRole.MEMBER
    ) -> OrganizationMembership:
        """
        Add an existing user to the organization

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If no user has this email
            ConflictError: If the user is already a member
        """
        self.membership_service.require_admin(
            db, organization_id, user_id, "Only admins can invite users"
        )

        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFoundError("User not found with this email")

        if self.membership_service.get_membership(db, organization_id, user.id):
            raise ConflictError("User is already a member of this organization")

        membership = OrganizationMembership(
            organization_id=organization_id,
            user_id=user.id,
            role=role
        )
        db.add(membership)
        db.commit()
        db.refresh(membership)

        log_audit(user_id, "invite_user", f"organization={organization_id} | user={user.id} | role={role.value}")
        return membership

    def remove_member(self, db: Session, user_id: int, organization_id: int, member_user_id: int) -> None:
        """
        Remove another member

        Raises:
            InvalidStateError: If an admin tries to remove themself
        """
        self.membership_service.require_admin(
            db, organization_id, user_id, "Only admins can remove members"
        )

        if member_user_id == user_id:
            raise InvalidStateError("You cannot remove yourself from the organization")

        membership = self.membership_service.get_membership(db, organization_id, member_user_id)
        if membership is None:
            raise NotFoundError("Member not found")

        db.delete(membership)
        db.commit()

        log_audit(user_id, "remove_member", f"organization={organization_id} | user={member_user_id}")

    def update_member_role(
        self,
        db: Session,
        user_id: int,
        organization_id: int,
        member_user_id: int,
        role: MemberRole
    ) -> OrganizationMembership:
        """
        Change another member's role

        Raises:
            InvalidStateError: If an admin tries to change their own role
        """
        self.membership_service.require_admin(
            db, organization_id, user_id, "Only admins can update member roles"
        )

        if member_user_id == user_id:
            raise InvalidStateError("You cannot change your own role")

        membership = self.membership_service.get_membership(db, organization_id, member_user_id)
        if membership is None:
            raise NotFoundError("Member not found")

        membership.role = role
        db.commit()
        db.refresh(membership)

        log_audit(user_id, "update_member_role", f"organization={organization_id} | user={member_user_id} | role={role.value}")
        return membership


# Create singleton instance
organization_service = OrganizationService()
