"""
Category Service
Expense category administration
"""

from sqlalchemy.orm import Session
from typing import List, Optional

from src.models.category import ExpenseCategory
from src.models.expense import Expense
from src.schemas.category import CategoryCreate, CategoryUpdate
from src.services.membership_service import membership_service
from src.utils.exceptions import NotFoundError, ConflictError, InvalidStateError
from src.utils.logger import setup_logger, log_audit

logger = setup_logger()

DUPLICATE_NAME = "A category with this name already exists in this organization"


class CategoryService:
    """Service for expense categories"""

    def __init__(self):
        self.membership_service = membership_service

    def list_categories(self, db: Session, user_id: int, organization_id: int) -> List[ExpenseCategory]:
        """List an organization's categories by name"""
        self.membership_service.require_member(db, organization_id, user_id)
        return db.query(ExpenseCategory).filter(
            ExpenseCategory.organization_id == organization_id
        ).order_by(ExpenseCategory.name.asc()).all()

    def get_category(self, db: Session, user_id: int, category_id: int) -> ExpenseCategory:
        category = self._load(db, category_id)
        self.membership_service.require_member(db, category.organization_id, user_id)
        return category

    def create_category(self, db: Session, user_id: int, data: CategoryCreate) -> ExpenseCategory:
        """
        Create a category

        Raises:
            ForbiddenError: If the caller is not an admin
            ConflictError: If the name is already used in the organization
        """
        self.membership_service.require_admin(
            db, data.organization_id, user_id, "Only admins can create categories"
        )
        self._ensure_unique_name(db, data.organization_id, data.name)

        category = ExpenseCategory(
            organization_id=data.organization_id,
            name=data.name,
            description=data.description
        )
        db.add(category)
        db.commit()
        db.refresh(category)

        logger.info(f"Category '{category.name}' created in organization {category.organization_id}")
        return category

    def update_category(
        self,
        db: Session,
        user_id: int,
        category_id: int,
        data: CategoryUpdate
    ) -> ExpenseCategory:
        """Rename or re-describe a category"""
        category = self._load(db, category_id)
        self.membership_service.require_admin(
            db, category.organization_id, user_id, "Only admins can update categories"
        )
        self._ensure_unique_name(db, category.organization_id, data.name, exclude_id=category.id)

        category.name = data.name
        category.description = data.description
        db.commit()
        db.refresh(category)
        return category

    def delete_category(self, db: Session, user_id: int, category_id: int) -> None:
        """
        Delete a category together with its policies

        Raises:
            InvalidStateError: If expenses were filed under the category
        """
        category = self._load(db, category_id)
        self.membership_service.require_admin(
            db, category.organization_id, user_id, "Only admins can delete categories"
        )

        in_use = db.query(Expense.id).filter(Expense.category_id == category.id).first()
        if in_use:
            raise InvalidStateError("Cannot delete a category that has expenses")

        db.delete(category)
        db.commit()

        log_audit(user_id, "delete_category", f"category={category_id}")

    def _ensure_unique_name(
        self,
        db: Session,
        organization_id: int,
        name: str,
        exclude_id: Optional[int] = None
    ):
        query = db.query(ExpenseCategory).filter(
            ExpenseCategory.organization_id == organization_id,
            ExpenseCategory.name == name
        )
        if exclude_id is not None:
            query = query.filter(ExpenseCategory.id != exclude_id)
        if query.first():
            raise ConflictError(DUPLICATE_NAME)

    def _load(self, db: Session, category_id: int) -> ExpenseCategory:
        category = db.query(ExpenseCategory).filter(ExpenseCategory.id == category_id).first()
        if not category:
            raise NotFoundError("Category not found")
        return category


# Create singleton instance
category_service = CategoryService()
