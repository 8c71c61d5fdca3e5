"""
Expense Routes
Expense submission and retrieval endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from src.config.database import get_db
from src.services.auth_service import auth_service
from src.services.expense_service import expense_service
from src.models.expense import ExpenseStatus
from src.models.user import User
from src.schemas.expense import (
    ExpenseSubmit,
    ExpenseSubmitResponse,
    ExpenseResponse,
    ExpenseDetailResponse,
    ExpenseListResponse,
    ExpenseStatusEnum,
)

router = APIRouter()


@router.post("", response_model=ExpenseSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_expense(
    data: ExpenseSubmit,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """
    Submit an expense

    The governing policy decides the initial status:
    - over the limit: auto-rejected
    - within the limit with auto-approval: auto-approved
    - otherwise, or with no policy: left SUBMITTED for an admin
    """
    expense, disposition = expense_service.submit_expense(db, current_user.id, data)
    return ExpenseSubmitResponse(
        status=disposition.status.value,
        message=disposition.message,
        expense=ExpenseResponse.model_validate(expense)
    )


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    organization_id: int,
    status_filter: Optional[ExpenseStatusEnum] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """
    Expenses in an organization, newest first

    Admins see all expenses, members only their own.
    """
    expenses = expense_service.list_expenses(
        db,
        current_user.id,
        organization_id,
        ExpenseStatus(status_filter.value) if status_filter else None
    )
    return ExpenseListResponse(
        total=len(expenses),
        expenses=[ExpenseResponse.model_validate(e) for e in expenses]
    )


@router.get("/{expense_id}", response_model=ExpenseDetailResponse)
async def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Expense with its review trail"""
    return expense_service.get_expense(db, current_user.id, expense_id)
