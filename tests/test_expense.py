"""
Expense Tests
Tests for expense submission, automatic disposition and retrieval
"""

import pytest
from datetime import date, timedelta

from src.models.expense import Expense, ExpenseStatus
from src.models.review import ExpenseReview
from src.utils import helpers


@pytest.fixture
def submit(client, auth_headers):
    """POST an expense submission as user"""
    def _submit(user, organization, category, amount, description="Client visit", expense_date=None):
        return client.post(
            "/api/expenses",
            json={
                "organization_id": organization.id,
                "category_id": category.id,
                "amount": amount,
                "expense_date": (expense_date or date.today()).isoformat(),
                "description": description,
            },
            headers=auth_headers(user)
        )

    return _submit


class TestExpenseSubmission:
    """Test automatic disposition on submission"""

    def test_amount_equal_to_limit_is_auto_approved(self, submit, db, org_setup, make_policy):
        """An auto-approve policy approves an amount exactly at its limit"""
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000, auto_approve=True)

        response = submit(member, org, category, 50000)

        assert response.status_code == 201, response.json()
        data = response.json()
        assert data["status"] == "APPROVED"
        assert "auto-approved" in data["message"]
        assert data["expense"]["status"] == "APPROVED"

        reviews = db.query(ExpenseReview).filter(ExpenseReview.expense_id == data["expense"]["id"]).all()
        assert len(reviews) == 1
        assert reviews[0].status == ExpenseStatus.APPROVED
        assert reviews[0].reviewer_id is None

    def test_amount_over_limit_is_auto_rejected(self, submit, db, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000, auto_approve=True)

        response = submit(member, org, category, 50001)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "REJECTED"
        assert "auto-rejected" in data["message"]

        reviews = db.query(ExpenseReview).filter(ExpenseReview.expense_id == data["expense"]["id"]).all()
        assert len(reviews) == 1
        assert reviews[0].status == ExpenseStatus.REJECTED
        assert reviews[0].is_system

    def test_within_limit_without_auto_approve_awaits_review(self, submit, db, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000, auto_approve=False)

        response = submit(member, org, category, 10000)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "SUBMITTED"
        assert "requires manual approval" in data["message"]
        assert db.query(ExpenseReview).count() == 0

    def test_no_policy_awaits_review(self, submit, db, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 5000)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "SUBMITTED"
        assert "No policy found" in data["message"]
        assert db.query(ExpenseReview).count() == 0

    def test_user_specific_policy_governs_submission(self, submit, org_setup, make_policy):
        """The member's higher personal limit applies instead of the org-wide one"""
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000, auto_approve=True)
        make_policy(org, category, user=member, max_amount=75000, auto_approve=True)

        response = submit(member, org, category, 60000)

        assert response.json()["status"] == "APPROVED"

    def test_description_is_trimmed(self, submit, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 100, description="  Taxi  ")

        assert response.status_code == 201
        assert response.json()["expense"]["description"] == "Taxi"


class TestExpenseValidation:
    """Test submission input validation and access"""

    @pytest.mark.parametrize("amount", [0, -100, 10.5, True, "100"])
    def test_invalid_amount(self, submit, db, org_setup, amount):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, amount)

        assert response.status_code == 422
        assert response.json()["message"] == "Validation error"
        assert db.query(Expense).count() == 0

    def test_future_date(self, submit, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 100, expense_date=date.today() + timedelta(days=1))

        assert response.status_code == 422

    def test_date_is_checked_against_today(self, submit, org_setup, monkeypatch):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        monkeypatch.setattr(helpers, "today", lambda: date(2024, 1, 10))

        assert submit(member, org, category, 100, expense_date=date(2024, 1, 11)).status_code == 422
        assert submit(member, org, category, 100, expense_date=date(2024, 1, 10)).status_code == 201

    def test_past_date_is_accepted(self, submit, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 100, expense_date=date.today() - timedelta(days=30))

        assert response.status_code == 201

    @pytest.mark.parametrize("description", ["", "   ", "x" * 501])
    def test_invalid_description(self, submit, org_setup, description):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 100, description=description)

        assert response.status_code == 422

    def test_description_of_max_length_is_accepted(self, submit, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        response = submit(member, org, category, 100, description="x" * 500)

        assert response.status_code == 201

    def test_non_member_cannot_submit(self, submit, db, org_setup, make_user):
        outsider = make_user(email="outsider@example.com")
        org, category = org_setup["organization"], org_setup["category"]

        response = submit(outsider, org, category, 100)

        assert response.status_code == 403
        assert response.json()["message"] == "You are not a member of this organization"
        assert db.query(Expense).count() == 0

    def test_category_from_another_organization(self, submit, org_setup, make_organization, make_category):
        org, admin, member = org_setup["organization"], org_setup["admin"], org_setup["member"]
        other_org = make_organization(admin, name="Other")
        foreign_category = make_category(other_org, name="Foreign")

        response = submit(member, org, foreign_category, 100)

        assert response.status_code == 404
        assert response.json()["message"] == "Category not found in this organization"

    def test_requires_authentication(self, client, org_setup):
        response = client.post("/api/expenses", json={})
        assert response.status_code == 401


class TestExpenseRetrieval:
    """Test expense listing and detail"""

    def test_member_sees_only_own_expenses(self, client, auth_headers, org_setup, make_expense):
        org, admin, member, category = (
            org_setup["organization"], org_setup["admin"], org_setup["member"], org_setup["category"]
        )
        own = make_expense(org, member, category)
        make_expense(org, admin, category)

        response = client.get(
            "/api/expenses",
            params={"organization_id": org.id},
            headers=auth_headers(member)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["expenses"][0]["id"] == own.id

    def test_admin_sees_all_and_can_filter_by_status(self, client, auth_headers, org_setup, make_expense):
        org, admin, member, category = (
            org_setup["organization"], org_setup["admin"], org_setup["member"], org_setup["category"]
        )
        make_expense(org, member, category)
        approved = make_expense(org, member, category, status=ExpenseStatus.APPROVED)

        response = client.get(
            "/api/expenses",
            params={"organization_id": org.id},
            headers=auth_headers(admin)
        )
        assert response.json()["total"] == 2

        response = client.get(
            "/api/expenses",
            params={"organization_id": org.id, "status": "APPROVED"},
            headers=auth_headers(admin)
        )
        data = response.json()
        assert data["total"] == 1
        assert data["expenses"][0]["id"] == approved.id

    def test_get_expense_includes_review_trail(self, client, auth_headers, submit, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000, auto_approve=True)
        expense_id = submit(member, org, category, 100).json()["expense"]["id"]

        response = client.get(f"/api/expenses/{expense_id}", headers=auth_headers(member))

        assert response.status_code == 200
        data = response.json()
        assert data["category"]["name"] == "Travel"
        assert len(data["reviews"]) == 1
        assert data["reviews"][0]["reviewer_id"] is None
        assert data["reviews"][0]["status"] == "APPROVED"

    def test_other_member_cannot_view_expense(self, client, auth_headers, org_setup, make_user, add_member, make_expense):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        colleague = make_user(email="colleague@example.com")
        add_member(org, colleague)
        expense = make_expense(org, member, category)

        response = client.get(f"/api/expenses/{expense.id}", headers=auth_headers(colleague))

        assert response.status_code == 403

    def test_get_missing_expense(self, client, auth_headers, org_setup):
        response = client.get("/api/expenses/9999", headers=auth_headers(org_setup["admin"]))
        assert response.status_code == 404
        assert response.json()["message"] == "Expense not found"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
