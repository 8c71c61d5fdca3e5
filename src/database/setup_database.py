"""
Database Setup Script
Creates all tables and a demo organization with categories, policies and expenses
"""

import sys
from pathlib import Path
from datetime import date, timedelta

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.config.database import Base, SessionLocal, engine
from src.models.user import User
from src.models.organization import Organization, OrganizationMembership, MemberRole
from src.models.category import ExpenseCategory
from src.models.policy import Policy, PolicyPeriod, OrgWide, UserSpecific
from src.models.expense import Expense  # noqa: F401  (registers the table)
from src.models.review import ExpenseReview  # noqa: F401
from src.schemas.expense import ExpenseSubmit
from src.services.expense_service import expense_service
from src.utils.security import create_access_token


def create_tables():
    """Create all database tables"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("✓ Database tables created successfully")


def create_demo_data():
    """Create demo users, an organization, categories, policies and expenses"""
    print("\nCreating demo data...")
    db = SessionLocal()

    try:
        # Check if data already exists
        if db.query(User).first():
            print("✓ Users already exist, skipping...")
            return

        admin = User(email="admin@example.com", name="Alice Admin")
        member = User(email="member@example.com", name="Bob Member")
        contractor = User(email="contractor@example.com", name="Carol Contractor")
        db.add_all([admin, member, contractor])
        db.flush()

        organization = Organization(name="Acme Corp")
        organization.memberships.extend([
            OrganizationMembership(user_id=admin.id, role=MemberRole.ADMIN),
            OrganizationMembership(user_id=member.id, role=MemberRole.MEMBER),
            OrganizationMembership(user_id=contractor.id, role=MemberRole.MEMBER),
        ])
        db.add(organization)
        db.flush()

        travel = ExpenseCategory(organization_id=organization.id, name="Travel", description="Flights, trains and taxis")
        meals = ExpenseCategory(organization_id=organization.id, name="Meals", description="Client and team meals")
        software = ExpenseCategory(organization_id=organization.id, name="Software", description="Licenses and subscriptions")
        db.add_all([travel, meals, software])
        db.flush()

        # Org-wide defaults (amounts in cents)
        policies = [
            Policy(organization_id=organization.id, category_id=travel.id, max_amount=50000,
                   period=PolicyPeriod.MONTHLY, auto_approve=True),
            Policy(organization_id=organization.id, category_id=meals.id, max_amount=10000,
                   period=PolicyPeriod.MONTHLY, auto_approve=False),
        ]
        for policy in policies:
            policy.scope = OrgWide()

        # Bob travels more than most
        override = Policy(organization_id=organization.id, category_id=travel.id, max_amount=75000,
                          period=PolicyPeriod.MONTHLY, auto_approve=True)
        override.scope = UserSpecific(user_id=member.id)
        policies.append(override)

        db.add_all(policies)
        db.commit()
        print("✓ Users, organization, categories and policies created")

        yesterday = date.today() - timedelta(days=1)
        samples = [
            (member.id, travel.id, 60000, "Train tickets for client visit"),
            (contractor.id, travel.id, 60000, "Flight to conference"),
            (member.id, meals.id, 4500, "Team lunch"),
            (contractor.id, software.id, 2999, "Diagram tool subscription"),
        ]
        for user_id, category_id, amount, description in samples:
            expense, disposition = expense_service.submit_expense(
                db,
                user_id,
                ExpenseSubmit(
                    organization_id=organization.id,
                    category_id=category_id,
                    amount=amount,
                    expense_date=yesterday,
                    description=description
                )
            )
            print(f"  → Expense {expense.id}: {disposition.message}")

        print("\nDemo bearer tokens:")
        for user in (admin, member, contractor):
            print(f"  {user.email}: {create_access_token({'sub': str(user.id)})}")

    except Exception as e:
        print(f"✗ Error creating demo data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_tables()
    create_demo_data()
    print("\n✓ Database setup complete")
