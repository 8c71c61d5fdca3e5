"""
Shared test fixtures
SQLite test database, API client and factories for organizations, categories,
policies and expenses
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables BEFORE importing anything else
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FILE", "logs/test.log")

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.main import app
from src.config.database import Base, get_db
from src.models.user import User
from src.models.organization import Organization, OrganizationMembership, MemberRole
from src.models.category import ExpenseCategory
from src.models.policy import Policy, PolicyPeriod
from src.models.expense import Expense, ExpenseStatus
from src.utils.security import create_access_token

# Test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def test_db():
    """Create test database"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(test_db):
    """Session for arranging and inspecting test data"""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def session_factory(test_db):
    """Independent sessions, e.g. to act as a concurrent request"""
    return TestingSessionLocal


@pytest.fixture
def client(test_db):
    """API client; the lifespan is not run, tables come from test_db"""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Build the bearer header for a user"""
    def _auth_headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def make_user(db):
    """Create a user"""
    counter = {"n": 0}

    def _make_user(email: str = None, name: str = "Test User") -> User:
        counter["n"] += 1
        user = User(email=email or f"user{counter['n']}@example.com", name=name)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_organization(db):
    """Create an organization with the given user as ADMIN"""
    def _make_organization(admin: User, name: str = "Test Organization") -> Organization:
        organization = Organization(name=name)
        organization.memberships.append(
            OrganizationMembership(user_id=admin.id, role=MemberRole.ADMIN)
        )
        db.add(organization)
        db.commit()
        db.refresh(organization)
        return organization

    return _make_organization


@pytest.fixture
def add_member(db):
    """Add a user to an organization"""
    def _add_member(organization: Organization, user: User, role: MemberRole = MemberRole.MEMBER):
        membership = OrganizationMembership(
            organization_id=organization.id,
            user_id=user.id,
            role=role
        )
        db.add(membership)
        db.commit()
        db.refresh(membership)
        return membership

    return _add_member


@pytest.fixture
def make_category(db):
    """Create a category"""
    def _make_category(organization: Organization, name: str = "Test Category", description: str = None):
        category = ExpenseCategory(
            organization_id=organization.id,
            name=name,
            description=description
        )
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make_category


@pytest.fixture
def make_policy(db):
    """Create a policy; org-wide unless user is given"""
    def _make_policy(
        organization: Organization,
        category: ExpenseCategory,
        user: User = None,
        max_amount: int = 100000,
        period: PolicyPeriod = PolicyPeriod.MONTHLY,
        auto_approve: bool = False
    ) -> Policy:
        policy = Policy(
            organization_id=organization.id,
            category_id=category.id,
            user_id=user.id if user else None,
            max_amount=max_amount,
            period=period,
            auto_approve=auto_approve
        )
        db.add(policy)
        db.commit()
        db.refresh(policy)
        return policy

    return _make_policy


@pytest.fixture
def make_expense(db):
    """Insert an expense directly, bypassing the disposition engine"""
    def _make_expense(
        organization: Organization,
        user: User,
        category: ExpenseCategory,
        amount: int = 10000,
        description: str = "Test expense",
        status: ExpenseStatus = ExpenseStatus.SUBMITTED
    ) -> Expense:
        expense = Expense(
            organization_id=organization.id,
            user_id=user.id,
            category_id=category.id,
            amount=amount,
            expense_date=date.today(),
            description=description,
            status=status
        )
        db.add(expense)
        db.commit()
        db.refresh(expense)
        return expense

    return _make_expense


@pytest.fixture
def org_setup(make_user, make_organization, add_member, make_category):
    """Organization with an admin, a member and one category"""
    admin = make_user(email="admin@example.com", name="Admin")
    member = make_user(email="member@example.com", name="Member")
    organization = make_organization(admin)
    add_member(organization, member)
    category = make_category(organization, name="Travel")
    return {
        "admin": admin,
        "member": member,
        "organization": organization,
        "category": category,
    }
