"""
Policy Resolver Tests
Precedence of user-specific over organization-wide policies
"""

import pytest

from src.models.policy import OrgWide, UserSpecific
from src.services.policy_resolver import (
    PolicyResolver,
    REASON_USER_SPECIFIC,
    REASON_ORGANIZATION,
    REASON_NONE,
)
from src.utils.exceptions import NotFoundError


@pytest.fixture
def resolver():
    return PolicyResolver()


class TestResolve:
    """Test PolicyResolver.resolve"""

    def test_user_specific_wins_over_org_wide(self, db, resolver, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=50000)
        user_policy = make_policy(org, category, user=member, max_amount=75000)

        assert resolver.resolve(db, org.id, member.id, category.id).id == user_policy.id

    def test_user_specific_wins_even_when_less_strict_or_stricter(self, db, resolver, org_setup, make_policy):
        """Limit size plays no part in precedence"""
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        make_policy(org, category, max_amount=10000)
        user_policy = make_policy(org, category, user=member, max_amount=500)

        assert resolver.resolve(db, org.id, member.id, category.id).id == user_policy.id

    def test_falls_back_to_org_wide(self, db, resolver, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        org_policy = make_policy(org, category)

        assert resolver.resolve(db, org.id, member.id, category.id).id == org_policy.id

    def test_other_users_policy_is_ignored(self, db, resolver, org_setup, make_policy):
        org, admin, member, category = (
            org_setup["organization"], org_setup["admin"], org_setup["member"], org_setup["category"]
        )
        org_policy = make_policy(org, category)
        make_policy(org, category, user=admin, max_amount=999999)

        assert resolver.resolve(db, org.id, member.id, category.id).id == org_policy.id

    def test_other_category_is_ignored(self, db, resolver, org_setup, make_policy, make_category):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        meals = make_category(org, name="Meals")
        make_policy(org, meals, user=member)

        with pytest.raises(NotFoundError) as exc_info:
            resolver.resolve(db, org.id, member.id, category.id)
        assert exc_info.value.message == "No policy found for this user and category"

    def test_duplicates_pick_lowest_id(self, db, resolver, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        first = make_policy(org, category, max_amount=100)
        make_policy(org, category, max_amount=200)

        assert resolver.resolve(db, org.id, member.id, category.id).id == first.id

    def test_find_returns_none_without_policy(self, db, resolver, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        assert resolver.find(db, org.id, member.id, category.id) is None


class TestPolicyScope:
    """Test the tagged scope on the Policy model"""

    def test_scope_reflects_user_column(self, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        org_policy = make_policy(org, category)
        user_policy = make_policy(org, category, user=member)

        assert org_policy.scope == OrgWide()
        assert not org_policy.is_user_specific
        assert user_policy.scope == UserSpecific(user_id=member.id)
        assert user_policy.is_user_specific


class TestDebug:
    """Test PolicyResolver.debug"""

    def test_reports_both_and_selects_user_specific(self, db, resolver, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        org_policy = make_policy(org, category, max_amount=50000)
        user_policy = make_policy(org, category, user=member, max_amount=75000)

        result = resolver.debug(db, org.id, member.id, category.id)

        assert result.user_specific_policy.id == user_policy.id
        assert result.organization_policy.id == org_policy.id
        assert result.selected_policy.id == user_policy.id
        assert result.reason == REASON_USER_SPECIFIC

    def test_org_wide_only(self, db, resolver, org_setup, make_policy):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]
        org_policy = make_policy(org, category)

        result = resolver.debug(db, org.id, member.id, category.id)

        assert result.user_specific_policy is None
        assert result.selected_policy.id == org_policy.id
        assert result.reason == REASON_ORGANIZATION

    def test_no_policy_is_not_an_error(self, db, resolver, org_setup):
        org, member, category = org_setup["organization"], org_setup["member"], org_setup["category"]

        result = resolver.debug(db, org.id, member.id, category.id)

        assert result.user_specific_policy is None
        assert result.organization_policy is None
        assert result.selected_policy is None
        assert result.reason == REASON_NONE
