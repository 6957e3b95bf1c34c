"""Tests for submitter weight derivation."""

import pytest

from job_trust.models import User
from job_trust.trust.weights import get_user_weight


class TestGetUserWeight:
    def test_missing_user_is_neutral(self):
        assert get_user_weight(None) == 1.0

    @pytest.mark.parametrize("reputation, tier", [(0, "free"), (100, "enterprise"), (35, "pro")])
    def test_admin_always_ten(self, reputation, tier):
        user = User(email="a@example.com", role="admin", reputation_score=reputation, tier=tier)
        assert get_user_weight(user) == 10.0

    def test_free_user_without_reputation(self):
        user = User(email="a@example.com", role="user", tier="free", reputation_score=0)
        assert get_user_weight(user) == 1.0

    def test_reputation_added_before_tier_multiplier(self):
        user = User(email="a@example.com", role="user", tier="pro", reputation_score=50)
        assert get_user_weight(user) == pytest.approx((1.0 + 0.5) * 1.2)

    def test_enterprise_full_reputation(self):
        user = User(email="a@example.com", role="user", tier="enterprise", reputation_score=100)
        assert get_user_weight(user) == pytest.approx(3.0)

    def test_unknown_tier_has_no_multiplier(self):
        user = User(email="a@example.com", role="user", tier="legacy", reputation_score=25)
        assert get_user_weight(user) == pytest.approx(1.25)
