"""Tests for trust badge classification."""

from job_trust.trust.badges import BadgeCounters, classify_badges


class TestClassifyBadges:
    def test_verified_needs_score_and_three_reviews(self):
        assert classify_badges(80, 3, BadgeCounters()) == ["verified"]
        assert classify_badges(80, 2, BadgeCounters()) == []
        assert classify_badges(79, 5, BadgeCounters()) == []

    def test_responsive_needs_count_and_ratio(self):
        assert "responsive" in classify_badges(60, 6, BadgeCounters(response_confirmations=2))
        # 2/7 is below the 0.3 ratio
        assert "responsive" not in classify_badges(60, 7, BadgeCounters(response_confirmations=2))
        assert "responsive" not in classify_badges(60, 1, BadgeCounters(response_confirmations=1))

    def test_scam_warning_on_any_report(self):
        assert classify_badges(90, 10, BadgeCounters(scam_reports=1)) == ["verified", "scam_warning"]

    def test_scam_warning_on_low_score(self):
        assert classify_badges(29, 1, BadgeCounters()) == ["scam_warning"]
        assert classify_badges(30, 1, BadgeCounters()) == []

    def test_unresponsive_needs_more_than_three_and_majority(self):
        assert "unresponsive" in classify_badges(40, 6, BadgeCounters(no_response_reports=4))
        assert "unresponsive" not in classify_badges(40, 8, BadgeCounters(no_response_reports=4))
        assert "unresponsive" not in classify_badges(40, 3, BadgeCounters(no_response_reports=3))

    def test_badges_coexist_in_fixed_order(self):
        counters = BadgeCounters(response_confirmations=3, no_response_reports=4, scam_reports=1)
        badges = classify_badges(20, 7, counters)
        assert badges == ["responsive", "scam_warning", "unresponsive"]
