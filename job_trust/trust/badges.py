"""Trust badge classification from aggregate feedback counters."""

from dataclasses import dataclass
from enum import Enum


class TrustBadge(str, Enum):
    VERIFIED = "verified"
    RESPONSIVE = "responsive"
    SCAM_WARNING = "scam_warning"
    UNRESPONSIVE = "unresponsive"


@dataclass
class BadgeCounters:
    """Raw, unweighted signal counts over a job's full feedback history."""

    scam_reports: int = 0
    interview_confirmations: int = 0
    response_confirmations: int = 0
    no_response_reports: int = 0


def classify_badges(final_score: int, review_count: int, counters: BadgeCounters) -> list[str]:
    """Return the badge set for a job, in a fixed order.

    Badges are recomputed from scratch on every pass and may coexist.
    """
    badges = []

    if final_score >= 80 and review_count >= 3:
        badges.append(TrustBadge.VERIFIED.value)

    if (
        counters.response_confirmations >= 2
        and review_count > 0
        and counters.response_confirmations / review_count > 0.3
    ):
        badges.append(TrustBadge.RESPONSIVE.value)

    if counters.scam_reports > 0 or final_score < 30:
        badges.append(TrustBadge.SCAM_WARNING.value)

    if (
        counters.no_response_reports > 3
        and review_count > 0
        and counters.no_response_reports / review_count > 0.5
    ):
        badges.append(TrustBadge.UNRESPONSIVE.value)

    return badges
