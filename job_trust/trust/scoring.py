"""Weighted, time-decayed authenticity score over a job's feedback.

Each feedback row contributes ``impact * weight`` where impact (0-100) comes
from its feedback type and weight is ``time_decay * user_weight_at_creation``.
The final score is the weighted mean, rounded half-up. Nothing here touches the
database; see ``job_trust.trust.service`` for the read/write side.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from job_trust.models import NEUTRAL_SCORE, FeedbackType

from .badges import BadgeCounters, classify_badges

SECONDS_PER_DAY = 24 * 3600

# (max age in days, decay factor); anything older gets OLDEST_DECAY
DECAY_TIERS = [
    (90, 1.0),
    (180, 0.5),
]
OLDEST_DECAY = 0.1

BASE_IMPACT = {
    FeedbackType.HIRED.value: 100,
    FeedbackType.INTERVIEW.value: 100,
    FeedbackType.RESPONSE.value: 80,
    FeedbackType.REJECTED.value: 70,
    FeedbackType.GHOSTED.value: 40,
    FeedbackType.EXPIRED.value: 40,
    FeedbackType.PAYMENT_REQUIRED.value: 0,
    FeedbackType.SCAM.value: 0,
}

# Which badge counter each feedback type feeds
COUNTER_FIELD = {
    FeedbackType.HIRED.value: "interview_confirmations",
    FeedbackType.INTERVIEW.value: "interview_confirmations",
    FeedbackType.RESPONSE.value: "response_confirmations",
    FeedbackType.REJECTED.value: "response_confirmations",
    FeedbackType.GHOSTED.value: "no_response_reports",
    FeedbackType.EXPIRED.value: "no_response_reports",
    FeedbackType.PAYMENT_REQUIRED.value: "scam_reports",
    FeedbackType.SCAM.value: "scam_reports",
}


@dataclass
class TrustSummary:
    score: int = NEUTRAL_SCORE
    badges: list[str] = field(default_factory=list)
    review_count: int = 0
    counters: BadgeCounters = field(default_factory=BadgeCounters)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def time_decay(created_at: datetime, now: datetime) -> float:
    """Return the decay factor for a row of the given age (three discrete tiers)."""
    age_days = (_as_utc(now) - _as_utc(created_at)).total_seconds() / SECONDS_PER_DAY
    for max_age, factor in DECAY_TIERS:
        if age_days <= max_age:
            return factor
    return OLDEST_DECAY


def feedback_impact(feedback_type: str, is_real: bool | None, asked_for_money: bool | None) -> int:
    """Return the 0-100 impact of a single feedback row.

    The type lookup runs first, then the override step. Overrides only ever
    force the impact to 0, so their relative order does not matter, but nothing
    may run after them.
    """
    impact = BASE_IMPACT.get(feedback_type, 0)

    # Override step: structured answers trump the declared type
    if is_real is False:
        impact = 0
    if asked_for_money is True:
        impact = 0

    return impact


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_feedback(rows, now: datetime) -> TrustSummary:
    """Compute score, badges and counters for the full feedback set of one job.

    ``rows`` are objects exposing ``feedback_type``, ``is_real``,
    ``asked_for_money``, ``user_weight_at_creation`` and ``created_at`` (the
    ORM ``JobFeedback`` rows in practice). An empty set yields the neutral
    summary.
    """
    rows = list(rows)
    if not rows:
        return TrustSummary()

    counters = BadgeCounters()
    weighted_sum = 0.0
    total_weight = 0.0

    for row in rows:
        user_weight = row.user_weight_at_creation
        if user_weight is None:
            user_weight = 1.0
        combined_weight = time_decay(row.created_at, now) * user_weight

        impact = feedback_impact(row.feedback_type, row.is_real, row.asked_for_money)
        weighted_sum += impact * combined_weight
        total_weight += combined_weight

        counter = COUNTER_FIELD.get(row.feedback_type)
        if counter:
            setattr(counters, counter, getattr(counters, counter) + 1)

    if total_weight > 0:
        score = round_half_up(weighted_sum / total_weight)
    else:
        score = NEUTRAL_SCORE

    review_count = len(rows)
    return TrustSummary(
        score=score,
        badges=classify_badges(score, review_count, counters),
        review_count=review_count,
        counters=counters,
    )
