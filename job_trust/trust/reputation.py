"""Submitter reputation from profile completeness.

Placeholder for a consensus-based model (reward users whose past reports agree
with the eventual outcome). Whatever replaces it must stay deterministic and
clamped to [0, 100].
"""

import logging

from job_trust.models import User

logger = logging.getLogger("job_trust.trust.reputation")

BASE_REPUTATION = 10
EMAIL_VERIFIED_BONUS = 10
FULL_NAME_BONUS = 5

MIN_REPUTATION = 0
MAX_REPUTATION = 100


def compute_reputation(user: User) -> int:
    score = BASE_REPUTATION

    if user.is_email_verified:
        score += EMAIL_VERIFIED_BONUS
    if user.first_name and user.last_name:
        score += FULL_NAME_BONUS

    return max(MIN_REPUTATION, min(MAX_REPUTATION, score))


def update_user_reputation(repo, user_id: int) -> int | None:
    """Recompute and store a user's reputation. Returns the new value, or None."""
    user = repo.get_user(user_id)
    if user is None:
        logger.warning("Reputation update skipped: user %s not found", user_id)
        return None

    score = compute_reputation(user)
    repo.set_user_reputation(user_id, score)
    logger.debug("User %s reputation -> %d", user_id, score)
    return score
