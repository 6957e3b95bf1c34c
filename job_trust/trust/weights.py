"""Submitter weight derived from role, reputation and subscription tier."""

from job_trust.models import User, UserRole, UserTier

ADMIN_WEIGHT = 10.0
DEFAULT_WEIGHT = 1.0

TIER_MULTIPLIERS = {
    UserTier.ENTERPRISE.value: 1.5,
    UserTier.PRO.value: 1.2,
    UserTier.FREE.value: 1.0,
}


def get_user_weight(user: User | None) -> float:
    """Return the scoring weight for a new feedback row from this user.

    Admins get a fixed weight. Everyone else starts at 1.0, gains up to 1.0
    from reputation, and the sum is then scaled by the tier multiplier. The
    additive step must run before the multiplicative one.
    """
    if user is None:
        return DEFAULT_WEIGHT

    if user.role == UserRole.ADMIN.value:
        return ADMIN_WEIGHT

    weight = DEFAULT_WEIGHT
    if user.reputation_score:
        weight += user.reputation_score / 100

    weight *= TIER_MULTIPLIERS.get(user.tier, 1.0)
    return weight
