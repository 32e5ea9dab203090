"""
Progressive Unlock System

Feature availability by subscription tier and progress. The table order is
the display order and must stay stable.
"""

import logging
from typing import Callable, List, Tuple

from taskquest.models import SubscriptionTier, UnlockEntry, User

logger = logging.getLogger(__name__)

ADVANCED_TIERS = frozenset({SubscriptionTier.ADVANCED_PRO, SubscriptionTier.PREMIUM_PRO})

# (feature, requirement, predicate)
UNLOCK_RULES: Tuple[Tuple[str, str, Callable[[User], bool]], ...] = (
    ("Basic Habits", "Available to all users",
     lambda user: True),
    ("Advanced Habits", "Upgrade to Pro",
     lambda user: user.tier != SubscriptionTier.FREE),
    ("Focus Forecast", "Advanced Pro or higher",
     lambda user: user.tier in ADVANCED_TIERS),
    ("XP Multipliers", "7-day streak",
     lambda user: user.current_streak >= 7),
    ("Custom Challenges", "1,000 total XP",
     lambda user: user.total_xp >= 1000),
    ("Leaderboards", "Premium Pro membership",
     lambda user: user.tier == SubscriptionTier.PREMIUM_PRO),
    ("Team Challenges", "Premium Pro + 14-day streak",
     lambda user: user.tier == SubscriptionTier.PREMIUM_PRO and user.current_streak >= 14),
)


def get_progressive_unlocks(user: User) -> List[UnlockEntry]:
    """
    Evaluate every feature gate for a user

    Returns:
        One entry per feature, in table order
    """
    unlocks = [
        UnlockEntry(feature=feature, unlocked=predicate(user), requirement=requirement)
        for feature, requirement, predicate in UNLOCK_RULES
    ]
    logger.debug(f"User {user.id} unlocked {sum(u.unlocked for u in unlocks)}/{len(unlocks)} features")
    return unlocks
