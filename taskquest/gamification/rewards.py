"""
Reward and Badge System

Two independent generators:
- Micro-rewards: small, sometimes random, bonuses attached to an event
- Status badges: one badge per family (streak, XP, tier), highest tier wins

Micro-reward contexts:
- task_completion: 10% chance of a rare 25 XP "Surprise Bonus!"
- streak_milestone: focus boost power-up on every 5th streak day
  (legendary from 20 days, epic below)
- category_variety: a common 15 XP "Variety Bonus", always
"""

import logging
import random
from typing import Callable, List, Optional, Protocol, Tuple, Union

from taskquest import config
from taskquest.models import (
    Badge,
    GamificationReward,
    PowerUpReward,
    Rarity,
    RewardContext,
    SubscriptionTier,
    User,
    XPReward,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``random.Random(seed)``"""

    def random(self) -> float: ...


LEGENDARY_STREAK = 20
STREAK_REWARD_INTERVAL = 5


# ==========================================
# Micro-rewards
# ==========================================

def _task_completion_rewards(user: User, rng: RandomSource) -> List[GamificationReward]:
    if rng.random() < config.MICRO_REWARD_PROBABILITY:
        logger.info(f"Surprise bonus for user {user.id}")
        return [XPReward(
            value=config.SURPRISE_BONUS_XP,
            title="Surprise Bonus!",
            description="Extra XP for being awesome",
            rarity=Rarity.RARE,
        )]
    return []


def _streak_milestone_rewards(user: User, rng: RandomSource) -> List[GamificationReward]:
    if user.current_streak % STREAK_REWARD_INTERVAL != 0:
        return []
    return [PowerUpReward(
        value="focus_boost",
        title="Focus Boost",
        description="Enhanced AI insights for 24 hours",
        rarity=Rarity.LEGENDARY if user.current_streak >= LEGENDARY_STREAK else Rarity.EPIC,
    )]


def _category_variety_rewards(user: User, rng: RandomSource) -> List[GamificationReward]:
    return [XPReward(
        value=config.VARIETY_BONUS_XP,
        title="Variety Bonus",
        description="Bonus XP for exploring different categories",
        rarity=Rarity.COMMON,
    )]


MICRO_REWARD_HANDLERS = {
    RewardContext.TASK_COMPLETION: _task_completion_rewards,
    RewardContext.STREAK_MILESTONE: _streak_milestone_rewards,
    RewardContext.CATEGORY_VARIETY: _category_variety_rewards,
}


def generate_micro_rewards(
    user: User,
    context: Union[RewardContext, str],
    rng: Optional[RandomSource] = None
) -> List[GamificationReward]:
    """
    Generate micro-rewards for an event

    Args:
        user: User the event belongs to
        context: task_completion, streak_milestone or category_variety
        rng: Random source for the surprise bonus (defaults to the ``random`` module)

    Returns:
        Zero or one reward; unknown contexts yield none
    """
    try:
        context = RewardContext(context)
    except ValueError:
        logger.debug(f"No micro-rewards for unknown context {context!r}")
        return []

    handler = MICRO_REWARD_HANDLERS[context]
    return handler(user, rng or random)


# ==========================================
# Status badges
# ==========================================

# (threshold, id, title, description, tier), highest threshold first
STREAK_BADGES: Tuple[Tuple[int, str, str, str, Rarity], ...] = (
    (30, "streak_legend", "Streak Legend", "30+ day streak", Rarity.LEGENDARY),
    (14, "streak_champion", "Streak Champion", "14+ day streak", Rarity.EPIC),
    (7, "consistent_performer", "Consistent Performer", "7+ day streak", Rarity.RARE),
)

XP_BADGES: Tuple[Tuple[int, str, str, str, Rarity], ...] = (
    (10000, "productivity_master", "Productivity Master", "10,000+ total XP", Rarity.LEGENDARY),
    (5000, "productivity_expert", "Productivity Expert", "5,000+ total XP", Rarity.EPIC),
    (1000, "rising_star", "Rising Star", "1,000+ total XP", Rarity.RARE),
)


def _threshold_badge(value: int, ladder) -> Optional[Badge]:
    for threshold, badge_id, title, description, tier in ladder:
        if value >= threshold:
            return Badge(id=badge_id, title=title, description=description, tier=tier)
    return None


def _tier_badge(user: User) -> Optional[Badge]:
    if user.tier == SubscriptionTier.PREMIUM_PRO:
        return Badge(
            id="premium_member",
            title="Premium Member",
            description="Unlocked all features",
            tier=Rarity.LEGENDARY,
        )
    if user.is_paid:
        return Badge(
            id="pro_member",
            title="Pro Member",
            description="Upgraded to Pro features",
            tier=Rarity.EPIC,
        )
    return None


BADGE_FAMILIES: Tuple[Callable[[User], Optional[Badge]], ...] = (
    lambda user: _threshold_badge(user.current_streak, STREAK_BADGES),
    lambda user: _threshold_badge(user.total_xp, XP_BADGES),
    _tier_badge,
)


def calculate_status_badges(user: User) -> List[Badge]:
    """
    Status badges a user currently holds

    Args:
        user: User aggregate stats

    Returns:
        At most one badge per family, in order streak, XP, tier
    """
    badges = [badge for badge in (family(user) for family in BADGE_FAMILIES) if badge]
    logger.debug(f"User {user.id} badges: {[b.id for b in badges]}")
    return badges
