"""
Challenge System

Generates one archetype-specific challenge per call:
- Achiever: "Streak Master" milestone, active once the streak reaches 7
- Competitor: "Speed Demon" daily challenge, expires in 24 hours
- Explorer: "Category Explorer" weekly challenge, expires in 7 days
- Socializer: "Knowledge Sharer" weekly challenge, paid tiers only
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from taskquest.models import (
    Archetype,
    BadgeReward,
    Challenge,
    ChallengeRequirements,
    ChallengeType,
    PersonalityCluster,
    PowerUpReward,
    Rarity,
    Task,
    User,
)
from taskquest.utils.datetime_helpers import now_local

logger = logging.getLogger(__name__)

STREAK_MASTER_MIN_STREAK = 7
DAILY_CHALLENGE_DURATION = timedelta(hours=24)
WEEKLY_CHALLENGE_DURATION = timedelta(days=7)


def _streak_master(user: User, now: datetime) -> Challenge:
    return Challenge(
        id="streak_master",
        title="Streak Master",
        description="Complete tasks for 10 consecutive days",
        type=ChallengeType.MILESTONE,
        requirements=ChallengeRequirements(streak=10),
        rewards=[BadgeReward(
            value="streak_master_badge",
            title="Streak Master",
            description="Completed 10-day streak",
            rarity=Rarity.EPIC,
        )],
        is_active=user.current_streak >= STREAK_MASTER_MIN_STREAK,
    )


def _speed_demon(user: User, now: datetime) -> Challenge:
    return Challenge(
        id="speed_demon",
        title="Speed Demon",
        description="Complete 5 tasks in under 2 hours",
        type=ChallengeType.DAILY,
        requirements=ChallengeRequirements(tasks=5, timeframe_hours=2),
        rewards=[PowerUpReward(
            value="2x_xp_boost",
            title="2X XP Boost",
            description="Double XP for next 5 tasks",
            rarity=Rarity.RARE,
        )],
        is_active=True,
        expires_at=now + DAILY_CHALLENGE_DURATION,
    )


def _category_explorer(user: User, now: datetime) -> Challenge:
    return Challenge(
        id="category_explorer",
        title="Category Explorer",
        description="Complete tasks in 4 different categories this week",
        type=ChallengeType.WEEKLY,
        requirements=ChallengeRequirements(tasks=4),
        rewards=[BadgeReward(
            value="versatility_badge",
            title="Versatility Master",
            description="Explored multiple task categories",
            rarity=Rarity.RARE,
        )],
        is_active=True,
        expires_at=now + WEEKLY_CHALLENGE_DURATION,
    )


def _knowledge_sharer(user: User, now: datetime) -> Optional[Challenge]:
    # Social features are for paid users
    if not user.is_paid:
        return None
    return Challenge(
        id="knowledge_sharer",
        title="Knowledge Sharer",
        description="Share 3 completed tasks with insights",
        type=ChallengeType.WEEKLY,
        requirements=ChallengeRequirements(tasks=3),
        rewards=[BadgeReward(
            value="mentor_badge",
            title="Mentor",
            description="Shared knowledge with community",
            rarity=Rarity.EPIC,
        )],
        is_active=True,
        expires_at=now + WEEKLY_CHALLENGE_DURATION,
    )


CHALLENGE_TEMPLATES = {
    Archetype.ACHIEVER: _streak_master,
    Archetype.COMPETITOR: _speed_demon,
    Archetype.EXPLORER: _category_explorer,
    Archetype.SOCIALIZER: _knowledge_sharer,
}


def generate_personalized_challenges(
    user: User,
    personality_cluster: PersonalityCluster,
    current_tasks: Iterable[Task] = (),
    now: Optional[datetime] = None
) -> List[Challenge]:
    """
    Generate challenges tailored to the user's archetype

    Args:
        user: User aggregate stats
        personality_cluster: Output of analyze_personality_cluster
        current_tasks: The user's open tasks. Accepted but not used yet;
            reserved for task-aware tailoring.
        now: Generation time for expiry (defaults to the configured clock)

    Returns:
        Zero or one challenge
    """
    if now is None:
        now = now_local()

    template = CHALLENGE_TEMPLATES[personality_cluster.type]
    challenge = template(user, now)

    if challenge is None:
        logger.debug(f"No {personality_cluster.type.value} challenge for user {user.id} on tier {user.tier.value}")
        return []

    logger.info(f"Generated challenge '{challenge.id}' for user {user.id} (active={challenge.is_active})")
    return [challenge]
