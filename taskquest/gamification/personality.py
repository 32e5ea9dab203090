"""
Personality Clustering - Behavioral archetype detection

Classifies a user into one of four archetypes from aggregate stats:
- Achiever: high completion rate and a streak longer than a week
- Competitor: high XP volume per streak day
- Explorer: steady streak relative to their best
- Socializer: everyone else

Branches are evaluated in that order and the first match wins, so a user
who qualifies as both achiever and competitor is an achiever.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from taskquest.models import Archetype, ClusterPreferences, PersonalityCluster, User

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_RATE = 0.5

ACHIEVER_MIN_COMPLETION_RATE = 0.8
ACHIEVER_MIN_STREAK = 7
COMPETITOR_MIN_TASKS_PER_DAY = 5
EXPLORER_MIN_CONSISTENCY = 0.7


ARCHETYPE_PROFILES = MappingProxyType({
    Archetype.ACHIEVER: {
        "traits": ("high_completion_rate", "consistent", "goal_oriented"),
        "reward_types": ("milestone_badges", "xp_multipliers", "progress_visualization"),
        "challenge_types": ("streak_challenges", "completion_goals", "time_trials"),
        "motivation_tactics": ("progress_tracking", "achievement_unlocks", "leaderboards"),
    },
    Archetype.COMPETITOR: {
        "traits": ("high_volume", "fast_paced", "challenge_seeking"),
        "reward_types": ("leaderboard_positions", "speed_bonuses", "challenge_victories"),
        "challenge_types": ("speed_challenges", "volume_goals", "difficulty_spikes"),
        "motivation_tactics": ("social_comparison", "time_pressure", "competitive_rewards"),
    },
    Archetype.EXPLORER: {
        "traits": ("steady_progress", "variety_seeking", "experimental"),
        "reward_types": ("discovery_badges", "variety_bonuses", "surprise_rewards"),
        "challenge_types": ("variety_challenges", "exploration_goals", "creativity_tasks"),
        "motivation_tactics": ("novelty_introduction", "surprise_elements", "customization_options"),
    },
    Archetype.SOCIALIZER: {
        "traits": ("community_oriented", "sharing_focused", "supportive"),
        "reward_types": ("social_badges", "sharing_rewards", "collaboration_bonuses"),
        "challenge_types": ("team_challenges", "sharing_goals", "community_events"),
        "motivation_tactics": ("social_recognition", "peer_support", "shared_achievements"),
    },
})


def _is_completed(entry: Any) -> bool:
    if isinstance(entry, Mapping):
        return bool(entry.get("completed"))
    return bool(getattr(entry, "completed", False))


def calculate_completion_rate(completion_history: Iterable[Any]) -> float:
    """Share of completed entries, 0.5 when there is no history"""
    history = list(completion_history)
    if not history:
        return DEFAULT_COMPLETION_RATE
    return sum(1 for entry in history if _is_completed(entry)) / len(history)


def classify_archetype(user: User, completion_history: Iterable[Any] = ()) -> Archetype:
    """
    Pick the archetype for a user

    Args:
        user: User aggregate stats
        completion_history: Records with a ``completed`` flag (models or mappings)

    Returns:
        The first archetype whose criteria match
    """
    completion_rate = calculate_completion_rate(completion_history)
    avg_tasks_per_day = user.total_xp / max(1, user.current_streak)
    streak_consistency = user.current_streak / max(1, user.longest_streak)

    if completion_rate > ACHIEVER_MIN_COMPLETION_RATE and user.current_streak > ACHIEVER_MIN_STREAK:
        archetype = Archetype.ACHIEVER
    elif avg_tasks_per_day > COMPETITOR_MIN_TASKS_PER_DAY:
        archetype = Archetype.COMPETITOR
    elif streak_consistency > EXPLORER_MIN_CONSISTENCY:
        archetype = Archetype.EXPLORER
    else:
        archetype = Archetype.SOCIALIZER

    logger.debug(
        f"User {user.id}: completion_rate={completion_rate:.2f}, "
        f"avg_tasks_per_day={avg_tasks_per_day:.2f}, "
        f"streak_consistency={streak_consistency:.2f} -> {archetype.value}"
    )
    return archetype


def build_cluster(archetype: Archetype) -> PersonalityCluster:
    """Fresh PersonalityCluster for an archetype from the static profile table"""
    profile = ARCHETYPE_PROFILES[archetype]
    return PersonalityCluster(
        type=archetype,
        traits=list(profile["traits"]),
        preferences=ClusterPreferences(
            reward_types=list(profile["reward_types"]),
            challenge_types=list(profile["challenge_types"]),
            motivation_tactics=list(profile["motivation_tactics"]),
        ),
    )


def analyze_personality_cluster(user: User, completion_history: Iterable[Any] = ()) -> PersonalityCluster:
    """
    Classify a user into a behavioral archetype

    Args:
        user: User aggregate stats
        completion_history: Records with a ``completed`` flag

    Returns:
        PersonalityCluster with traits and preferences
    """
    archetype = classify_archetype(user, completion_history)
    logger.info(f"Personality cluster for user {user.id}: {archetype.value}")
    return build_cluster(archetype)
