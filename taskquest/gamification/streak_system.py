"""
Habit Streak System

Streak transitions for a habit check-in, compared by calendar day:
- Completed today: streak + 1 (milestone every 5 days)
- Completed yesterday: streak unchanged
- Anything else: streak resets to 1

The evaluator is pure. Callers persist the new streak and must call it
exactly once per completion event; a repeated call increments again.
"""

import logging
from datetime import datetime
from typing import Optional

from taskquest.models import Habit, HabitCompletion, StreakUpdate, User
from taskquest.utils.datetime_helpers import calendar_days_between, now_local

logger = logging.getLogger(__name__)

MILESTONE_INTERVAL = 5


def is_streak_milestone(streak: int) -> bool:
    """Every 5th day is a milestone"""
    return streak > 0 and streak % MILESTONE_INTERVAL == 0


def update_habit_streak(
    habit: Habit,
    completion: HabitCompletion,
    now: Optional[datetime] = None
) -> StreakUpdate:
    """
    Evaluate a habit completion against the habit's current streak

    Args:
        habit: Habit with its current streak
        completion: The check-in being recorded
        now: Current time (defaults to the configured clock)

    Returns:
        StreakUpdate with the new streak and whether a milestone was hit
    """
    if now is None:
        now = now_local()

    days_diff = calendar_days_between(completion.completed_at, now)

    if days_diff == 0:
        new_streak = habit.current_streak + 1
        milestone_reached = is_streak_milestone(new_streak)
    elif days_diff == 1:
        new_streak = habit.current_streak
        milestone_reached = False
    else:
        new_streak = 1
        milestone_reached = False
        logger.info(
            f"Habit {habit.id} streak reset. Was {habit.current_streak}, "
            f"completion was {days_diff} days from today"
        )

    logger.debug(f"Habit {habit.id} streak: {habit.current_streak} → {new_streak} (milestone={milestone_reached})")

    return StreakUpdate(new_streak=new_streak, milestone_reached=milestone_reached)


def settle_user_streak(user: User, new_streak: int) -> User:
    """
    Apply a new current streak to a user and keep the best streak in step

    Args:
        user: User before the update
        new_streak: Current streak to record

    Returns:
        Copy of the user with ``longest_streak >= current_streak``
    """
    current = max(0, new_streak)
    longest = max(user.longest_streak, current)

    if longest > user.longest_streak:
        logger.info(f"User {user.id} new best streak: {longest} days")

    return user.model_copy(update={"current_streak": current, "longest_streak": longest})
