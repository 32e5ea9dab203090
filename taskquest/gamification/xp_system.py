"""
XP System

Calculates XP awarded for a completed task.

XP Award Rules:
- Base: 10 XP
- Priority multiplier: low ×1.0, medium ×1.2, high ×1.5, urgent ×2.0
- Time bonus (needs an estimate and the actual time):
    ≤ 80% of estimate ×1.3 (early), ≤ estimate ×1.1 (on time)
- Category bonus: health ×1.2, learning ×1.3, work ×1.1, personal ×1.0

Multipliers compose in that order and the result is rounded half-up.
"""

import logging
import math
from typing import Optional

from taskquest.models import Task, TaskPriority

logger = logging.getLogger(__name__)

BASE_TASK_XP = 10

PRIORITY_MULTIPLIERS = {
    TaskPriority.LOW: 1.0,
    TaskPriority.MEDIUM: 1.2,
    TaskPriority.HIGH: 1.5,
    TaskPriority.URGENT: 2.0,
}

EARLY_COMPLETION_RATIO = 0.8
EARLY_COMPLETION_BONUS = 1.3
ON_TIME_BONUS = 1.1

CATEGORY_BONUSES = {
    "health": 1.2,
    "learning": 1.3,
    "work": 1.1,
    "personal": 1.0,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up"""
    return int(math.floor(value + 0.5))


def get_time_bonus(estimated_time: Optional[int], completion_time_minutes: Optional[float]) -> float:
    """
    Time-based multiplier for finishing at or under the estimate

    Returns 1.0 when either value is missing or zero.
    """
    if not estimated_time or not completion_time_minutes:
        return 1.0

    if completion_time_minutes <= estimated_time * EARLY_COMPLETION_RATIO:
        return EARLY_COMPLETION_BONUS
    if completion_time_minutes <= estimated_time:
        return ON_TIME_BONUS
    return 1.0


def calculate_task_xp(task: Task, completion_time_minutes: Optional[float] = None) -> int:
    """
    Calculate XP for completing a task

    Args:
        task: Completed task
        completion_time_minutes: Actual time spent (optional)

    Returns:
        XP amount (at least 10)
    """
    if completion_time_minutes is not None and completion_time_minutes < 0:
        logger.warning(f"Negative completion time ({completion_time_minutes}) ignored")
        completion_time_minutes = None

    xp = float(BASE_TASK_XP)
    xp *= PRIORITY_MULTIPLIERS.get(task.priority, 1.0)
    xp *= get_time_bonus(task.estimated_time, completion_time_minutes)
    xp *= CATEGORY_BONUSES.get(task.category, 1.0) if task.category else 1.0

    amount = round_half_up(xp)
    logger.debug(
        f"Task {task.id} XP: priority={task.priority}, category={task.category}, "
        f"estimate={task.estimated_time}, actual={completion_time_minutes} -> {amount}"
    )
    return amount
