"""
Pydantic models for taskquest

Consumed records (User, Task, Habit, HabitCompletion) come from the backend;
everything in ``gamification`` is produced fresh by the engine on each call.
"""

from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError as PydanticValidationError

from taskquest.exceptions import wrap_validation_error
from taskquest.models.user import SubscriptionTier, User
from taskquest.models.activity import (
    CompletionHistoryEntry,
    Habit,
    HabitCompletion,
    Task,
    TaskPriority,
)
from taskquest.models.gamification import (
    Archetype,
    Badge,
    BadgeReward,
    Challenge,
    ChallengeRequirements,
    ChallengeType,
    ChallengeUnlockReward,
    ClusterPreferences,
    GamificationReward,
    GamificationSnapshot,
    HabitCompletionResult,
    MessageContext,
    PersonalityCluster,
    PowerUpReward,
    Rarity,
    RewardContext,
    StreakUpdate,
    TaskCompletionResult,
    UnlockEntry,
    XPReward,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_HISTORY_ADAPTER = TypeAdapter(List[CompletionHistoryEntry])


def _parse(model: Type[ModelT], payload: Mapping[str, Any], operation: str, user_id: Optional[str] = None) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise wrap_validation_error(e, operation=operation, user_id=user_id) from e


def parse_user(payload: Mapping[str, Any]) -> User:
    """Build a User from a backend JSON record (camelCase or snake_case keys)"""
    user_id = payload.get("id") if isinstance(payload, Mapping) else None
    return _parse(User, payload, "parse_user", user_id=user_id)


def parse_task(payload: Mapping[str, Any]) -> Task:
    return _parse(Task, payload, "parse_task")


def parse_habit(payload: Mapping[str, Any]) -> Habit:
    return _parse(Habit, payload, "parse_habit")


def parse_habit_completion(payload: Mapping[str, Any]) -> HabitCompletion:
    return _parse(HabitCompletion, payload, "parse_habit_completion")


def parse_completion_history(entries: Any) -> List[CompletionHistoryEntry]:
    """Build history records; a bad entry is reported by index (e.g. ``0.completed``)"""
    try:
        return _HISTORY_ADAPTER.validate_python(entries)
    except PydanticValidationError as e:
        raise wrap_validation_error(e, operation="parse_completion_history") from e


__all__ = [
    "SubscriptionTier",
    "User",
    "TaskPriority",
    "Task",
    "Habit",
    "HabitCompletion",
    "CompletionHistoryEntry",
    "Archetype",
    "Rarity",
    "ChallengeType",
    "RewardContext",
    "MessageContext",
    "ClusterPreferences",
    "PersonalityCluster",
    "GamificationReward",
    "XPReward",
    "BadgeReward",
    "PowerUpReward",
    "ChallengeUnlockReward",
    "ChallengeRequirements",
    "Challenge",
    "Badge",
    "UnlockEntry",
    "StreakUpdate",
    "TaskCompletionResult",
    "HabitCompletionResult",
    "GamificationSnapshot",
    "parse_user",
    "parse_task",
    "parse_habit",
    "parse_habit_completion",
    "parse_completion_history",
]
