"""Task and habit models consumed by the scoring engine"""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import field_validator

from taskquest.models.base import RecordModel

logger = logging.getLogger(__name__)


class TaskPriority(str, Enum):
    """Task priority levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(RecordModel):
    """
    Task record

    ``priority`` is None when the backend sent a value we don't know;
    that task simply earns no priority multiplier.
    """
    id: Optional[str] = None
    title: Optional[str] = None
    priority: Optional[TaskPriority] = TaskPriority.MEDIUM
    category: Optional[str] = None
    estimated_time: Optional[int] = None  # minutes
    completed: bool = False

    @field_validator("priority", mode="before")
    @classmethod
    def unknown_priority_is_none(cls, v: Any) -> Any:
        if v is None or isinstance(v, TaskPriority):
            return v
        if v not in {p.value for p in TaskPriority}:
            logger.warning(f"Unknown task priority {v!r}, ignoring")
            return None
        return v

    @field_validator("estimated_time")
    @classmethod
    def clamp_estimate(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            logger.warning(f"Negative estimated_time ({v}) clamped to 0")
            return 0
        return v


class Habit(RecordModel):
    """Habit with its running streak"""
    id: Optional[str] = None
    name: Optional[str] = None
    current_streak: int = 0

    @field_validator("current_streak")
    @classmethod
    def clamp_streak(cls, v: int) -> int:
        return max(0, v)


class HabitCompletion(RecordModel):
    """A single habit check-in"""
    habit_id: Optional[str] = None
    completed_at: datetime


class CompletionHistoryEntry(RecordModel):
    """Completion record used only in aggregate for classification"""
    completed: bool = False
