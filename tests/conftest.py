"""Global test fixtures and utilities for taskquest tests"""
import pytest
from datetime import datetime, timezone

from taskquest.models import Habit, Task, User


# ============================================================================
# Clock & Randomness Fixtures
# ============================================================================

FIXED_NOW = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


class FixedRandom:
    """Random source that always returns the same draw"""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def fixed_now():
    """Frozen 'now' for streak and expiry tests"""
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock callable returning FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def always_lucky():
    """Random source that wins every draw"""
    return FixedRandom(0.0)


@pytest.fixture
def never_lucky():
    """Random source that loses every draw"""
    return FixedRandom(0.99)


# ============================================================================
# Record Fixtures
# ============================================================================

@pytest.fixture
def make_user():
    """Factory for users with sensible defaults"""
    def _make_user(**overrides) -> User:
        data = {
            "id": "user-123",
            "tier": "free",
            "total_xp": 0,
            "current_streak": 0,
            "longest_streak": 0,
        }
        data.update(overrides)
        return User(**data)
    return _make_user


@pytest.fixture
def test_user(make_user):
    """Standard free-tier user with no progress"""
    return make_user()


@pytest.fixture
def make_task():
    """Factory for tasks; low priority, no category by default"""
    def _make_task(**overrides) -> Task:
        data = {"id": "task-1", "title": "Write report", "priority": "low"}
        data.update(overrides)
        return Task(**data)
    return _make_task


@pytest.fixture
def test_habit():
    """Habit four days into a streak"""
    return Habit(id="habit-1", name="Meditate", current_streak=4)
