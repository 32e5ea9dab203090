"""Unit tests for Pydantic models"""
import pytest
from datetime import datetime, timezone
from pydantic import TypeAdapter

from taskquest.exceptions import ValidationError
from taskquest.models import (
    BadgeReward,
    ChallengeRequirements,
    GamificationReward,
    PowerUpReward,
    Rarity,
    SubscriptionTier,
    Task,
    TaskPriority,
    User,
    XPReward,
    parse_completion_history,
    parse_habit,
    parse_habit_completion,
    parse_task,
    parse_user,
)


# ============================================================================
# User
# ============================================================================

def test_parse_user_camel_case():
    """Backend JSON uses camelCase keys"""
    user = parse_user({
        "id": "u1",
        "tier": "pro",
        "totalXp": 1500,
        "currentStreak": 3,
        "longestStreak": 9,
    })

    assert user.tier == SubscriptionTier.PRO
    assert user.total_xp == 1500
    assert user.current_streak == 3
    assert user.longest_streak == 9


def test_user_snake_case_and_defaults():
    user = User(id="u2", total_xp=10)

    assert user.tier == SubscriptionTier.FREE
    assert user.current_streak == 0
    assert user.is_paid is False


def test_user_serializes_camel_case():
    payload = User(id="u3", tier="basic", total_xp=5).model_dump(by_alias=True, mode="json")
    assert payload == {"id": "u3", "tier": "basic", "totalXp": 5, "currentStreak": 0, "longestStreak": 0}


def test_user_negative_counters_clamped():
    user = User(id="u4", total_xp=-50, current_streak=-1, longest_streak=-3)

    assert user.total_xp == 0
    assert user.current_streak == 0
    assert user.longest_streak == 0


@pytest.mark.parametrize("tier", ["enterprise", "", None])
def test_user_unknown_tier_is_free(tier):
    assert User(id="u5", tier=tier).tier == SubscriptionTier.FREE


def test_parse_user_missing_id():
    with pytest.raises(ValidationError) as exc_info:
        parse_user({"totalXp": 10})

    assert exc_info.value.field == "id"
    assert exc_info.value.operation == "parse_user"


def test_parse_user_bad_xp():
    with pytest.raises(ValidationError) as exc_info:
        parse_user({"id": "u6", "totalXp": "lots"})

    assert exc_info.value.field in ("totalXp", "total_xp")
    assert exc_info.value.user_id == "u6"


# ============================================================================
# Task & Habit
# ============================================================================

def test_parse_task_camel_case():
    task = parse_task({"id": "t1", "priority": "high", "estimatedTime": 45, "category": "work"})

    assert task.priority == TaskPriority.HIGH
    assert task.estimated_time == 45
    assert task.completed is False


def test_task_unknown_priority_is_none():
    assert Task(priority="critical").priority is None


def test_task_negative_estimate_clamped():
    assert Task(estimated_time=-10).estimated_time == 0


def test_parse_habit_and_completion():
    habit = parse_habit({"id": "h1", "name": "Read", "currentStreak": 12})
    completion = parse_habit_completion({"habitId": "h1", "completedAt": "2024-01-15T08:30:00Z"})

    assert habit.current_streak == 12
    assert completion.completed_at == datetime(2024, 1, 15, 8, 30, tzinfo=timezone.utc)


def test_parse_habit_completion_requires_timestamp():
    with pytest.raises(ValidationError):
        parse_habit_completion({"habitId": "h1"})


def test_parse_completion_history():
    history = parse_completion_history([{"completed": True}, {}])

    assert [entry.completed for entry in history] == [True, False]


def test_parse_completion_history_reports_entry_index():
    with pytest.raises(ValidationError) as exc_info:
        parse_completion_history([{"completed": True}, {"completed": "maybe"}])

    assert exc_info.value.field == "1.completed"
    assert exc_info.value.operation == "parse_completion_history"


def test_parse_completion_history_requires_list():
    with pytest.raises(ValidationError):
        parse_completion_history(5)


# ============================================================================
# Rewards & Challenges
# ============================================================================

def test_rarity_ordering():
    assert Rarity.COMMON.rank < Rarity.RARE.rank < Rarity.EPIC.rank < Rarity.LEGENDARY.rank


def test_reward_union_discriminates_on_type():
    adapter = TypeAdapter(GamificationReward)

    xp = adapter.validate_python({"type": "xp", "value": 25, "title": "t", "description": "d", "rarity": "rare"})
    power_up = adapter.validate_python(
        {"type": "power_up", "value": "focus_boost", "title": "t", "description": "d", "rarity": "epic"}
    )

    assert isinstance(xp, XPReward)
    assert xp.value == 25
    assert isinstance(power_up, PowerUpReward)
    assert power_up.value == "focus_boost"


def test_reward_union_rejects_mismatched_value():
    """An XP reward must carry a number"""
    from pydantic import ValidationError as PydanticValidationError

    with pytest.raises(PydanticValidationError):
        TypeAdapter(GamificationReward).validate_python(
            {"type": "xp", "value": "focus_boost", "title": "t", "description": "d", "rarity": "rare"}
        )


def test_badge_reward_dump():
    reward = BadgeReward(value="mentor_badge", title="Mentor", description="d", rarity=Rarity.EPIC)
    assert reward.model_dump(mode="json")["type"] == "badge"


def test_challenge_requirements_timeframe_alias():
    assert ChallengeRequirements(timeframe=2).timeframe_hours == 2
    assert ChallengeRequirements(timeframe_hours=3).model_dump(by_alias=True, exclude_none=True) == {"timeframe": 3}
