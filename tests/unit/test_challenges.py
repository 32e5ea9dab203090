"""Unit tests for Challenge System (taskquest/gamification/challenges.py)"""
from datetime import timedelta

import pytest

from taskquest.gamification import challenges as challenge_module
from taskquest.gamification.challenges import generate_personalized_challenges
from taskquest.gamification.personality import build_cluster
from taskquest.models import Archetype, BadgeReward, ChallengeType, PowerUpReward, Rarity


# ============================================================================
# Achiever
# ============================================================================

def test_achiever_streak_master_active(make_user, fixed_now):
    user = make_user(current_streak=10)
    challenges = generate_personalized_challenges(user, build_cluster(Archetype.ACHIEVER), now=fixed_now)

    assert len(challenges) == 1
    challenge = challenges[0]
    assert challenge.id == "streak_master"
    assert challenge.type == ChallengeType.MILESTONE
    assert challenge.requirements.streak == 10
    assert challenge.is_active is True
    assert challenge.expires_at is None
    assert isinstance(challenge.rewards[0], BadgeReward)
    assert challenge.rewards[0].value == "streak_master_badge"
    assert challenge.rewards[0].rarity == Rarity.EPIC


@pytest.mark.parametrize("streak,active", [(6, False), (7, True)])
def test_achiever_activation_threshold(make_user, fixed_now, streak, active):
    user = make_user(current_streak=streak)
    challenge = generate_personalized_challenges(user, build_cluster(Archetype.ACHIEVER), now=fixed_now)[0]
    assert challenge.is_active is active


# ============================================================================
# Competitor & Explorer
# ============================================================================

def test_competitor_speed_demon(test_user, fixed_now):
    challenge = generate_personalized_challenges(test_user, build_cluster(Archetype.COMPETITOR), now=fixed_now)[0]

    assert challenge.id == "speed_demon"
    assert challenge.type == ChallengeType.DAILY
    assert challenge.requirements.tasks == 5
    assert challenge.requirements.timeframe_hours == 2
    assert challenge.is_active is True
    assert challenge.expires_at == fixed_now + timedelta(hours=24)
    assert isinstance(challenge.rewards[0], PowerUpReward)
    assert challenge.rewards[0].value == "2x_xp_boost"


def test_competitor_requirements_serialize_timeframe(test_user, fixed_now):
    challenge = generate_personalized_challenges(test_user, build_cluster(Archetype.COMPETITOR), now=fixed_now)[0]
    payload = challenge.model_dump(by_alias=True, exclude_none=True, mode="json")

    assert payload["requirements"] == {"tasks": 5, "timeframe": 2}
    assert payload["isActive"] is True
    assert "expiresAt" in payload


def test_explorer_category_explorer(test_user, fixed_now):
    challenge = generate_personalized_challenges(test_user, build_cluster(Archetype.EXPLORER), now=fixed_now)[0]

    assert challenge.id == "category_explorer"
    assert challenge.type == ChallengeType.WEEKLY
    assert challenge.requirements.tasks == 4
    assert challenge.expires_at == fixed_now + timedelta(days=7)
    assert challenge.rewards[0].value == "versatility_badge"


# ============================================================================
# Socializer (tier-gated)
# ============================================================================

def test_socializer_free_tier_gets_nothing(test_user, fixed_now):
    cluster = build_cluster(Archetype.SOCIALIZER)
    for _ in range(3):
        assert generate_personalized_challenges(test_user, cluster, now=fixed_now) == []


@pytest.mark.parametrize("tier", ["basic", "pro", "advanced_pro", "premium_pro"])
def test_socializer_paid_tiers(make_user, fixed_now, tier):
    user = make_user(tier=tier)
    challenges = generate_personalized_challenges(user, build_cluster(Archetype.SOCIALIZER), now=fixed_now)

    assert [c.id for c in challenges] == ["knowledge_sharer"]
    assert challenges[0].requirements.tasks == 3
    assert challenges[0].expires_at == fixed_now + timedelta(days=7)
    assert challenges[0].rewards[0].value == "mentor_badge"


# ============================================================================
# Inputs
# ============================================================================

def test_current_tasks_do_not_change_selection(test_user, make_task, fixed_now):
    cluster = build_cluster(Archetype.EXPLORER)
    without = generate_personalized_challenges(test_user, cluster, now=fixed_now)
    with_tasks = generate_personalized_challenges(
        test_user, cluster, [make_task(), make_task(category="work")], now=fixed_now
    )

    assert with_tasks == without


def test_default_clock_for_expiry(test_user, fixed_now, monkeypatch):
    monkeypatch.setattr(challenge_module, "now_local", lambda: fixed_now)
    challenge = generate_personalized_challenges(test_user, build_cluster(Archetype.COMPETITOR))[0]

    assert challenge.expires_at == fixed_now + timedelta(hours=24)
