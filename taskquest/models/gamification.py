"""Gamification models produced by the scoring engine"""
from enum import Enum
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from taskquest.models.base import RecordModel


class Archetype(str, Enum):
    """Behavioral archetypes used to personalize rewards and messaging"""
    ACHIEVER = "achiever"
    EXPLORER = "explorer"
    SOCIALIZER = "socializer"
    COMPETITOR = "competitor"


class Rarity(str, Enum):
    """Reward/badge quality tiers, lowest first"""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        return list(Rarity).index(self)


class ChallengeType(str, Enum):
    """Challenge cadence"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MILESTONE = "milestone"


class RewardContext(str, Enum):
    """Events that can produce micro-rewards"""
    TASK_COMPLETION = "task_completion"
    STREAK_MILESTONE = "streak_milestone"
    CATEGORY_VARIETY = "category_variety"


class MessageContext(str, Enum):
    """Situations with a motivational message template"""
    TASK_COMPLETION = "task_completion"
    STREAK_MILESTONE = "streak_milestone"
    LOW_ENERGY = "low_energy"


# ==========================================
# Personality
# ==========================================

class ClusterPreferences(RecordModel):
    reward_types: List[str]
    challenge_types: List[str]
    motivation_tactics: List[str]


class PersonalityCluster(RecordModel):
    """Archetype with its static traits and preferences"""
    type: Archetype
    traits: List[str]
    preferences: ClusterPreferences


# ==========================================
# Rewards (tagged by ``type``)
# ==========================================

class RewardBase(RecordModel):
    title: str
    description: str
    rarity: Rarity


class XPReward(RewardBase):
    """Flat XP bonus"""
    type: Literal["xp"] = "xp"
    value: int


class BadgeReward(RewardBase):
    type: Literal["badge"] = "badge"
    value: str  # badge id


class PowerUpReward(RewardBase):
    type: Literal["power_up"] = "power_up"
    value: str  # power-up id


class ChallengeUnlockReward(RewardBase):
    type: Literal["challenge_unlock"] = "challenge_unlock"
    value: str  # challenge id


GamificationReward = Annotated[
    Union[XPReward, BadgeReward, PowerUpReward, ChallengeUnlockReward],
    Field(discriminator="type"),
]


# ==========================================
# Challenges, badges, unlocks
# ==========================================

class ChallengeRequirements(RecordModel):
    """Partial set of requirements; unset fields don't apply"""
    tasks: Optional[int] = None
    streak: Optional[int] = None
    category: Optional[str] = None
    timeframe_hours: Optional[int] = Field(default=None, alias="timeframe")


class Challenge(RecordModel):
    id: str
    title: str
    description: str
    type: ChallengeType
    requirements: ChallengeRequirements
    rewards: List[GamificationReward]
    is_active: bool
    expires_at: Optional[datetime] = None


class Badge(RecordModel):
    """Status badge"""
    id: str
    title: str
    description: str
    tier: Rarity


class UnlockEntry(RecordModel):
    feature: str
    unlocked: bool
    requirement: str


class StreakUpdate(RecordModel):
    """Outcome of a habit check-in"""
    new_streak: int
    milestone_reached: bool


# ==========================================
# Service results
# ==========================================

class TaskCompletionResult(RecordModel):
    xp_awarded: int
    bonus_xp: int
    rewards: List[GamificationReward]
    new_total_xp: int
    message: str


class HabitCompletionResult(RecordModel):
    streak: StreakUpdate
    rewards: List[GamificationReward]
    message: str


class GamificationSnapshot(RecordModel):
    """Everything the dashboard needs after a daily refresh"""
    personality: PersonalityCluster
    challenges: List[Challenge]
    badges: List[Badge]
    unlocks: List[UnlockEntry]
