"""User-related Pydantic models"""
import logging
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from taskquest.models.base import RecordModel

logger = logging.getLogger(__name__)


class SubscriptionTier(str, Enum):
    """Subscription level gating feature access"""
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ADVANCED_PRO = "advanced_pro"
    PREMIUM_PRO = "premium_pro"


class User(RecordModel):
    """
    Aggregate user stats as supplied by the backend

    Negative counters are clamped to zero and unknown tiers are read as
    ``free``. ``longest_streak >= current_streak`` only holds after
    settlement (see ``settle_user_streak``).
    """
    id: str
    tier: SubscriptionTier = SubscriptionTier.FREE
    total_xp: int = 0
    current_streak: int = 0
    longest_streak: int = 0

    @field_validator("tier", mode="before")
    @classmethod
    def unknown_tier_is_free(cls, v: Any) -> Any:
        if v is None:
            return SubscriptionTier.FREE
        if isinstance(v, SubscriptionTier):
            return v
        if v not in {t.value for t in SubscriptionTier}:
            logger.warning(f"Unknown subscription tier {v!r}, treating as free")
            return SubscriptionTier.FREE
        return v

    @field_validator("total_xp", "current_streak", "longest_streak")
    @classmethod
    def clamp_negative(cls, v: int, info) -> int:
        if v < 0:
            logger.warning(f"Negative {info.field_name} ({v}) clamped to 0")
            return 0
        return v

    @property
    def is_paid(self) -> bool:
        return self.tier != SubscriptionTier.FREE
