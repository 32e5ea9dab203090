"""Configuration management"""
import os
from typing import Any, Callable, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

from taskquest.exceptions import ConfigurationError

load_dotenv()

# Env values that failed numeric conversion, reported by validate_config()
_MALFORMED: Dict[str, str] = {}


def _env_number(key: str, default: str, cast: Callable[[str], Any]) -> Any:
    raw = os.getenv(key, default)
    try:
        return cast(raw)
    except ValueError:
        _MALFORMED[key] = raw
        return cast(default)


# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Micro-rewards
# Chance of a surprise bonus on each task completion. Repeats are not rate-limited.
MICRO_REWARD_PROBABILITY: float = _env_number("MICRO_REWARD_PROBABILITY", "0.1", float)
SURPRISE_BONUS_XP: int = _env_number("SURPRISE_BONUS_XP", "25", int)
VARIETY_BONUS_XP: int = _env_number("VARIETY_BONUS_XP", "15", int)

# Clock used for streak days and challenge expiry when the caller injects none
CHALLENGE_TIMEZONE: str = os.getenv("CHALLENGE_TIMEZONE", "UTC")


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if _MALFORMED:
        key = next(iter(_MALFORMED))
        raise ConfigurationError(
            f"{key} must be a number, got '{_MALFORMED[key]}'",
            config_key=key,
        )
    if not 0.0 <= MICRO_REWARD_PROBABILITY <= 1.0:
        raise ConfigurationError(
            f"MICRO_REWARD_PROBABILITY must be between 0 and 1, got {MICRO_REWARD_PROBABILITY}",
            config_key="MICRO_REWARD_PROBABILITY",
        )
    if SURPRISE_BONUS_XP < 0:
        raise ConfigurationError(
            "SURPRISE_BONUS_XP must not be negative",
            config_key="SURPRISE_BONUS_XP",
        )
    if VARIETY_BONUS_XP < 0:
        raise ConfigurationError(
            "VARIETY_BONUS_XP must not be negative",
            config_key="VARIETY_BONUS_XP",
        )
    try:
        ZoneInfo(CHALLENGE_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown CHALLENGE_TIMEZONE '{CHALLENGE_TIMEZONE}'",
            config_key="CHALLENGE_TIMEZONE",
            cause=e,
        )
