"""
Date/Time Handling Utilities

Clock helpers shared by the streak evaluator and the challenge generator.

RULES:
- The default clock is timezone-aware, in config.CHALLENGE_TIMEZONE
- Calendar comparisons happen in the clock's timezone
- Naive datetimes are read as wall-clock time in the other operand's timezone
"""

import logging
from datetime import datetime, date
from typing import Callable
from zoneinfo import ZoneInfo

from taskquest import config

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def now_local() -> datetime:
    """Current datetime in the configured challenge timezone"""
    return datetime.now(ZoneInfo(config.CHALLENGE_TIMEZONE))


def local_date(moment: datetime, reference: datetime) -> date:
    """
    Calendar date of ``moment`` as seen from ``reference``'s timezone

    Args:
        moment: Timestamp to normalize
        reference: Timestamp whose timezone defines "midnight"

    Returns:
        The date ``moment`` falls on, with time-of-day stripped
    """
    if moment.tzinfo is not None and reference.tzinfo is not None:
        return moment.astimezone(reference.tzinfo).date()
    return moment.date()


def calendar_days_between(earlier: datetime, later: datetime) -> int:
    """
    Whole calendar days from ``earlier`` to ``later`` (both truncated to midnight)

    Negative when ``earlier`` is actually after ``later``.
    """
    return (later.date() - local_date(earlier, later)).days
