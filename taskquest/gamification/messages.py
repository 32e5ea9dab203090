"""
Motivational Messages

Picks a message template by (archetype, context) and fills in the user's
streak and XP. The archetype is re-derived from the user's stats on every
call; without a completion history nobody qualifies as an achiever.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Union

from taskquest.gamification.personality import classify_archetype
from taskquest.models import Archetype, MessageContext, User

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Keep up the great work! Every task completed is progress! ✨"

# Placeholders: {current_streak}, {total_xp}
MESSAGE_TEMPLATES = MappingProxyType({
    Archetype.ACHIEVER: {
        MessageContext.TASK_COMPLETION: "Great job! You're {current_streak} days strong. Keep building that consistency! 💪",
        MessageContext.STREAK_MILESTONE: "Incredible {current_streak}-day streak! You're in the top 10% of achievers! 🏆",
        MessageContext.LOW_ENERGY: "Every small step counts. Your {total_xp} XP shows real progress! 📈",
    },
    Archetype.COMPETITOR: {
        MessageContext.TASK_COMPLETION: "Speed demon! Another task crushed. Can you beat your personal best? ⚡",
        MessageContext.STREAK_MILESTONE: "{current_streak} days in a row! You're dominating this challenge! 🚀",
        MessageContext.LOW_ENERGY: "Champions train even on tough days. You've got this! 🥊",
    },
    Archetype.EXPLORER: {
        MessageContext.TASK_COMPLETION: "Nice variety in your tasks! Exploring different areas makes you well-rounded 🌟",
        MessageContext.STREAK_MILESTONE: "{current_streak} days of consistent exploration! What will you discover next? 🗺️",
        MessageContext.LOW_ENERGY: "Every journey has rest stops. You're still moving forward! 🌱",
    },
    Archetype.SOCIALIZER: {
        MessageContext.TASK_COMPLETION: "Your progress inspires others! {total_xp} XP and counting! 👥",
        MessageContext.STREAK_MILESTONE: "{current_streak} days! Your consistency motivates the whole community! 🤝",
        MessageContext.LOW_ENERGY: "Remember, you're not alone in this journey. Keep going! 💝",
    },
})


def generate_motivational_message(
    user: User,
    context: Union[MessageContext, str],
    completion_history: Iterable[Any] = ()
) -> str:
    """
    Generate a personalized motivational message

    Args:
        user: User aggregate stats
        context: task_completion, streak_milestone or low_energy
        completion_history: Optional history for classification

    Returns:
        Message for the user's archetype, or a generic fallback for unknown contexts
    """
    try:
        context = MessageContext(context)
    except ValueError:
        logger.debug(f"No message template for context {context!r}, using fallback")
        return FALLBACK_MESSAGE

    archetype = classify_archetype(user, completion_history)
    template = MESSAGE_TEMPLATES[archetype].get(context)
    if template is None:
        return FALLBACK_MESSAGE

    return template.format(current_streak=user.current_streak, total_xp=user.total_xp)
