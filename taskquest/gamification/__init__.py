"""
Gamification engine for taskquest

Pure, stateless scoring components:
- XP calculation for completed tasks
- Personality clustering into behavioral archetypes
- Habit streak evaluation
- Micro-rewards and status badges
- Personalized challenges
- Progressive feature unlocks
- Motivational messages
"""

from taskquest.gamification.xp_system import calculate_task_xp
from taskquest.gamification.personality import analyze_personality_cluster
from taskquest.gamification.streak_system import update_habit_streak, settle_user_streak
from taskquest.gamification.rewards import generate_micro_rewards, calculate_status_badges
from taskquest.gamification.challenges import generate_personalized_challenges
from taskquest.gamification.unlocks import get_progressive_unlocks
from taskquest.gamification.messages import generate_motivational_message

__all__ = [
    "calculate_task_xp",
    "analyze_personality_cluster",
    "update_habit_streak",
    "settle_user_streak",
    "generate_micro_rewards",
    "calculate_status_badges",
    "generate_personalized_challenges",
    "get_progressive_unlocks",
    "generate_motivational_message",
]
