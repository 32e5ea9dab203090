"""
taskquest - gamification and behavioral-scoring engine

Pure scoring functions invoked by a task-and-habit backend:
- XP calculation for completed tasks
- Behavioral archetype classification
- Habit streak transitions
- Badges, micro-rewards and personalized challenges
- Progressive feature unlocks and motivational copy
"""

__version__ = "0.1.0"
