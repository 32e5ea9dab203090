"""
Service Layer Package

Business logic services that sequence the pure gamification components
for backend events.

Core Services:
- GamificationService: XP, streaks, rewards, challenges, unlocks, messaging
"""

from taskquest.services.gamification_service import GamificationService

__all__ = ["GamificationService"]
