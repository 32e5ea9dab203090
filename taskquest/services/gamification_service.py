"""
GamificationService - Gamification Business Logic

Sequences the pure scoring components for backend events (task completed,
habit checked in, daily refresh) and owns the injected random source and
clock so results are reproducible in tests.

Caller obligations:
- Persist awarded XP, streaks and badges after each call
- Guard those writes against concurrent updates (e.g. compare-and-swap on
  total_xp / current_streak); this service never reads or writes storage
"""

import logging
import random
from typing import Any, Iterable, List, Optional, Union

from taskquest.gamification.challenges import generate_personalized_challenges
from taskquest.gamification.messages import generate_motivational_message
from taskquest.gamification.personality import analyze_personality_cluster
from taskquest.gamification.rewards import (
    RandomSource,
    calculate_status_badges,
    generate_micro_rewards,
)
from taskquest.gamification.streak_system import settle_user_streak, update_habit_streak
from taskquest.gamification.unlocks import get_progressive_unlocks
from taskquest.gamification.xp_system import calculate_task_xp
from taskquest.models import (
    Badge,
    Challenge,
    GamificationReward,
    GamificationSnapshot,
    Habit,
    HabitCompletion,
    HabitCompletionResult,
    MessageContext,
    PersonalityCluster,
    RewardContext,
    StreakUpdate,
    Task,
    TaskCompletionResult,
    UnlockEntry,
    User,
    XPReward,
)
from taskquest.utils.datetime_helpers import Clock, now_local

logger = logging.getLogger(__name__)


class GamificationService:
    """
    Service for gamification features.

    Responsibilities:
    - XP calculation for task completions
    - Habit streak evaluation and user streak settlement
    - Micro-rewards, status badges and challenges
    - Progressive unlocks and archetype-based messaging
    """

    def __init__(self, rng: Optional[RandomSource] = None, clock: Optional[Clock] = None):
        """
        Initialize GamificationService.

        Args:
            rng: Random source for micro-rewards (defaults to the ``random`` module)
            clock: Callable returning the current datetime (defaults to the configured timezone)
        """
        self.rng = rng or random
        self.clock = clock or now_local
        logger.debug("GamificationService initialized")

    # ------------------------------------------
    # Single components
    # ------------------------------------------

    def calculate_task_xp(self, task: Task, completion_time_minutes: Optional[float] = None) -> int:
        return calculate_task_xp(task, completion_time_minutes)

    def analyze_personality_cluster(self, user: User, completion_history: Iterable[Any] = ()) -> PersonalityCluster:
        return analyze_personality_cluster(user, completion_history)

    def update_habit_streak(self, habit: Habit, completion: HabitCompletion) -> StreakUpdate:
        return update_habit_streak(habit, completion, now=self.clock())

    def settle_user_streak(self, user: User, new_streak: int) -> User:
        return settle_user_streak(user, new_streak)

    def generate_micro_rewards(self, user: User, context: Union[RewardContext, str]) -> List[GamificationReward]:
        return generate_micro_rewards(user, context, rng=self.rng)

    def calculate_status_badges(self, user: User) -> List[Badge]:
        return calculate_status_badges(user)

    def generate_personalized_challenges(
        self,
        user: User,
        personality_cluster: PersonalityCluster,
        current_tasks: Iterable[Task] = ()
    ) -> List[Challenge]:
        return generate_personalized_challenges(user, personality_cluster, current_tasks, now=self.clock())

    def get_progressive_unlocks(self, user: User) -> List[UnlockEntry]:
        return get_progressive_unlocks(user)

    def generate_motivational_message(
        self,
        user: User,
        context: Union[MessageContext, str],
        completion_history: Iterable[Any] = ()
    ) -> str:
        return generate_motivational_message(user, context, completion_history)

    # ------------------------------------------
    # Event flows
    # ------------------------------------------

    def process_task_completion(
        self,
        user: User,
        task: Task,
        completion_time_minutes: Optional[float] = None,
        completion_history: Iterable[Any] = (),
        new_category: bool = False
    ) -> TaskCompletionResult:
        """
        Process gamification for a task completion.

        Args:
            user: User who completed the task
            task: Completed task
            completion_time_minutes: Actual time spent (optional)
            completion_history: Recent completion records for messaging
            new_category: True when the task is in a category the user hasn't
                completed recently (adds the variety bonus)

        Returns:
            TaskCompletionResult; ``new_total_xp`` is what the caller should persist
        """
        history = list(completion_history)

        xp_awarded = calculate_task_xp(task, completion_time_minutes)

        rewards = generate_micro_rewards(user, RewardContext.TASK_COMPLETION, rng=self.rng)
        if new_category:
            rewards += generate_micro_rewards(user, RewardContext.CATEGORY_VARIETY, rng=self.rng)

        bonus_xp = sum(r.value for r in rewards if isinstance(r, XPReward))
        new_total_xp = user.total_xp + xp_awarded + bonus_xp

        message = generate_motivational_message(user, MessageContext.TASK_COMPLETION, history)

        logger.info(
            f"Gamification processed for task completion: user={user.id}, task={task.id}, "
            f"xp={xp_awarded}, bonus={bonus_xp}, total={new_total_xp}"
        )

        return TaskCompletionResult(
            xp_awarded=xp_awarded,
            bonus_xp=bonus_xp,
            rewards=rewards,
            new_total_xp=new_total_xp,
            message=message,
        )

    def process_habit_completion(
        self,
        user: User,
        habit: Habit,
        completion: HabitCompletion
    ) -> HabitCompletionResult:
        """
        Process gamification for a habit check-in.

        Milestone rewards are evaluated at the habit's new streak. Call this
        exactly once per completion event.

        Returns:
            HabitCompletionResult with the streak update, rewards and message
        """
        streak = update_habit_streak(habit, completion, now=self.clock())

        rewards: List[GamificationReward] = []
        if streak.milestone_reached:
            at_milestone = user.model_copy(update={"current_streak": streak.new_streak})
            rewards = generate_micro_rewards(at_milestone, RewardContext.STREAK_MILESTONE, rng=self.rng)
            message = generate_motivational_message(at_milestone, MessageContext.STREAK_MILESTONE)
        else:
            message = generate_motivational_message(user, MessageContext.TASK_COMPLETION)

        logger.info(
            f"Gamification processed for habit completion: user={user.id}, habit={habit.id}, "
            f"streak={habit.current_streak}→{streak.new_streak}, milestone={streak.milestone_reached}"
        )

        return HabitCompletionResult(streak=streak, rewards=rewards, message=message)

    def build_snapshot(
        self,
        user: User,
        completion_history: Iterable[Any] = (),
        current_tasks: Iterable[Task] = ()
    ) -> GamificationSnapshot:
        """
        Daily refresh: personality, challenges, badges and unlocks in one record.
        """
        personality = analyze_personality_cluster(user, list(completion_history))

        snapshot = GamificationSnapshot(
            personality=personality,
            challenges=generate_personalized_challenges(user, personality, current_tasks, now=self.clock()),
            badges=calculate_status_badges(user),
            unlocks=get_progressive_unlocks(user),
        )

        logger.info(
            f"Snapshot for user {user.id}: {personality.type.value}, "
            f"{len(snapshot.challenges)} challenges, {len(snapshot.badges)} badges"
        )
        return snapshot
