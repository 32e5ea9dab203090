"""Command-line entry point: score a backend payload and print JSON"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from taskquest.config import LOG_LEVEL, validate_config
from taskquest.exceptions import TaskQuestError, ValidationError
from taskquest.models import (
    parse_completion_history,
    parse_habit,
    parse_habit_completion,
    parse_task,
    parse_user,
)
from taskquest.services import GamificationService

logger = logging.getLogger(__name__)

_MINUTES_ADAPTER = TypeAdapter(Optional[float])


def _completion_time(payload: Dict[str, Any]) -> Optional[float]:
    value = payload.get("completionTime")
    try:
        return _MINUTES_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(
            "Completion time must be a number of minutes",
            field="completionTime",
            value=value,
            operation="run_command",
            cause=e,
        ) from e


def _history(payload: Dict[str, Any]):
    return parse_completion_history(payload.get("history", []))


def run_command(command: str, payload: Dict[str, Any], service: GamificationService) -> Any:
    """
    Execute one command against a payload

    Payload keys: ``user`` (always), ``task``, ``completionTime``, ``history``,
    ``habit``, ``completion``, ``context``, ``newCategory``.
    """
    user = parse_user(payload.get("user", {}))

    if command == "task-xp":
        result = service.process_task_completion(
            user,
            parse_task(payload.get("task", {})),
            completion_time_minutes=_completion_time(payload),
            completion_history=_history(payload),
            new_category=bool(payload.get("newCategory", False)),
        )
        return result.model_dump(by_alias=True, mode="json")

    if command == "habit":
        result = service.process_habit_completion(
            user,
            parse_habit(payload.get("habit", {})),
            parse_habit_completion(payload.get("completion", {})),
        )
        return result.model_dump(by_alias=True, mode="json")

    if command == "snapshot":
        snapshot = service.build_snapshot(user, completion_history=_history(payload))
        return snapshot.model_dump(by_alias=True, mode="json")

    if command == "message":
        return {"message": service.generate_motivational_message(
            user, payload.get("context", "task_completion"), _history(payload)
        )}

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point"""
    parser = argparse.ArgumentParser(description="Score gamification events from a JSON payload")
    parser.add_argument("command", choices=["task-xp", "habit", "snapshot", "message"], help="What to compute")
    parser.add_argument("payload", type=Path, help="JSON file with the backend records")
    args = parser.parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )

    try:
        validate_config()
        payload = json.loads(args.payload.read_text(encoding="utf-8"))
        output = run_command(args.command, payload, GamificationService())
    except TaskQuestError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read payload {args.payload}: {e}")
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
