"""Tests for the command-line entry point"""
import json

import pytest

from taskquest.main import main, run_command
from taskquest.services import GamificationService


@pytest.fixture
def write_payload(tmp_path):
    def _write(payload) -> str:
        path = tmp_path / "payload.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write


def test_task_xp_command(write_payload, capsys):
    path = write_payload({
        "user": {"id": "u1", "tier": "pro", "totalXp": 100},
        "task": {"id": "t1", "priority": "urgent"},
    })

    assert main(["task-xp", path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["xpAwarded"] == 20
    assert output["newTotalXp"] >= 120


def test_snapshot_command(write_payload, capsys):
    path = write_payload({
        "user": {"id": "u1", "tier": "premium_pro", "totalXp": 12000, "currentStreak": 35, "longestStreak": 35},
        "history": [{"completed": True}] * 5,
    })

    assert main(["snapshot", path]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["personality"]["type"] == "achiever"
    assert len(output["badges"]) == 3
    assert len(output["unlocks"]) == 7


def test_invalid_user_payload(write_payload, capsys):
    path = write_payload({"user": {"totalXp": 10}})

    assert main(["message", path]) == 1
    assert "ValidationError" in capsys.readouterr().err


def test_missing_payload_file(tmp_path):
    assert main(["snapshot", str(tmp_path / "missing.json")]) == 1


def test_run_command_habit(fixed_clock, never_lucky):
    service = GamificationService(rng=never_lucky, clock=fixed_clock)
    output = run_command("habit", {
        "user": {"id": "u1"},
        "habit": {"id": "h1", "currentStreak": 9},
        "completion": {"habitId": "h1", "completedAt": "2024-01-15T07:00:00Z"},
    }, service)

    assert output["streak"] == {"newStreak": 10, "milestoneReached": True}
    assert output["rewards"][0]["type"] == "power_up"


def test_run_command_message(fixed_clock):
    output = run_command("message", {"user": {"id": "u1"}, "context": "nope"}, GamificationService(clock=fixed_clock))
    assert output["message"].startswith("Keep up the great work!")


def test_invalid_history_entry(write_payload, capsys):
    path = write_payload({"user": {"id": "u1"}, "history": [{"completed": "maybe"}]})

    assert main(["message", path]) == 1

    error = json.loads(capsys.readouterr().err)
    assert error["error"] == "ValidationError"
    assert error["user_message"].startswith("Invalid 0.completed")


def test_non_numeric_completion_time(write_payload, capsys):
    path = write_payload({
        "user": {"id": "u1"},
        "task": {"id": "t1", "estimatedTime": 30},
        "completionTime": "fast",
    })

    assert main(["task-xp", path]) == 1

    error = json.loads(capsys.readouterr().err)
    assert error["error"] == "ValidationError"
    assert error["user_message"].startswith("Invalid completionTime")


def test_numeric_completion_time_accepted(fixed_clock, never_lucky):
    service = GamificationService(rng=never_lucky, clock=fixed_clock)
    output = run_command("task-xp", {
        "user": {"id": "u1"},
        "task": {"id": "t1", "priority": "low", "estimatedTime": 30},
        "completionTime": 15,
    }, service)

    assert output["xpAwarded"] == 13
