"""
JSON serialization for training data models.

Handles conversion between dataclasses and JSON-compatible dicts, and
parsing of the compact sets strings typed on the command line.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.models import SET_STATUSES, Session, SessionExercise, SetLog


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_timestamp(value: str, name: str = "timestamp") -> datetime:
    """
    Parse an ISO-8601 local timestamp ("YYYY-MM-DD" or "YYYY-MM-DDTHH:MM[:SS]").

    Args:
        value: Timestamp string
        name: Field name for error messages

    Returns:
        Naive datetime

    Raises:
        ValidationError: If the string is not a valid ISO timestamp
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {name}: {value!r}. Expected ISO format") from e
    if parsed.tzinfo is not None:
        raise ValidationError(f"Invalid {name}: {value!r}. Use local time without offset")
    return parsed


def validate_number(value: Any, name: str) -> None:
    """
    Validate that an optional field holds a number (None is allowed).

    Raises:
        ValidationError: If value is a string, bool or other non-number
    """
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        raise ValidationError(f"{name} must be a number, got {value!r}")


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_rpe(value: float) -> float:
    """
    Validate an RPE rating: 1 to 10 in half-point steps.

    Raises:
        ValidationError: If out of range or not a half-point value
    """
    if not (1 <= value <= 10) or (value * 2) != int(value * 2):
        raise ValidationError(f"RPE must be 1-10 in steps of 0.5, got {value}")
    return value


def set_log_to_dict(set_log: SetLog) -> dict[str, Any]:
    """
    Convert SetLog to JSON-compatible dict.

    Optional fields are only written when set.
    """
    d: dict[str, Any] = {
        "status": set_log.status,
        "actual_load": set_log.actual_load,
        "actual_reps": set_log.actual_reps,
    }
    if set_log.target_load is not None:
        d["target_load"] = set_log.target_load
    if set_log.target_reps is not None:
        d["target_reps"] = set_log.target_reps
    if set_log.rpe is not None:
        d["rpe"] = set_log.rpe
    return d


def dict_to_set_log(data: dict[str, Any]) -> SetLog:
    """
    Convert dict to SetLog.

    Raises:
        ValidationError: If data is invalid
    """
    status = data.get("status")
    if status not in SET_STATUSES:
        raise ValidationError(f"Invalid set status: {status!r}. Must be one of {SET_STATUSES}")

    for key in ("actual_load", "actual_reps", "target_load", "target_reps", "rpe"):
        validate_number(data.get(key), key)
    actual_load = data.get("actual_load") or 0
    actual_reps = data.get("actual_reps") or 0
    validate_non_negative(actual_load, "actual_load")
    validate_non_negative(actual_reps, "actual_reps")
    rpe = data.get("rpe")
    if rpe is not None:
        validate_rpe(float(rpe))

    return SetLog(
        status=status,
        actual_load=float(actual_load),
        actual_reps=int(actual_reps),
        target_load=float(data["target_load"]) if data.get("target_load") is not None else None,
        target_reps=int(data["target_reps"]) if data.get("target_reps") is not None else None,
        rpe=float(rpe) if rpe is not None else None,
    )


def session_to_dict(session: Session) -> dict[str, Any]:
    """Convert Session to JSON-compatible dict (timestamps as ISO strings)."""
    d: dict[str, Any] = {
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
        "exercises": [
            {
                "exercise_id": ex.exercise_id,
                "sets": [set_log_to_dict(s) for s in ex.sets],
            }
            for ex in session.exercises
        ],
    }
    if session.started_at is not None:
        d["started_at"] = session.started_at.isoformat()
    if session.name:
        d["name"] = session.name
    return d


def dict_to_session(data: dict[str, Any]) -> Session:
    """
    Convert dict to Session.

    Raises:
        ValidationError: If data is invalid
    """
    raw_exercises = data.get("exercises")
    if not isinstance(raw_exercises, list):
        raise ValidationError("Session must contain an 'exercises' list")

    exercises: list[SessionExercise] = []
    for raw in raw_exercises:
        exercise_id = raw.get("exercise_id") if isinstance(raw, dict) else None
        if not isinstance(exercise_id, str) or not exercise_id.strip():
            raise ValidationError(f"Invalid exercise entry: {raw!r}")
        raw_sets = raw.get("sets", [])
        if not isinstance(raw_sets, list) or not all(isinstance(s, dict) for s in raw_sets):
            raise ValidationError(f"Invalid sets for {exercise_id!r}: {raw_sets!r}")
        exercises.append(
            SessionExercise(
                exercise_id=exercise_id,
                sets=[dict_to_set_log(s) for s in raw_sets],
            )
        )

    completed_at = data.get("completed_at")
    started_at = data.get("started_at")
    return Session(
        exercises=exercises,
        completed_at=validate_timestamp(completed_at, "completed_at") if completed_at else None,
        started_at=validate_timestamp(started_at, "started_at") if started_at else None,
        name=data.get("name"),
    )


def session_to_json_line(session: Session) -> str:
    """Serialize a session to a single JSON line (no trailing newline)."""
    return json.dumps(session_to_dict(session), separators=(",", ":"))


def json_line_to_session(line: str) -> Session:
    """
    Deserialize a JSON line to a Session.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Session record must be a JSON object")
    return dict_to_session(data)


_SET_PATTERN = re.compile(
    r"^(\d+(?:\.\d+)?)\s*[xX×]\s*(\d+)"      # load x reps
    r"(?:\s*[xX×]\s*(\d+))?"                  # optional x sets
    r"(?:\s*@\s*(\d+(?:\.\d+)?))?$"           # optional @rpe
)
_SKIP_WORDS = ("skip", "skipped", "-")


def parse_sets_string(sets_str: str) -> list[SetLog]:
    """
    Parse a sets string into SetLogs, in performed order.

    Comma-separated entries:
        LOADxREPS          e.g. "100x5"       one completed set
        LOADxREPS@RPE      e.g. "100x5@8.5"   with RPE
        LOADxREPSxSETS     e.g. "80x10x3"     three identical sets
        LOADxREPSxSETS@RPE e.g. "80x10x3@7"
        skip               a skipped set ("skipped" and "-" also work)

    Args:
        sets_str: Sets string to parse

    Returns:
        List of SetLog

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[SetLog] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue
        if part.lower() in _SKIP_WORDS:
            sets.append(SetLog(status="skipped"))
            continue

        m = _SET_PATTERN.match(part)
        if not m:
            raise ValidationError(
                f"Invalid set format: '{part}'.\n"
                "Use: LOADxREPS (e.g. 100x5), LOADxREPS@RPE (e.g. 100x5@8),\n"
                "     LOADxREPSxSETS (e.g. 80x10x3) or 'skip'."
            )

        load = float(m.group(1))
        reps = int(m.group(2))
        count = int(m.group(3)) if m.group(3) else 1
        rpe = validate_rpe(float(m.group(4))) if m.group(4) else None
        if count < 1:
            raise ValidationError(f"Set count must be at least 1 in '{part}'")

        for _ in range(count):
            sets.append(SetLog(status="completed", actual_load=load, actual_reps=reps, rpe=rpe))

    if not sets:
        raise ValidationError("No valid sets found in sets string")

    return sets
