"""
JSONL-based history storage for workout sessions.

Handles reading, writing, and managing the training history file.
"""

import json
from datetime import datetime
from pathlib import Path

from ..core.models import Session
from .serializers import ValidationError, dict_to_session, session_to_json_line


def _sort_key(session: Session) -> tuple[int, datetime]:
    # In-progress sessions (no completed_at) sort after finished ones
    if session.completed_at is None:
        return (1, datetime.max)
    return (0, session.completed_at)


class HistoryStore:
    """
    Manages workout sessions stored in JSONL format.

    The history file contains one JSON session object per line.  Sessions
    are kept sorted by completion time; in-progress sessions go last.
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL history file
        """
        self.history_path = Path(history_path)

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Initialize empty history file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.history_path.exists():
            self.history_path.touch()

    def load_sessions(self) -> list[Session]:
        """
        Load all sessions from the history file.

        Returns:
            List of Session, sorted by completion time

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        sessions: list[Session] = []

        with open(self.history_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    sessions.append(dict_to_session(json.loads(line)))
                except (
                    json.JSONDecodeError, ValidationError, AttributeError, TypeError, ValueError
                ) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        sessions.sort(key=_sort_key)
        return sessions

    def append_session(self, session: Session) -> None:
        """
        Add a session to the history file, keeping chronological order.

        Args:
            session: Session to append
        """
        sessions = self.load_sessions()
        sessions.append(session)
        sessions.sort(key=_sort_key)
        self._write_sessions(sessions)

    def _write_sessions(self, sessions: list[Session]) -> None:
        with open(self.history_path, "w", encoding="utf-8") as f:
            for session in sessions:
                f.write(session_to_json_line(session) + "\n")

    def get_latest_session(self) -> Session | None:
        """
        Get the most recently completed session.

        Returns:
            Latest completed Session or None if there is none
        """
        try:
            completed = [s for s in self.load_sessions() if s.is_completed]
        except FileNotFoundError:
            return None
        return completed[-1] if completed else None

    def delete_session_at(self, index: int) -> None:
        """
        Delete the session at the given 0-based index in sorted history.

        Raises:
            IndexError: If index is out of range
        """
        sessions = self.load_sessions()
        if index < 0 or index >= len(sessions):
            raise IndexError(f"Session index {index} out of range (0–{len(sessions) - 1})")
        del sessions[index]
        self._write_sessions(sessions)

    def clear_history(self) -> None:
        """
        Clear all history (dangerous - use with caution).
        """
        if self.history_path.exists():
            self.history_path.write_text("")


def get_default_history_path() -> Path:
    """Default history file: ~/.liftcoach/history.jsonl."""
    return Path.home() / ".liftcoach" / "history.jsonl"
