"""
Tests for session serialization, sets-string parsing and the JSONL store.
"""

import json
from datetime import datetime

import pytest

from liftcoach.core.models import Session, SessionExercise, SetLog
from liftcoach.io.history_store import HistoryStore
from liftcoach.io.serializers import (
    ValidationError,
    dict_to_session,
    dict_to_set_log,
    json_line_to_session,
    parse_sets_string,
    session_to_dict,
    session_to_json_line,
    validate_rpe,
    validate_timestamp,
)


def _session(day: int | None, load: float = 100.0, name: str | None = None) -> Session:
    return Session(
        exercises=[
            SessionExercise(
                "bench-press",
                [
                    SetLog("completed", actual_load=load, actual_reps=5, rpe=8.5),
                    SetLog("skipped"),
                ],
            )
        ],
        completed_at=datetime(2026, 10, day, 18, 30) if day is not None else None,
        name=name,
    )


class TestParseSetsString:
    def test_single_sets(self):
        sets = parse_sets_string("100x5, 100x5@9, skip")
        assert [s.status for s in sets] == ["completed", "completed", "skipped"]
        assert sets[0].actual_load == 100.0
        assert sets[0].actual_reps == 5
        assert sets[0].rpe is None
        assert sets[1].rpe == 9.0

    def test_repeated_sets(self):
        sets = parse_sets_string("80x10x3@7.5")
        assert len(sets) == 3
        assert all(s.actual_load == 80 and s.actual_reps == 10 and s.rpe == 7.5 for s in sets)

    def test_decimal_load(self):
        assert parse_sets_string("62.5x8")[0].actual_load == 62.5

    def test_skip_aliases(self):
        assert [s.status for s in parse_sets_string("-,skipped")] == ["skipped", "skipped"]

    @pytest.mark.parametrize("bad", ["", "   ", "abc", "100", "100x", "x5", "100x5@"])
    def test_invalid_format(self, bad):
        with pytest.raises(ValidationError):
            parse_sets_string(bad)

    @pytest.mark.parametrize("bad", ["100x5@11", "100x5@8.3", "100x5@0"])
    def test_invalid_rpe(self, bad):
        with pytest.raises(ValidationError):
            parse_sets_string(bad)

    def test_zero_set_count(self):
        with pytest.raises(ValidationError):
            parse_sets_string("100x5x0")


class TestValidators:
    def test_timestamp_date_only(self):
        assert validate_timestamp("2026-10-14") == datetime(2026, 10, 14)

    def test_timestamp_with_time(self):
        assert validate_timestamp("2026-10-14T18:30") == datetime(2026, 10, 14, 18, 30)

    def test_timestamp_rejects_offset(self):
        with pytest.raises(ValidationError):
            validate_timestamp("2026-10-14T18:30:00+02:00")

    def test_timestamp_rejects_garbage(self):
        with pytest.raises(ValidationError, match="completed_at"):
            validate_timestamp("yesterday", "completed_at")

    def test_rpe_half_points(self):
        assert validate_rpe(9.5) == 9.5
        with pytest.raises(ValidationError):
            validate_rpe(9.25)


class TestSessionSerialization:
    def test_round_trip(self):
        session = _session(14, name="Push A")
        assert dict_to_session(session_to_dict(session)) == session
        assert json_line_to_session(session_to_json_line(session)) == session

    def test_optional_fields_omitted(self):
        d = session_to_dict(_session(14))
        assert "name" not in d
        assert "started_at" not in d
        assert "target_load" not in d["exercises"][0]["sets"][0]

    def test_in_progress_session(self):
        d = session_to_dict(_session(None))
        assert d["completed_at"] is None
        assert dict_to_session(d).completed_at is None

    def test_json_line_is_single_line(self):
        assert "\n" not in session_to_json_line(_session(14))

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            dict_to_set_log({"status": "done", "actual_load": 100, "actual_reps": 5})

    def test_negative_load(self):
        with pytest.raises(ValidationError):
            dict_to_set_log({"status": "completed", "actual_load": -5, "actual_reps": 5})

    @pytest.mark.parametrize("fields", [
        {"actual_reps": "5"},
        {"actual_load": "100"},
        {"rpe": "x"},
        {"rpe": True},
        {"target_load": [100]},
    ])
    def test_mistyped_numbers(self, fields):
        data = {"status": "completed", "actual_load": 100, "actual_reps": 5, **fields}
        with pytest.raises(ValidationError):
            dict_to_set_log(data)

    def test_null_load_means_zero(self):
        set_log = dict_to_set_log({"status": "skipped", "actual_load": None, "actual_reps": None})
        assert set_log.actual_load == 0.0
        assert set_log.actual_reps == 0

    def test_sets_must_be_list_of_objects(self):
        for sets in ("100x5", [1, 2]):
            with pytest.raises(ValidationError):
                dict_to_session({"exercises": [{"exercise_id": "squat", "sets": sets}]})

    def test_missing_exercises(self):
        with pytest.raises(ValidationError):
            dict_to_session({"completed_at": "2026-10-14T18:30:00"})

    def test_bad_json_line(self):
        with pytest.raises(ValidationError):
            json_line_to_session("{not json")
        with pytest.raises(ValidationError):
            json_line_to_session("[1, 2]")


class TestHistoryStore:
    def test_init_creates_file(self, tmp_path):
        store = HistoryStore(tmp_path / "nested" / "history.jsonl")
        assert not store.exists()
        store.init()
        assert store.exists()
        assert store.load_sessions() == []

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HistoryStore(tmp_path / "history.jsonl").load_sessions()

    def test_sessions_sorted_with_in_progress_last(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_session(None, load=60))
        store.append_session(_session(16, load=110))
        store.append_session(_session(12, load=100))

        sessions = store.load_sessions()
        assert [s.completed_at.day if s.completed_at else None for s in sessions] == [12, 16, None]

    def test_latest_session_skips_in_progress(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_session(12))
        store.append_session(_session(None))
        latest = store.get_latest_session()
        assert latest is not None
        assert latest.completed_at == datetime(2026, 10, 12, 18, 30)

    def test_latest_session_without_file(self, tmp_path):
        assert HistoryStore(tmp_path / "history.jsonl").get_latest_session() is None

    def test_delete_session_at(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_session(12))
        store.append_session(_session(14))
        store.delete_session_at(0)
        sessions = store.load_sessions()
        assert len(sessions) == 1
        assert sessions[0].completed_at.day == 14

        with pytest.raises(IndexError):
            store.delete_session_at(5)

    def test_corrupt_line_reports_line_number(self, tmp_path):
        path = tmp_path / "history.jsonl"
        path.write_text(session_to_json_line(_session(12)) + "\n{oops\n")
        with pytest.raises(ValidationError, match="line 2"):
            HistoryStore(path).load_sessions()

    def test_mistyped_field_reports_line_number(self, tmp_path):
        record = session_to_dict(_session(12))
        record["exercises"][0]["sets"][0]["actual_reps"] = "5"
        path = tmp_path / "history.jsonl"
        path.write_text(json.dumps(record) + "\n")
        with pytest.raises(ValidationError, match="line 1"):
            HistoryStore(path).load_sessions()

    def test_blank_lines_ignored(self, tmp_path):
        path = tmp_path / "history.jsonl"
        path.write_text("\n" + session_to_json_line(_session(12)) + "\n\n")
        assert len(HistoryStore(path).load_sessions()) == 1

    def test_file_is_jsonl(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_session(12))
        store.append_session(_session(13))
        lines = store.history_path.read_text().splitlines()
        assert len(lines) == 2
        assert all(isinstance(json.loads(line), dict) for line in lines)

    def test_clear_history(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_session(12))
        store.clear_history()
        assert store.load_sessions() == []
