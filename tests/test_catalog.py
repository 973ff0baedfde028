"""
Tests for the exercise catalog, its YAML loader and the suggestion ranker.
"""

import textwrap

import pytest

from liftcoach.core.exercises import EXERCISE_CATALOG, Exercise, ExerciseCatalog
from liftcoach.core.exercises.loader import (
    exercise_from_dict,
    exercises_from_entries,
    get_bundled_catalog_path,
    load_exercises_from_yaml,
    merge_entries,
)
from liftcoach.core.models import AISuggestionsConfig, SubRegionWeight
from liftcoach.core.suggestions import (
    rank_exercises,
    score_exercise,
    suggest_exercises,
)


def _entry(**overrides) -> dict:
    entry = {
        "id": "test-press",
        "name": "Test Press",
        "movement_category": "horizontal-push",
        "primary_muscles": ["chest"],
        "secondary_muscles": ["triceps"],
        "equipment": ["barbell"],
        "is_unilateral": False,
        "track_e1rm": True,
        "sub_region_weights": {"chest-mid": 1.0},
        "substitutions": [],
    }
    entry.update(overrides)
    return entry


def _ex(exercise_id, primary, secondary=(), equipment=("machine",), compound=False) -> Exercise:
    return Exercise(
        exercise_id=exercise_id,
        name=exercise_id.replace("-", " ").title(),
        movement_category="isolation",
        primary_muscles=tuple(primary),
        secondary_muscles=tuple(secondary),
        sub_region_weights=(),
        equipment=tuple(equipment),
        is_unilateral=False,
        track_e1rm=compound,
    )


# ---------------------------------------------------------------------------
# Bundled catalog
# ---------------------------------------------------------------------------

class TestBundledCatalog:
    def test_size(self):
        assert len(EXERCISE_CATALOG) == 62

    def test_definition_order(self):
        assert EXERCISE_CATALOG.exercises[0].exercise_id == "bench-press"
        assert EXERCISE_CATALOG.exercises[-1].exercise_id == "ab-wheel"

    def test_ids_unique(self):
        ids = [ex.exercise_id for ex in EXERCISE_CATALOG]
        assert len(ids) == len(set(ids))

    def test_every_exercise_has_primary_muscle(self):
        assert all(ex.primary_muscles for ex in EXERCISE_CATALOG)

    def test_bench_press_entry(self):
        bench = EXERCISE_CATALOG.get_by_id("bench-press")
        assert bench is not None
        assert bench.name == "Bench Press"
        assert bench.primary_muscles == ("chest",)
        assert bench.secondary_muscles == ("triceps", "shoulders")
        assert bench.equipment == ("barbell",)
        assert bench.track_e1rm
        assert bench.sub_region_weights == (
            SubRegionWeight("chest-mid", 0.7),
            SubRegionWeight("chest-lower", 0.3),
        )

    def test_form_notes_and_limitations_loaded(self):
        assert EXERCISE_CATALOG.get_by_id("incline-bench-press").form_notes
        assert "shoulder-friendly" in EXERCISE_CATALOG.get_by_id("upright-row").limitations


class TestCatalogLookups:
    def test_unknown_id(self):
        assert EXERCISE_CATALOG.get_by_id("does-not-exist") is None
        assert "does-not-exist" not in EXERCISE_CATALOG
        assert "squat" in EXERCISE_CATALOG

    def test_get_by_name_ignores_case(self):
        assert EXERCISE_CATALOG.get_by_name("bench press").exercise_id == "bench-press"
        assert EXERCISE_CATALOG.get_by_name("Bench") is None

    def test_empty_search_returns_everything(self):
        assert len(EXERCISE_CATALOG.search("")) == 62

    def test_search_preserves_catalog_order(self):
        found = EXERCISE_CATALOG.search("PRESS")
        assert [ex.exercise_id for ex in found] == [
            ex.exercise_id for ex in EXERCISE_CATALOG if "press" in ex.name.lower()
        ]
        assert len(found) == 11
        assert found[0].exercise_id == "bench-press"

    def test_by_muscle_group_includes_secondary(self):
        ids = [ex.exercise_id for ex in EXERCISE_CATALOG.by_muscle_group("chest")]
        assert "bench-press" in ids
        assert "close-grip-bench" in ids  # chest is secondary

    def test_by_muscle_group_unused_muscle(self):
        assert EXERCISE_CATALOG.by_muscle_group("adductors") == []

    def test_by_equipment(self):
        assert [ex.exercise_id for ex in EXERCISE_CATALOG.by_equipment("landmine")] == ["t-bar-row"]

    def test_substitutions_drop_unknown_ids(self):
        # chest-fly lists cable-fly and pec-deck; pec-deck is not in the catalog
        subs = EXERCISE_CATALOG.substitutions_for("chest-fly")
        assert [ex.exercise_id for ex in subs] == ["cable-fly"]

    def test_substitutions_resolved_in_listed_order(self):
        subs = EXERCISE_CATALOG.substitutions_for("bench-press")
        assert [ex.exercise_id for ex in subs] == ["dumbbell-press", "incline-bench-press"]

    def test_substitutions_for_unknown_exercise(self):
        assert EXERCISE_CATALOG.substitutions_for("nope") == []

    def test_all_muscle_groups(self):
        groups = EXERCISE_CATALOG.all_muscle_groups()
        assert groups[:3] == ["chest", "triceps", "shoulders"]
        assert len(groups) == len(set(groups))
        assert set(groups) == {
            "chest", "triceps", "shoulders", "core", "back", "glutes",
            "hamstrings", "quads", "biceps", "forearms", "calves", "obliques",
        }

    def test_exercise_names_sorted(self):
        names = EXERCISE_CATALOG.exercise_names()
        assert names == sorted(names)
        assert len(names) == 62

    def test_sub_region_map(self):
        mapping = EXERCISE_CATALOG.sub_region_map()
        assert set(mapping) == {ex.exercise_id for ex in EXERCISE_CATALOG}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class TestExerciseFromDict:
    def test_valid_entry(self):
        ex = exercise_from_dict(_entry())
        assert ex.exercise_id == "test-press"
        assert ex.sub_region_weights == (SubRegionWeight("chest-mid", 1.0),)

    def test_missing_field(self):
        entry = _entry()
        del entry["track_e1rm"]
        with pytest.raises(ValueError, match="missing"):
            exercise_from_dict(entry)

    def test_unknown_muscle(self):
        with pytest.raises(ValueError, match="primary muscle"):
            exercise_from_dict(_entry(primary_muscles=["pecs"]))

    def test_unknown_equipment(self):
        with pytest.raises(ValueError, match="equipment"):
            exercise_from_dict(_entry(equipment=["sandbag"]))

    def test_unknown_sub_region(self):
        with pytest.raises(ValueError):
            exercise_from_dict(_entry(sub_region_weights={"chest-inner": 1.0}))

    def test_empty_primary_muscles(self):
        with pytest.raises(ValueError):
            exercise_from_dict(_entry(primary_muscles=[]))


class TestLoader:
    def test_bundled_file_exists(self):
        assert get_bundled_catalog_path().exists()

    def test_invalid_entries_skipped_with_warning(self):
        entries = [_entry(), _entry(id="broken", equipment=["sandbag"])]
        with pytest.warns(UserWarning, match="broken"):
            exercises = exercises_from_entries(entries)
        assert [ex.exercise_id for ex in exercises] == ["test-press"]

    def test_duplicate_ids_keep_first(self):
        entries = [_entry(), _entry(name="Other Name")]
        with pytest.warns(UserWarning, match="duplicate"):
            exercises = exercises_from_entries(entries)
        assert len(exercises) == 1
        assert exercises[0].name == "Test Press"

    def test_merge_overrides_and_appends(self):
        bundled = [_entry(), _entry(id="second", name="Second")]
        user = [
            {"id": "test-press", "name": "Renamed Press"},
            _entry(id="extra", name="Extra"),
        ]
        merged = merge_entries(bundled, user)
        assert [e["id"] for e in merged] == ["test-press", "second", "extra"]
        assert merged[0]["name"] == "Renamed Press"
        assert merged[0]["equipment"] == ["barbell"]

    def test_user_file_overlay(self, tmp_path):
        user_file = tmp_path / "exercises.yaml"
        user_file.write_text(textwrap.dedent("""\
            exercises:
              - id: bench-press
                name: Flat Barbell Bench
              - id: landmine-press
                name: Landmine Press
                movement_category: vertical-push
                primary_muscles: [shoulders]
                secondary_muscles: [chest]
                equipment: [barbell, landmine]
                is_unilateral: true
                track_e1rm: false
                sub_region_weights:
                  shoulders-anterior: 0.8
                  chest-upper: 0.2
        """))

        exercises = load_exercises_from_yaml(user_path=user_file)
        catalog = ExerciseCatalog(exercises)

        assert len(catalog) == 63
        assert catalog.get_by_id("bench-press").name == "Flat Barbell Bench"
        assert catalog.get_by_id("bench-press").track_e1rm
        assert catalog.exercises[-1].exercise_id == "landmine-press"

    def test_unreadable_yaml_warns(self, tmp_path):
        bad = tmp_path / "exercises.yaml"
        bad.write_text("exercises: [unclosed\n")
        missing_user = tmp_path / "none.yaml"
        with pytest.warns(UserWarning):
            assert load_exercises_from_yaml(bundled_path=bad, user_path=missing_user) == []

    @pytest.mark.parametrize("overrides", [
        {"sub_region_weights": {"chest-upper": None}},
        {"sub_region_weights": {"chest-upper": "heavy"}},
        {"primary_muscles": 5},
        {"primary_muscles": None},
        {"equipment": "barbell"},
        {"secondary_muscles": 3},
    ])
    def test_mistyped_fields_rejected(self, overrides):
        with pytest.raises(ValueError):
            exercise_from_dict(_entry(**overrides))

    def test_mistyped_user_entry_skipped_not_fatal(self, tmp_path):
        user_file = tmp_path / "exercises.yaml"
        user_file.write_text(textwrap.dedent("""\
            exercises:
              - id: bench-press
                sub_region_weights:
                  chest-upper: null
              - id: squat
                primary_muscles: 5
        """))

        with pytest.warns(UserWarning, match="bench-press"):
            exercises = load_exercises_from_yaml(user_path=user_file)

        ids = {ex.exercise_id for ex in exercises}
        assert len(exercises) == 60
        assert "bench-press" not in ids
        assert "squat" not in ids
        assert "deadlift" in ids

    def test_override_replaces_sub_region_weights(self, tmp_path):
        user_file = tmp_path / "exercises.yaml"
        user_file.write_text(textwrap.dedent("""\
            exercises:
              - id: bench-press
                sub_region_weights:
                  chest-mid: 1.0
        """))

        catalog = ExerciseCatalog(load_exercises_from_yaml(user_path=user_file))

        assert catalog.get_by_id("bench-press").sub_region_weights == (
            SubRegionWeight("chest-mid", 1.0),
        )
        assert catalog.get_by_id("bench-press").name == "Bench Press"

    def test_merge_replaces_nested_mapping(self):
        bundled = [_entry(sub_region_weights={"chest-mid": 0.7, "chest-lower": 0.3})]
        user = [{"id": "test-press", "sub_region_weights": {"chest-upper": 1.0}}]
        assert merge_entries(bundled, user)[0]["sub_region_weights"] == {"chest-upper": 1.0}


# ---------------------------------------------------------------------------
# Suggestion ranking
# ---------------------------------------------------------------------------

class TestScoreExercise:
    def test_primary_secondary_and_compound(self):
        bench = EXERCISE_CATALOG.get_by_id("bench-press")
        # chest primary 10 + triceps secondary 5 + compound 8
        assert score_exercise(bench, AISuggestionsConfig(["chest", "triceps"])) == 23

    def test_every_matching_muscle_counts(self):
        dips = EXERCISE_CATALOG.get_by_id("dips")
        # chest + triceps primary 20, shoulders secondary 5, compound 8
        assert score_exercise(dips, AISuggestionsConfig(["chest", "triceps", "shoulders"])) == 33

    def test_user_history_bonus(self):
        fly = EXERCISE_CATALOG.get_by_id("cable-fly")
        config = AISuggestionsConfig(["chest"], user_history=["cable-fly"])
        assert score_exercise(fly, config) == 25

    def test_style_bonuses(self):
        bench = EXERCISE_CATALOG.get_by_id("bench-press")
        fly = EXERCISE_CATALOG.get_by_id("cable-fly")
        assert score_exercise(bench, AISuggestionsConfig(["chest"], training_style="strength")) == 23
        assert score_exercise(fly, AISuggestionsConfig(["chest"], training_style="hypertrophy")) == 13
        assert score_exercise(fly, AISuggestionsConfig(["chest"], training_style="endurance")) == 10

    def test_compound_bonus_applies_without_muscle_match(self):
        squat = EXERCISE_CATALOG.get_by_id("squat")
        assert score_exercise(squat, AISuggestionsConfig(["chest"])) == 8

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            AISuggestionsConfig(["pecs"])
        with pytest.raises(ValueError):
            AISuggestionsConfig(["chest"], training_style="powerlifting")  # type: ignore[arg-type]


class TestSuggestExercises:
    def test_empty_request(self):
        result = suggest_exercises(AISuggestionsConfig([]))
        assert result.count == 0
        assert not result.has_compound_lifts

    def test_chest_ranking(self):
        result = suggest_exercises(AISuggestionsConfig(["chest"]))
        ids = [ex.exercise_id for ex in result.suggestions]
        assert ids[:6] == [
            "bench-press", "incline-bench-press", "decline-bench-press",
            "dumbbell-press", "incline-dumbbell-press", "dips",
        ]
        assert result.count == 12
        assert result.has_compound_lifts

    def test_never_more_than_twelve(self):
        result = suggest_exercises(AISuggestionsConfig(["chest", "back", "quads", "core"]))
        assert result.count == 12

    def test_compounds_front_loaded(self):
        config = AISuggestionsConfig(["chest"], user_history=["cable-fly"])
        ids = [ex.exercise_id for ex in suggest_exercises(config).suggestions]
        # cable-fly ranks first on score but the two best compounds go ahead of it
        assert ids[:4] == ["bench-press", "incline-bench-press", "cable-fly", "decline-bench-press"]

    def test_only_two_compounds_moved(self):
        catalog = ExerciseCatalog([
            _ex("iso-a", ["chest"], secondary=["triceps"]),  # 15
            _ex("comp-a", ["back"], compound=True),  # 8
            _ex("iso-b", ["chest"]),  # 10
            _ex("comp-b", ["back"], compound=True),  # 8
            _ex("comp-c", ["back"], compound=True),  # 8
        ])
        config = AISuggestionsConfig(["chest", "triceps"])
        ids = [ex.exercise_id for ex in suggest_exercises(config, catalog).suggestions]
        assert ids == ["comp-a", "comp-b", "iso-a", "iso-b", "comp-c"]

    def test_irrelevant_exercises_dropped(self):
        catalog = ExerciseCatalog([_ex("calf", ["calves"]), _ex("fly", ["chest"])])
        result = suggest_exercises(AISuggestionsConfig(["chest"]), catalog)
        assert [ex.exercise_id for ex in result.suggestions] == ["fly"]

    def test_all_suggestions_score_positive(self):
        config = AISuggestionsConfig(["biceps"], training_style="hypertrophy")
        for ex in suggest_exercises(config).suggestions:
            assert score_exercise(ex, config) > 0

    def test_ties_keep_catalog_order(self):
        ranked = rank_exercises(AISuggestionsConfig(["chest"]))
        top = [ex.exercise_id for ex, score in ranked if score == 18]
        assert top == [
            "bench-press", "incline-bench-press", "decline-bench-press",
            "dumbbell-press", "incline-dumbbell-press", "dips",
        ]

    def test_deterministic(self):
        config = AISuggestionsConfig(["back", "biceps"], training_style="strength")
        assert suggest_exercises(config) == suggest_exercises(config)
