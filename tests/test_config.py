"""Tests for game settings and validation."""

import json

import pytest

from torus_snake.config import GameSettings, InvalidSettingsError


class TestDefaults:
    def test_defaults(self):
        settings = GameSettings()
        assert settings.rows_count == 21
        assert settings.cols_count == 21
        assert settings.speed == 4
        assert settings.win_food_count == 5
        assert settings.validate().is_valid

    def test_tick_interval(self):
        settings = GameSettings(speed=4)
        assert settings.tick_interval == pytest.approx(0.25)
        assert settings.tick_interval_ms == pytest.approx(250.0)


class TestValidate:
    def test_boundaries_are_valid(self):
        assert GameSettings(10, 30, 1, 50).validate().is_valid
        assert GameSettings(30, 10, 10, 5).validate().is_valid

    def test_collects_every_violation(self):
        result = GameSettings(
            rows_count=9, cols_count=31, speed=0, win_food_count=51,
        ).validate()
        assert not result.is_valid
        assert len(result.errors) == 4
        joined = " ".join(result.errors)
        for name in ("rows_count", "cols_count", "speed", "win_food_count"):
            assert name in joined

    def test_single_violation(self):
        result = GameSettings(speed=11).validate()
        assert not result.is_valid
        assert result.errors == [
            "speed must be in the range [1, 10], got 11."
        ]

    def test_non_integer_values(self):
        result = GameSettings(speed="fast", rows_count=True).validate()
        assert len(result.errors) == 2
        assert all("integer" in e for e in result.errors)

    def test_validate_has_no_side_effects(self):
        settings = GameSettings(rows_count=5)
        first = settings.validate()
        second = settings.validate()
        assert first == second
        assert settings.rows_count == 5


class TestRequireValid:
    def test_returns_self_when_valid(self):
        settings = GameSettings()
        assert settings.require_valid() is settings

    def test_raises_with_all_errors(self):
        with pytest.raises(InvalidSettingsError) as excinfo:
            GameSettings(rows_count=1, speed=99).require_valid()
        assert len(excinfo.value.errors) == 2
        assert isinstance(excinfo.value, ValueError)


class TestPersistence:
    def test_save_and_load(self, tmp_path):
        settings = GameSettings(rows_count=12, cols_count=14, speed=7)
        path = tmp_path / "nested" / "settings.json"
        settings.save(path)
        assert path.exists()
        assert GameSettings.load(path) == settings

    def test_load_partial_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"speed": 2}))
        loaded = GameSettings.load(path)
        assert loaded.speed == 2
        assert loaded.rows_count == 21

    def test_load_unknown_key(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"speed": 2, "walls": True}))
        with pytest.raises(InvalidSettingsError, match="walls"):
            GameSettings.load(path)

    def test_load_non_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(InvalidSettingsError):
            GameSettings.load(path)

    def test_loaded_values_still_need_validation(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"rows_count": 100}))
        loaded = GameSettings.load(path)
        assert not loaded.validate().is_valid

    def test_to_dict_serializable(self):
        assert json.loads(json.dumps(GameSettings().to_dict())) == {
            "rows_count": 21,
            "cols_count": 21,
            "speed": 4,
            "win_food_count": 5,
        }
