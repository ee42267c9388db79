"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from euromatch.config.settings import Environment, LogLevel, Settings, get_settings
from euromatch.models.common import Gender, Labour


class TestSettingsDefaults:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.AGE_TO_BECOME_RESPONSIBLE == 18
        assert settings.AGE_TOP_CODE == 80
        assert settings.PERCENTAGE_OF_MEDIAN_DONOR_INCOME == pytest.approx(0.1)
        assert settings.MAX_DONOR_RATIO == pytest.approx(1.0)
        assert settings.LOG_LEVEL == LogLevel.INFO
        assert settings.ENVIRONMENT == Environment.DEV

    def test_allowed_labour_defaults_to_every_choice(self, settings: Settings) -> None:
        assert settings.allowed_labour == {
            Gender.MALE: list(Labour),
            Gender.FEMALE: list(Labour),
        }


class TestSettingsFromEnvironment:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGE_TOP_CODE", "75")
        monkeypatch.setenv("MALE_LABOUR_CHOICES", '["ZERO", "FORTY"]')
        monkeypatch.setenv("ENVIRONMENT", "prod")
        s = Settings(_env_file=None)
        assert s.AGE_TOP_CODE == 75
        assert s.allowed_labour[Gender.MALE] == [Labour.ZERO, Labour.FORTY]
        assert s.ENVIRONMENT == Environment.PROD

    def test_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("AGE_TO_BECOME_RESPONSIBLE=16\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert get_settings().AGE_TO_BECOME_RESPONSIBLE == 16

    @pytest.mark.parametrize("value", ["0", "19"])
    def test_age_to_become_responsible_bounds(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("AGE_TO_BECOME_RESPONSIBLE", value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_labour_choices_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, FEMALE_LABOUR_CHOICES=[])

    def test_unknown_labour_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MALE_LABOUR_CHOICES=["FIFTY"])
