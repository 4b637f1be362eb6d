"""Tests for settings loading and fallback to defaults."""
import pytest
from PySide6.QtCore import QSettings

from streetgallery.config import (
    PANEL_ANIMATION_MS, PANEL_EXPANDED_HEIGHT, REGION_RADIUS_M, MapSettings, load_settings,
)


@pytest.fixture
def ini_settings(tmp_path, qapp) -> QSettings:
    return QSettings(str(tmp_path / "streetgallery.ini"), QSettings.Format.IniFormat)


class TestLoadSettings:
    def test_missing_keys_use_defaults(self, ini_settings):
        assert load_settings(ini_settings) == MapSettings()

    def test_overrides_are_read(self, ini_settings):
        ini_settings.setValue("map/region_radius", 500)
        ini_settings.setValue("map/panel_height", 240)
        ini_settings.setValue("map/animation_ms", 150)

        resolved = load_settings(ini_settings)

        assert resolved.region_radius == 500.0
        assert resolved.panel_height == 240
        assert resolved.animation_ms == 150

    def test_malformed_value_falls_back(self, ini_settings, caplog):
        ini_settings.setValue("map/region_radius", "far away")

        resolved = load_settings(ini_settings)

        assert resolved.region_radius == REGION_RADIUS_M
        assert "map/region_radius" in caplog.text

    def test_non_positive_value_falls_back(self, ini_settings):
        ini_settings.setValue("map/panel_height", -10)
        ini_settings.setValue("map/animation_ms", 0)

        resolved = load_settings(ini_settings)

        assert resolved.panel_height == PANEL_EXPANDED_HEIGHT
        assert resolved.animation_ms == PANEL_ANIMATION_MS
