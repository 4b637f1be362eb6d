"""
Configuration & Screen Constants
================================
Central registry for the map screen's constants and user-tunable settings.

The defaults below reproduce the original screen. A few of them can be
overridden through ``QSettings`` (INI format, see
``streetgallery.app.application.create_app``):

    [map]
    region_radius=1000
    panel_height=300
    animation_ms=300

Exports:
    MapSettings: Resolved settings for one screen instance.
    load_settings: Read ``MapSettings`` from QSettings with fallbacks.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Optional

from PySide6.QtCore import QSettings

from streetgallery.model.geo import Coordinate

logger = logging.getLogger(__name__)

# Region radius (m). Dropped pins are framed with 1x, the user with 2x.
REGION_RADIUS_M: float = 1000.0

PANEL_EXPANDED_HEIGHT: int = 300
PANEL_COLLAPSED_HEIGHT: int = 0
PANEL_ANIMATION_MS: int = 300

# Shown until the first location fix or dropped pin (Malang, East Java).
DEFAULT_CENTER: Coordinate = Coordinate(latitude=-7.9666, longitude=112.6326)
DEFAULT_REGION_METERS: float = 20_000.0

PIN_IDENTIFIER: str = "drop_pin"
PHOTO_CELL_IDENTIFIER: str = "photo_cell"

GRID_SECTION_COUNT: int = 1
GRID_ITEM_COUNT: int = 4
GRID_CELL_SIZE: int = 96

# Colours
ACCENT_COLOR: str = "#FF3E00"
SPINNER_COLOR: str = "#41464D"
LABEL_COLOR: str = "#0F2E3F"
MAP_BACKGROUND: str = "#EDEBE6"

PROGRESS_TEXT: str = "Fetching Image"
PROGRESS_FONT: tuple[str, int] = ("Avenir Next", 18)

# Overlay placement inside the photo grid (px)
SPINNER_SIZE: int = 37
SPINNER_CENTER_Y: int = 150
LABEL_TOP: int = 175
LABEL_WIDTH: int = 200
LABEL_HEIGHT: int = 40

SWIPE_MIN_DISTANCE: int = 50


@dataclass(frozen=True)
class MapSettings:
    region_radius: float = REGION_RADIUS_M
    panel_height: int = PANEL_EXPANDED_HEIGHT
    animation_ms: int = PANEL_ANIMATION_MS


def _read_positive(settings: QSettings, key: str, default: Any, cast: type) -> Any:
    raw = settings.value(key, default)
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value {raw!r} for '{key}', using default {default}.")
        return default
    if value <= 0:
        logger.warning(f"Non-positive value {value!r} for '{key}', using default {default}.")
        return default
    return value


def load_settings(settings: Optional[QSettings] = None) -> MapSettings:
    """
    Resolve the map settings, falling back to the defaults for missing or
    malformed entries.

    Args:
        settings: Settings store to read. Uses the application default when None.
    """
    settings = settings if settings is not None else QSettings()
    resolved = MapSettings(
        region_radius=_read_positive(settings, "map/region_radius", REGION_RADIUS_M, float),
        panel_height=_read_positive(settings, "map/panel_height", PANEL_EXPANDED_HEIGHT, int),
        animation_ms=_read_positive(settings, "map/animation_ms", PANEL_ANIMATION_MS, int),
    )
    logger.debug(f"Map settings: {resolved}")
    return resolved
