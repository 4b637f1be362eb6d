from __future__ import annotations

from dataclasses import dataclass

from streetgallery.model.geo import Coordinate


@dataclass(frozen=True)
class DroppablePin:
    """A user-selected map location. Only one is shown at a time."""
    identifier: str
    coordinate: Coordinate


@dataclass(frozen=True)
class UserLocationAnnotation:
    """Marker for the device position; rendered by the map itself."""
    coordinate: Coordinate


@dataclass
class PinAnnotationView:
    """How a pin annotation is drawn on the map."""
    annotation: DroppablePin
    reuse_identifier: str
    tint_color: str = "#FF3E00"
    animates_drop: bool = False
    size: float = 16.0
