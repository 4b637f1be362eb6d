"""Plain data types shared by the map screen."""
from streetgallery.model.geo import Coordinate, MapRegion
from streetgallery.model.pin import DroppablePin, PinAnnotationView, UserLocationAnnotation

__all__ = [
    "Coordinate",
    "MapRegion",
    "DroppablePin",
    "PinAnnotationView",
    "UserLocationAnnotation",
]
