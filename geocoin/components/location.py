"""Geographic location components.

``LatLng`` stores the player's position in degrees; ``Bounds`` describes the
rectangle covered by a cell and is what the core hands to the rendering
collaborator.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LatLng:
    """Latitude / longitude pair in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle in degrees.

    Attributes:
        south_west: Minimum latitude / longitude corner.
        north_east: Maximum latitude / longitude corner.
    """

    south_west: LatLng
    north_east: LatLng

    def contains(self, point: LatLng) -> bool:
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )
