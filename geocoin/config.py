"""Gameplay configuration with sensible defaults."""

import math
import os
from dataclasses import dataclass

from geocoin.components import LatLng

# Location of the Oakes College classroom the game was first played around.
OAKES_CLASSROOM = LatLng(36.98949379578401, -122.06277128548504)


@dataclass(frozen=True)
class GameConfig:
    """Immutable tunables shared by the engine, the session and the app.

    Attributes:
        origin: Default player location (new game and reset).
        tile_degrees: Edge length of a grid cell in degrees.
        neighborhood_radius: Manhattan radius (in cells) of the populated area.
        spawn_probability: Chance that a cell hosts a cache.
        initial_coin_scale: Fresh caches hold ``floor(luck * scale)`` coins.
        save_path: File used by :class:`geocoin.persistence.FileBlobStore`.
        log_level: Root logging level name.
    """

    origin: LatLng = OAKES_CLASSROOM
    tile_degrees: float = 1e-4
    neighborhood_radius: int = 8
    spawn_probability: float = 0.1
    initial_coin_scale: int = 10
    save_path: str = "geocoin_save.json"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not (
            math.isfinite(self.origin.lat)
            and math.isfinite(self.origin.lng)
            and abs(self.origin.lat) <= 90.0
            and abs(self.origin.lng) <= 180.0
        ):
            raise ValueError("origin must be a finite latitude / longitude")
        if self.tile_degrees <= 0:
            raise ValueError("tile_degrees must be positive")
        if self.neighborhood_radius < 0:
            raise ValueError("neighborhood_radius must be non-negative")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError("spawn_probability must lie in [0, 1]")
        if self.initial_coin_scale < 0:
            raise ValueError("initial_coin_scale must be non-negative")

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a config from ``GEOCOIN_*`` environment variables.

        Unset variables keep the dataclass defaults.
        """
        defaults = cls()
        origin = LatLng(
            float(os.getenv("GEOCOIN_ORIGIN_LAT", str(defaults.origin.lat))),
            float(os.getenv("GEOCOIN_ORIGIN_LNG", str(defaults.origin.lng))),
        )
        return cls(
            origin=origin,
            tile_degrees=float(
                os.getenv("GEOCOIN_TILE_DEGREES", str(defaults.tile_degrees))
            ),
            neighborhood_radius=int(
                os.getenv("GEOCOIN_NEIGHBORHOOD_RADIUS", str(defaults.neighborhood_radius))
            ),
            spawn_probability=float(
                os.getenv("GEOCOIN_SPAWN_PROBABILITY", str(defaults.spawn_probability))
            ),
            initial_coin_scale=int(
                os.getenv("GEOCOIN_INITIAL_COIN_SCALE", str(defaults.initial_coin_scale))
            ),
            save_path=os.getenv("GEOCOIN_SAVE_PATH", defaults.save_path),
            log_level=os.getenv("GEOCOIN_LOG_LEVEL", defaults.log_level),
        )
