"""Engine exceptions."""


class GeocoinError(Exception):
    """Base class for errors raised by the engine."""


class MementoFormatError(GeocoinError):
    """Raised when a cache memento cannot be decoded."""


class RecoverablePersistenceError(GeocoinError):
    """Raised when the saved game blob is unreadable.

    Callers recover by starting from the default state; the error is logged,
    never surfaced to the player.
    """
