"""Deterministic luck function.

``luck(key)`` maps an arbitrary string to a reproducible float in [0, 1).
The transform is fixed and documented so that every run, on every machine,
spawns the same caches with the same initial coin counts:

    luck(key) = (xxh64(utf8(key), seed=0) >> 11) / 2**53

xxHash64 output is uniformly distributed over the 64-bit range, so the
quotient is uniform over [0, 1) for distinct keys and spawn-probability
thresholds behave as expected. The generator is not cryptographically strong
and does not need to be.
"""

import xxhash

from geocoin.components import Cell

# 53 bits is the float mantissa; wider quotients can round up to 1.0.
_MANTISSA_BITS = 53
_HASH_SPACE = 1 << _MANTISSA_BITS


def luck(key: str) -> float:
    """Return a deterministic float in [0.0, 1.0) for ``key``."""
    digest = xxhash.xxh64(key.encode("utf-8")).intdigest()
    return (digest >> (64 - _MANTISSA_BITS)) / _HASH_SPACE


def spawn_key(cell: Cell) -> str:
    """Key deciding whether ``cell`` hosts a cache."""
    return f"{cell.i},{cell.j}"


def initial_value_key(cell: Cell) -> str:
    """Key deciding how many coins a fresh cache at ``cell`` starts with."""
    return f"{cell.i},{cell.j},initialValue"
