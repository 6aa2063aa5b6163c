"""Coordinate and boundary primitives shared by diagrams and families."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from .errors import DimensionMismatch

Coordinates = Tuple[int, ...]


class Boundary(str, Enum):
    SOURCE = "s"
    TARGET = "t"

    @property
    def opposite(self) -> "Boundary":
        return Boundary.TARGET if self is Boundary.SOURCE else Boundary.SOURCE


BoundaryPath = Tuple[Boundary, ...]

_BOUNDARY_ALIASES = {
    "s": Boundary.SOURCE,
    "source": Boundary.SOURCE,
    "t": Boundary.TARGET,
    "target": Boundary.TARGET,
}


def parse_boundary_path(path: Union[str, Iterable[Union[str, Boundary]], None]) -> BoundaryPath:
    """Normalise ``'ss'``, ``['source', 'source']`` or Boundary tokens to a path."""

    if path is None:
        return ()
    if isinstance(path, Boundary):
        return (path,)
    tokens: Iterable[Union[str, Boundary]]
    if isinstance(path, str):
        tokens = [path] if path in ("source", "target") else list(path)
    else:
        tokens = path
    parsed = []
    for token in tokens:
        if isinstance(token, Boundary):
            parsed.append(token)
            continue
        try:
            parsed.append(_BOUNDARY_ALIASES[str(token).lower()])
        except KeyError as exc:
            raise ValueError(f"invalid boundary token {token!r}") from exc
    return tuple(parsed)


def format_boundary_path(path: BoundaryPath) -> str:
    return "".join(token.value for token in path)


def _as_array(values: Sequence[int]) -> np.ndarray:
    return np.asarray(list(values), dtype=np.int64)


def _as_coordinates(values: np.ndarray) -> Coordinates:
    return tuple(int(v) for v in values.tolist())


def add_coordinates(base: Sequence[int], offsets: Sequence[int]) -> Coordinates:
    if len(base) != len(offsets):
        raise DimensionMismatch(f"cannot add coordinates of length {len(base)} and {len(offsets)}")
    return _as_coordinates(_as_array(base) + _as_array(offsets))


def shift_right_aligned(values: Sequence[int], offsets: Sequence[int]) -> Coordinates:
    """Add ``offsets`` to ``values`` with both sequences aligned on their last entry.

    Used for auxiliary keys, which only cover the trailing dimensions of the
    ambient coordinate space.
    """

    if not values or not offsets:
        return tuple(int(v) for v in values)
    width = min(len(values), len(offsets))
    head = list(values[: len(values) - width])
    tail = _as_array(values[len(values) - width:]) + _as_array(offsets[len(offsets) - width:])
    return tuple(int(v) for v in head) + _as_coordinates(tail)


def unit_offset(width: int, index: int, amount: int) -> Coordinates:
    offsets = np.zeros(width, dtype=np.int64)
    offsets[index] = amount
    return _as_coordinates(offsets)


def elementwise_max(rows: Sequence[Sequence[int]], width: int) -> Coordinates:
    if not rows:
        return tuple([0] * width)
    stacked = np.asarray([list(row) for row in rows], dtype=np.int64).reshape(len(rows), width)
    return _as_coordinates(stacked.max(axis=0))


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular extent ``[min, max]`` in slice coordinates."""

    min: Coordinates
    max: Coordinates

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", tuple(int(v) for v in self.min))
        object.__setattr__(self, "max", tuple(int(v) for v in self.max))
        if len(self.min) != len(self.max):
            raise DimensionMismatch("bounding box corners have different lengths")

    @property
    def dimension(self) -> int:
        return len(self.min)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        if other.dimension != self.dimension:
            raise DimensionMismatch("cannot unite bounding boxes of different dimension")
        return BoundingBox(
            _as_coordinates(np.minimum(_as_array(self.min), _as_array(other.min))),
            _as_coordinates(np.maximum(_as_array(self.max), _as_array(other.max))),
        )

    def extended(self, low: int, high: int) -> "BoundingBox":
        """Append one more dimension spanning ``[low, high]``."""

        return BoundingBox(self.min + (int(low),), self.max + (int(high),))

    def is_deeper_than(self, other: "BoundingBox") -> bool:
        """True when this box starts at or after the end of ``other`` in the last dimension."""

        return self.min[-1] >= other.max[-1]

    def is_shallower_than(self, other: "BoundingBox") -> bool:
        return self.max[-1] <= other.min[-1]


def union_all(boxes: Iterable[BoundingBox]) -> BoundingBox:
    result = None
    for box in boxes:
        result = box if result is None else result.union(box)
    if result is None:
        raise ValueError("union_all requires at least one bounding box")
    return result


__all__ = [
    "Coordinates",
    "Boundary",
    "BoundaryPath",
    "BoundingBox",
    "parse_boundary_path",
    "format_boundary_path",
    "add_coordinates",
    "shift_right_aligned",
    "unit_offset",
    "elementwise_max",
    "union_all",
]
