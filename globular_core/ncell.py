from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .boundary import Coordinates, add_coordinates, shift_right_aligned


@dataclass(frozen=True)
class NCell:
    """One placed rewrite: a generator placement or a family move.

    Generator placements carry ``coordinates`` (inclusion of the generator's
    source into the slice, last entry = height).  Family moves carry only
    ``key``, their height in the slice they act on.
    """

    id: str
    coordinates: Optional[Coordinates] = None
    key: Optional[Coordinates] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        if self.coordinates is not None:
            object.__setattr__(self, "coordinates", tuple(int(v) for v in self.coordinates))
        if self.key is not None:
            object.__setattr__(self, "key", tuple(int(v) for v in self.key))
        if self.coordinates is None and self.key is None:
            raise ValueError(f"NCell {self.id!r} needs coordinates or a key")

    @property
    def position(self) -> Coordinates:
        return self.coordinates if self.coordinates is not None else self.key  # type: ignore[return-value]

    @property
    def height(self) -> int:
        position = self.position
        return position[-1] if position else 0

    @property
    def is_placement(self) -> bool:
        return self.coordinates is not None

    def moved(self, offsets: Sequence[int]) -> "NCell":
        """Return a copy translated by ``offsets`` (the ambient slice offset)."""

        offsets = tuple(offsets)
        if not offsets:
            return self
        coordinates = self.coordinates
        key = self.key
        if coordinates is not None:
            coordinates = add_coordinates(coordinates, offsets)
        if key is not None:
            key = shift_right_aligned(key, offsets)
        return NCell(self.id, coordinates, key)

    def lifted(self, height_delta: int, offset_delta: int = 0) -> "NCell":
        """Move the last coordinate by ``height_delta`` and the one before by ``offset_delta``."""

        position = list(self.position)
        if position:
            position[-1] += height_delta
        if offset_delta:
            position[-2] += offset_delta
        if self.coordinates is not None:
            return NCell(self.id, tuple(position), self.key)
        return NCell(self.id, None, tuple(position))

    def __repr__(self) -> str:
        if self.coordinates is not None:
            return f"NCell({self.id!r}, {list(self.coordinates)})"
        return f"NCell({self.id!r}, key={list(self.key or ())})"
