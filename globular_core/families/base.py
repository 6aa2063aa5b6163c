"""Singularity-family framework: descriptors, drag records and the registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from ..boundary import BoundingBox, Coordinates, union_all
from ..errors import NotFound
from ..ncell import NCell

if TYPE_CHECKING:  # pragma: no cover
    from ..diagram import Diagram

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FamilyDescriptor:
    name: str
    dimension: int
    members: Tuple[str, ...]


@dataclass(frozen=True)
class Drag:
    """Abstract gesture: ``directions = (vertical, horizontal)``, positive = up / right."""

    directions: Tuple[float, float]
    coordinates: Coordinates

    def __post_init__(self) -> None:
        object.__setattr__(self, "directions", tuple(self.directions))
        object.__setattr__(self, "coordinates", tuple(int(v) for v in self.coordinates))

    @property
    def up(self) -> bool:
        return self.directions[0] > 0

    @property
    def right(self) -> bool:
        return self.directions[1] > 0


@dataclass(frozen=True)
class DragOption:
    move: Enum
    key: Coordinates
    possible: bool

    @property
    def name(self) -> str:
        return str(self.move.value)

    def as_cell(self) -> NCell:
        return NCell(self.name, key=self.key)


class SingularityFamily:
    """Base class for a named family of interchange moves.

    Subclasses set ``name``, ``dimension`` (dimension of the move cells; they
    act on ``dimension - 1`` diagrams) and ``Move`` (a closed Enum of member
    names), and implement the geometric operations.  ``shapes`` maps every
    member to its shape record; it is checked for exhaustiveness on
    construction.
    """

    name: str = ""
    dimension: int = 0
    Move: Type[Enum]
    shapes: Dict[Enum, object] = {}

    def __init__(self) -> None:
        self.check_shapes()
        self.descriptor = FamilyDescriptor(
            self.name, self.dimension, tuple(str(member.value) for member in self.Move)
        )

    def check_shapes(self) -> None:
        missing = [member for member in self.Move if member not in self.shapes]
        if missing:
            raise TypeError(f"family {self.name} has no shape for {', '.join(m.value for m in missing)}")

    def parse_move(self, name: object) -> Enum:
        if isinstance(name, self.Move):
            return name
        try:
            return self.Move(str(getattr(name, "value", name)))
        except ValueError as exc:
            raise NotFound(str(name), f"{name!r} is not a {self.name} move") from exc

    def acts_on(self, dimension: int) -> bool:
        """Whether moves of this family rewrite ``dimension``-diagrams."""

        return dimension == self.dimension - 1

    # operations every family provides

    def expand(self, diagram: "Diagram", move: Enum, *args: int) -> List[NCell]:
        raise NotImplementedError

    def interchanger_allowed(self, diagram: "Diagram", move: Enum, key: Coordinates) -> bool:
        raise NotImplementedError

    def rewrite_paste_data(self, diagram: "Diagram", move: Enum, key: Coordinates) -> List[NCell]:
        raise NotImplementedError

    def source_region(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Tuple[int, int]:
        """``(start, length)`` of the cells a move at ``key`` replaces."""

        raise NotImplementedError

    def target_size(self, diagram: "Diagram", move: Enum, key: Coordinates) -> int:
        raise NotImplementedError

    def interchanger_coordinates(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Coordinates:
        raise NotImplementedError

    def inverse_key(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Coordinates:
        raise NotImplementedError

    def inverse(self, move: Enum) -> Enum:
        raise NotImplementedError

    def interpret_drag(self, diagram: "Diagram", drag: Drag) -> Optional[DragOption]:
        raise NotImplementedError

    # shared behaviour

    def interchanger_bounding_box(self, diagram: "Diagram", move: Enum, key: Coordinates) -> BoundingBox:
        start, length = self.source_region(diagram, move, key)
        box = union_all(diagram.get_slice_bounding_box(i) for i in range(start, start + length))
        return box.extended(start, start + length)

    def drag_options(self, diagram: "Diagram", moves: Iterable[Enum], key: Coordinates) -> List[DragOption]:
        return [
            DragOption(move, tuple(key), self.interchanger_allowed(diagram, move, tuple(key)))
            for move in moves
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, dimension={self.dimension})"


class FamilyRegistry:
    """Write-once collection of singularity families, shared by signatures."""

    def __init__(self, families: Sequence[SingularityFamily] = ()) -> None:
        self._families: Dict[str, SingularityFamily] = {}
        self._moves: Dict[str, Tuple[SingularityFamily, Enum]] = {}
        self._frozen = False
        for family in families:
            self.register(family)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, family: SingularityFamily) -> SingularityFamily:
        if self._frozen:
            raise RuntimeError("family registry is frozen")
        if family.name in self._families:
            raise ValueError(f"family {family.name!r} already registered")
        family.check_shapes()
        for member in family.Move:
            if member.value in self._moves:
                raise ValueError(f"move {member.value!r} already registered")
        self._families[family.name] = family
        for member in family.Move:
            self._moves[str(member.value)] = (family, member)
        logger.debug("Registered family %s (%d moves)", family.name, len(family.Move))
        return family

    def freeze(self) -> "FamilyRegistry":
        self._frozen = True
        return self

    def family(self, name: str) -> SingularityFamily:
        try:
            return self._families[name]
        except KeyError as exc:
            raise NotFound(name, f"no family {name!r}") from exc

    def lookup(self, move_name: str) -> Optional[Tuple[SingularityFamily, Enum]]:
        return self._moves.get(move_name)

    def family_for_move(self, move_name: str) -> Tuple[SingularityFamily, Enum]:
        found = self.lookup(move_name)
        if found is None:
            raise NotFound(move_name, f"unknown move type {move_name!r}")
        return found

    def families_for_dimension(self, dimension: int) -> List[SingularityFamily]:
        return [family for family in self._families.values() if family.dimension == dimension]

    def is_move(self, name: str) -> bool:
        return name in self._moves

    def __iter__(self):
        return iter(self._families.values())

    def __len__(self) -> int:
        return len(self._families)
