"""Inclusion and match records plus boundary-aware match search."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence, Tuple, TypeVar, Union

from .boundary import Boundary, BoundaryPath, Coordinates, format_boundary_path, parse_boundary_path
from .errors import DimensionMismatch
from .logging_utils import apply_debug_logging

if TYPE_CHECKING:  # pragma: no cover
    from .diagram import Diagram

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inclusion:
    """Placement of a needle diagram inside a haystack of the same dimension."""

    coordinates: Coordinates
    length: int

    @property
    def height(self) -> int:
        return self.coordinates[-1] if self.coordinates else 0

    @property
    def mapping(self) -> Dict[int, int]:
        """Needle cell index -> haystack cell index."""

        return {index: self.height + index for index in range(self.length)}

    def touches(self, anchors: Iterable[int]) -> bool:
        cells = set(self.mapping.values())
        return any(anchor in cells for anchor in anchors)


@dataclass(frozen=True)
class Match:
    inclusion: Inclusion
    boundary_path: BoundaryPath
    size: Coordinates

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        path = format_boundary_path(self.boundary_path) or "-"
        return f"{path}@{list(self.inclusion.coordinates)} size={list(self.size)}"


M = TypeVar("M", Inclusion, Match)


def as_coordinates(inclusion: Union[Inclusion, Match, Sequence[int]]) -> Coordinates:
    if isinstance(inclusion, Match):
        return inclusion.inclusion.coordinates
    if isinstance(inclusion, Inclusion):
        return inclusion.coordinates
    return tuple(int(v) for v in inclusion)


def navigate(
    diagram: "Diagram", matched: "Diagram", boundary_path: BoundaryPath
) -> Tuple["Diagram", "Diagram"]:
    """Walk ``boundary_path`` on the host, pairing it with the opposite boundary of ``matched``."""

    host = diagram
    needle = matched
    for token in boundary_path:
        if token is Boundary.SOURCE:
            host = host.get_source_boundary()
            needle = needle.get_target_boundary()
        else:
            host = host.get_target_boundary()
            needle = needle.get_source_boundary()
    return host, needle


def find_matches(
    diagram: "Diagram", matched: "Diagram", boundary_path: Union[str, Sequence[object], None] = ()
) -> List[Inclusion]:
    """Return every inclusion of ``matched`` into the boundary of ``diagram`` named by the path."""

    path = parse_boundary_path(boundary_path)  # type: ignore[arg-type]
    needle = matched.copy()
    if needle.dimension > diagram.dimension:
        raise DimensionMismatch(
            f"cannot match a {needle.dimension}-diagram inside a {diagram.dimension}-diagram"
        )
    while needle.dimension < diagram.dimension:
        needle.boost()
    host, needle = navigate(diagram, needle, path)
    inclusions = host.enumerate(needle)
    logger.debug(
        "find_matches: %d inclusion(s) along path %r", len(inclusions), format_boundary_path(path)
    )
    return inclusions


def limit_matches(matches: Sequence[M], anchors: Iterable[int]) -> List[M]:
    """Keep the matches whose cell mapping touches at least one anchor cell index."""

    anchor_list = list(anchors)
    limited: List[M] = []
    for match in matches:
        inclusion = match.inclusion if isinstance(match, Match) else match
        if inclusion.touches(anchor_list):
            limited.append(match)
    return limited


apply_debug_logging(globals(), logger=logger, skip={"Inclusion", "Match", "as_coordinates"})


__all__ = [
    "Inclusion",
    "Match",
    "as_coordinates",
    "navigate",
    "find_matches",
    "limit_matches",
]
