"""Finding where a generator fits onto the working diagram, and committing it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .boundary import Boundary
from .diagram import Diagram
from .errors import DimensionMismatch
from .logging_utils import apply_debug_logging
from .matching import Match, find_matches
from .ncell import NCell

logger = logging.getLogger(__name__)


class AttachMode(str, Enum):
    ATTACH = "attach"
    REWRITE = "rewrite"


@dataclass
class EnumerationData:
    mode: AttachMode
    diagram: Diagram
    matches: List[Match] = field(default_factory=list)


def _collect(host: Diagram, needle: Diagram, path: tuple) -> List[Match]:
    size = needle.full_dimensions()
    return [Match(inclusion, path, size) for inclusion in find_matches(host, needle, path)]


def prepare_attachment(host: Diagram, generator_diagram: Diagram) -> EnumerationData:
    """Enumerate every place ``generator_diagram`` can be composed with ``host``.

    A diagram one dimension above the host rewrites it (its source is matched
    inside the host).  A diagram of at most the host's dimension is attached
    along the iterated source or target boundary; the boundary depth is the
    difference in dimension.
    """

    dimension = generator_diagram.dimension
    if dimension == 0:
        raise DimensionMismatch("0-cells can never be attached")

    if dimension == host.dimension + 1:
        source = generator_diagram.get_source_boundary()
        matches = _collect(host, source, ())
        logger.debug("prepare_attachment: %d rewrite site(s)", len(matches))
        return EnumerationData(AttachMode.REWRITE, generator_diagram, matches)

    if dimension > host.dimension:
        raise DimensionMismatch(
            f"a {dimension}-diagram cannot be composed with a {host.dimension}-diagram"
        )

    depth = host.dimension - dimension + 1
    matches = _collect(host, generator_diagram, (Boundary.SOURCE,) * depth)
    matches += _collect(host, generator_diagram, (Boundary.TARGET,) * depth)
    logger.debug("prepare_attachment: %d attachment site(s)", len(matches))
    return EnumerationData(AttachMode.ATTACH, generator_diagram, matches)


def commit_attachment(host: Diagram, data: EnumerationData, match: Match) -> Diagram:
    """Apply the rewrite or attachment chosen from ``data.matches`` to ``host`` in place."""

    coordinates = match.inclusion.coordinates
    if data.mode is AttachMode.REWRITE:
        cells = data.diagram.cells
        if len(cells) == 1 and cells[0].is_placement and not any(cells[0].coordinates or ()):
            host.rewrite(NCell(cells[0].id, coordinates))
        else:
            host._substitute(
                data.diagram.get_source_boundary(), data.diagram.get_target_boundary(), coordinates
            )
    else:
        host.attach(data.diagram, match.boundary_path, match.inclusion)
    logger.info(
        "Committed %s of %d-diagram at %s",
        data.mode.value,
        data.diagram.dimension,
        list(coordinates),
    )
    return host


apply_debug_logging(globals(), logger=logger, skip={"AttachMode", "EnumerationData"})


__all__ = ["AttachMode", "EnumerationData", "prepare_attachment", "commit_attachment"]
