"""Interactive session: a signature plus the diagram currently being built."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from .attachment import EnumerationData, commit_attachment, prepare_attachment
from .boundary import Boundary, parse_boundary_path
from .config import get_engine_config
from .diagram import Diagram
from .errors import DimensionMismatch, GlobularError, InvalidMove
from .families import Drag, FamilyRegistry, InterchangerMove, build_default_registry
from .generator import Generator, check_globularity
from .matching import Match
from .matching import limit_matches as _limit_matches
from .ncell import NCell
from .signature import Signature

logger = logging.getLogger(__name__)


class Project:
    """Owns the signature and the working diagram (``None`` when the workspace is empty)."""

    def __init__(self, families: Optional[FamilyRegistry] = None) -> None:
        self.families = families if families is not None else build_default_registry()
        self.signature = Signature(self.families)
        self.diagram: Optional[Diagram] = None
        self.cached_source: Optional[Diagram] = None
        self.cached_target: Optional[Diagram] = None
        self._selected_height: Optional[int] = None
        self.add_zero_cell()

    # signature management

    def add_zero_cell(self, identifier: Optional[str] = None) -> Generator:
        return self.signature.level(0).add_generator(Generator(None, None, identifier))

    def lift(self) -> int:
        self.signature.lift()
        return self.signature.n

    def list_generators(self) -> List[List[str]]:
        return self.signature.get_cells()

    def get_signature(self) -> Signature:
        return self.signature

    def get_diagram(self) -> Optional[Diagram]:
        return self.diagram

    def _require_diagram(self) -> Diagram:
        if self.diagram is None:
            raise GlobularError("the workspace is empty")
        return self.diagram

    # building diagrams

    def select_generator(self, identifier: str) -> Optional[EnumerationData]:
        """Load ``identifier`` into an empty workspace, or list where it can be composed."""

        generator_diagram = self.signature.create_diagram(identifier)
        if self.diagram is None:
            self.diagram = generator_diagram
            self._selected_height = None
            logger.info("Loaded generator %s into the workspace", identifier)
            return None
        return prepare_attachment(self.diagram, generator_diagram)

    def matches(self, data: EnumerationData) -> List[Match]:
        return list(data.matches)

    def limit_matches(self, data: EnumerationData, anchors: Iterable[int]) -> List[Match]:
        return _limit_matches(data.matches, anchors)

    def attach(self, data: EnumerationData, match: Match) -> Diagram:
        diagram = self._require_diagram()
        commit_attachment(diagram, data, match)
        self._selected_height = None
        return diagram

    def take_identity(self) -> Diagram:
        diagram = self._require_diagram()
        diagram.boost()
        logger.info("Took identity: working diagram is now %d-dimensional", diagram.dimension)
        return diagram

    def clear_diagram(self) -> None:
        self.diagram = None
        self._selected_height = None

    def save_source_target(self, boundary: Union[str, Boundary] = Boundary.SOURCE) -> Optional[Generator]:
        """Cache the working diagram as a source or target.

        Once both are cached they become the boundaries of a new generator,
        which is returned; the signature is lifted when needed.  A rejected
        pair keeps the workspace and the boundary cached earlier.
        """

        path = parse_boundary_path(boundary)
        if len(path) != 1:
            raise ValueError(f"expected 'source' or 'target', got {boundary!r}")
        diagram = self._require_diagram().copy()
        is_source = path[0] is Boundary.SOURCE
        other = self.cached_target if is_source else self.cached_source
        if other is None:
            if is_source:
                self.cached_source = diagram
            else:
                self.cached_target = diagram
            self.clear_diagram()
            return None

        source, target = (diagram, other) if is_source else (other, diagram)
        if source.dimension != target.dimension:
            raise DimensionMismatch(
                f"source is {source.dimension}-dimensional but target is {target.dimension}-dimensional"
            )
        if get_engine_config().check_globularity:
            check_globularity(source, target)

        self.cached_source = None
        self.cached_target = None
        self.clear_diagram()
        dimension = source.dimension + 1
        while self.signature.n < dimension:
            self.signature.lift()
        return self.signature.level(dimension).add_generator(Generator(source, target))

    # interchanges

    def click_cell(self, height: int) -> Optional[NCell]:
        """Select a 2-cell; a second click on an adjacent cell interchanges the two.

        Clicking the selected cell again keeps the selection.  When both
        interchanges are possible the cell clicked second ends up on the left.
        """

        diagram = self._require_diagram()
        if diagram.dimension != 2:
            raise DimensionMismatch("cells can only be interchanged in a 2-diagram")
        if not 0 <= height < len(diagram.cells):
            raise IndexError(f"no cell at height {height}")
        if self._selected_height is None:
            self._selected_height = height
            return None
        if self._selected_height == height:
            return None

        first = self._selected_height
        self._selected_height = None
        lower = min(first, height)
        if abs(first - height) != 1:
            raise InvalidMove(InterchangerMove.INT.value, (lower,), "cells are not adjacent")
        allowed = [move for move in InterchangerMove if diagram.interchanger_allowed(move, (lower,))]
        if not allowed:
            raise InvalidMove(InterchangerMove.INT.value, (lower,), "cells cannot be interchanged")
        if len(allowed) == 2:
            # IntI leaves the lower cell on the left
            move = InterchangerMove.INT_I if height == lower else InterchangerMove.INT
        else:
            move = allowed[0]
        cell = NCell(move.value, key=(lower,))
        diagram.rewrite(cell)
        logger.info("Interchanged cells %d and %d with %s", lower, lower + 1, move.value)
        return cell

    def drag(self, drag: Drag) -> Optional[NCell]:
        """Interpret a gesture on the working diagram and apply the resulting move."""

        diagram = self._require_diagram()
        option = diagram.interpret_drag(drag)
        if option is None:
            return None
        cell = option.as_cell()
        diagram.rewrite(cell)
        logger.info("Applied %s at %s", option.name, list(option.key))
        return cell
