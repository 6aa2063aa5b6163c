"""The ``Int`` family: interchange of two adjacent cells.

On a 2-diagram the two cells are 2-cells side by side; on higher diagrams
they are cells acting on disjoint ranges of the slice, which is how the
pull-through decomposition moves 3-cells past each other.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..boundary import Boundary, Coordinates
from ..errors import InvalidMove
from ..logging_utils import apply_debug_logging
from ..ncell import NCell
from .base import Drag, DragOption, SingularityFamily

if TYPE_CHECKING:  # pragma: no cover
    from ..diagram import Diagram

logger = logging.getLogger(__name__)


class InterchangerMove(str, Enum):
    INT = "Int"
    INT_I = "IntI"


class InterchangerFamily(SingularityFamily):
    """Swaps cells ``h`` and ``h + 1`` of an n-diagram, ``n >= 2``.

    ``Int`` needs the upper cell's input to sit below (left of) the lower
    cell's output in the slice and ``IntI`` needs it above (right of) it.
    After the swap the cell that moved past the other one is shifted by the
    other's size change.
    """

    name = "Int"
    dimension = 3
    Move = InterchangerMove
    shapes = {
        InterchangerMove.INT: InterchangerMove.INT_I,
        InterchangerMove.INT_I: InterchangerMove.INT,
    }

    def acts_on(self, dimension: int) -> bool:
        return dimension >= self.dimension - 1

    def inverse(self, move: InterchangerMove) -> InterchangerMove:  # type: ignore[override]
        return self.shapes[self.parse_move(move)]  # type: ignore[index]

    def _pair(self, diagram: "Diagram", key: Coordinates) -> Optional[Tuple[int, NCell, NCell]]:
        if len(key) != 1 or not self.acts_on(diagram.dimension):
            return None
        h = key[0]
        if h < 0 or h + 1 >= len(diagram.cells):
            return None
        return h, diagram.cells[h], diagram.cells[h + 1]

    def _require_pair(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Tuple[int, NCell, NCell]:
        pair = self._pair(diagram, key)
        if pair is None:
            raise InvalidMove(self.parse_move(move).value, key, f"no pair of adjacent cells at {list(key)}")
        return pair

    def interchanger_allowed(self, diagram: "Diagram", move: Enum, key: Coordinates) -> bool:
        move = self.parse_move(move)
        pair = self._pair(diagram, key)
        if pair is None:
            return False
        h = pair[0]
        lower_lo, lower_hi = diagram.cell_span(h, Boundary.TARGET)
        upper_lo, upper_hi = diagram.cell_span(h + 1, Boundary.SOURCE)
        if move is InterchangerMove.INT:
            return upper_hi <= lower_lo
        return lower_hi <= upper_lo

    def rewrite_paste_data(self, diagram: "Diagram", move: Enum, key: Coordinates) -> List[NCell]:
        move = self.parse_move(move)
        h, lower, upper = self._require_pair(diagram, move, key)
        if move is InterchangerMove.INT:
            growth = diagram.target_size(h + 1) - diagram.source_size(h + 1)
            return [upper, lower.lifted(growth)]
        growth = diagram.target_size(h) - diagram.source_size(h)
        return [upper.lifted(-growth), lower]

    def source_region(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Tuple[int, int]:
        return self._require_pair(diagram, move, key)[0], 2

    def target_size(self, diagram: "Diagram", move: Enum, key: Coordinates) -> int:
        return 2

    def interchanger_coordinates(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Coordinates:
        """Where the lower cell ends up, followed by its new height ``h + 1``.

        This is the cell's actual post-move placement rather than a fixed
        offset from ``key``.
        """

        moved_lower = self.rewrite_paste_data(diagram, move, key)[1]
        return moved_lower.position + (key[0] + 1,)

    def inverse_key(self, diagram: "Diagram", move: Enum, key: Coordinates) -> Coordinates:
        return (self._require_pair(diagram, move, key)[0],)

    def expand(self, diagram: "Diagram", move: Enum, *args: int) -> List[NCell]:  # type: ignore[override]
        x, n, m = args
        return self.expand_block(self.parse_move(move), x, n, m)

    def expand_block(self, move: InterchangerMove, x: int, n: int, m: int) -> List[NCell]:
        """Interchangers moving a block of ``n`` cells at height ``x`` past the ``m`` cells above it."""

        if n == 0 or m == 0:
            return []
        if n == 1 and m == 1:
            return [NCell(move.value, key=(x,))]
        if m > 1 and (n == 1 or m > n):
            return self.expand_block(move, x, n, 1) + self.expand_block(move, x + 1, n, m - 1)
        return self.expand_block(move, x + n - 1, 1, m) + self.expand_block(move, x, n - 1, m)

    def swap(self, diagram: "Diagram", h: int) -> NCell:
        """Interchange cells ``h`` and ``h + 1`` of ``diagram`` in place with whichever move applies."""

        for move in InterchangerMove:
            if self.interchanger_allowed(diagram, move, (h,)):
                cell = NCell(move.value, key=(h,))
                diagram.rewrite(cell)
                return cell
        raise InvalidMove(InterchangerMove.INT.value, (h,), f"cells {h} and {h + 1} cannot be interchanged")

    def interpret_drag(self, diagram: "Diagram", drag: Drag) -> Optional[DragOption]:
        if not drag.coordinates:
            return None
        h = drag.coordinates[0]
        key = (h,) if drag.up else (h - 1,)
        options = self.drag_options(diagram, [InterchangerMove.INT, InterchangerMove.INT_I], key)
        possible = [option for option in options if option.possible]
        if not possible:
            logger.debug("interpret_drag: no interchanger allowed at %s", key)
            return None
        if len(possible) == 1:
            return possible[0]
        return options[0] if drag.right else options[1]


apply_debug_logging(
    globals(), logger=logger, skip={"InterchangerMove", "InterchangerFamily.expand_block", "InterchangerFamily.swap"}
)
