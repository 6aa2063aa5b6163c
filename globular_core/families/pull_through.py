"""The ``IntL`` family: pulling a 3-cell through an adjacent 2-cell.

A move acts on a 3-diagram at key ``(x,)`` where cell ``x`` is a generator
3-cell ``g`` rewriting ``s`` cells at slice height ``h`` into ``t`` cells.  A
2-cell ``c`` directly above (side ``L``) or below (side ``R``) ``g``'s region
is carried across ``g`` by a chain of ``Int``/``IntI`` interchangers; the
inverse moves (suffix ``I``) undo this.  ``g`` must lie strictly deeper than
``c`` (further right) when the subtype is ``Int`` on side ``L`` or ``IntI`` on
side ``R``, and strictly shallower otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..boundary import Boundary, Coordinates
from ..errors import InvalidMove, StructuralMismatch
from ..logging_utils import apply_debug_logging
from ..ncell import NCell
from .base import Drag, DragOption, SingularityFamily
from .interchanger import InterchangerFamily, InterchangerMove

if TYPE_CHECKING:  # pragma: no cover
    from ..diagram import Diagram

logger = logging.getLogger(__name__)


class PullThroughMove(str, Enum):
    INT_L = "Int-L"
    INT_LI = "Int-LI"
    INT_I_L = "IntI-L"
    INT_I_LI = "IntI-LI"
    INT_R = "Int-R"
    INT_RI = "Int-RI"
    INT_I_R = "IntI-R"
    INT_I_RI = "IntI-RI"


class Side(str, Enum):
    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class MoveShape:
    subtype: InterchangerMove
    side: Side
    inverse: bool

    @property
    def deeper(self) -> bool:
        return (self.subtype is InterchangerMove.INT) == (self.side is Side.LEFT)

    @property
    def neighbour_above(self) -> bool:
        """Whether the carried 2-cell sits above ``g`` in the slice before the move."""

        return (self.side is Side.LEFT) != self.inverse


_SHAPES = {
    PullThroughMove.INT_L: MoveShape(InterchangerMove.INT, Side.LEFT, False),
    PullThroughMove.INT_LI: MoveShape(InterchangerMove.INT, Side.LEFT, True),
    PullThroughMove.INT_I_L: MoveShape(InterchangerMove.INT_I, Side.LEFT, False),
    PullThroughMove.INT_I_LI: MoveShape(InterchangerMove.INT_I, Side.LEFT, True),
    PullThroughMove.INT_R: MoveShape(InterchangerMove.INT, Side.RIGHT, False),
    PullThroughMove.INT_RI: MoveShape(InterchangerMove.INT, Side.RIGHT, True),
    PullThroughMove.INT_I_R: MoveShape(InterchangerMove.INT_I, Side.RIGHT, False),
    PullThroughMove.INT_I_RI: MoveShape(InterchangerMove.INT_I, Side.RIGHT, True),
}

_UP_OPTIONS = (
    PullThroughMove.INT_L,
    PullThroughMove.INT_I_L,
    PullThroughMove.INT_I_R,
    PullThroughMove.INT_R,
)
_DOWN_OPTIONS = (
    PullThroughMove.INT_RI,
    PullThroughMove.INT_I_RI,
    PullThroughMove.INT_LI,
    PullThroughMove.INT_I_LI,
)


class PullThroughFamily(SingularityFamily):
    name = "IntL"
    dimension = 4
    Move = PullThroughMove
    shapes = _SHAPES  # type: ignore[assignment]

    def __init__(self, interchangers: InterchangerFamily) -> None:
        self.interchangers = interchangers
        super().__init__()

    def shape(self, move: object) -> MoveShape:
        return _SHAPES[self.parse_move(move)]  # type: ignore[index]

    def inverse(self, move: object) -> PullThroughMove:  # type: ignore[override]
        shape = self.shape(move)
        for member, other in _SHAPES.items():
            if other.subtype is shape.subtype and other.side is shape.side and other.inverse != shape.inverse:
                return member
        raise AssertionError(f"no inverse for {move!r}")

    def _chain(self, subtype: InterchangerMove, x: int, n: int, m: int) -> List[NCell]:
        return self.interchangers.expand_block(subtype, x, n, m)

    # ------------------------------------------------------------------
    # geometry helpers

    def _generator_cell(self, diagram: "Diagram", x: int) -> Optional[NCell]:
        if diagram.dimension != self.dimension - 1 or not 0 <= x < len(diagram.cells):
            return None
        cell = diagram.cells[x]
        if not cell.is_placement or diagram.families.is_move(cell.id):
            return None
        return cell

    def _site(self, diagram: "Diagram", move: object, key: Coordinates) -> int:
        if len(key) == 1 and self._generator_cell(diagram, key[0]) is not None:
            return key[0]
        raise InvalidMove(self.parse_move(move).value, key, f"no generator 3-cell at {list(key)}")

    def _edge_span(self, diagram: "Diagram", x: int, boundary: Boundary) -> Tuple[int, int]:
        """Horizontal extent of ``g``'s bottom (source) or top (target) 1-dimensional edge."""

        cell = diagram.cells[x]
        generator = diagram.signature.get_generator(cell.id)
        edge = generator.source.get_boundary(boundary)  # type: ignore[union-attr]
        lo = cell.coordinates[-2]  # type: ignore[index]
        return lo, lo + len(edge.cells)

    def _neighbour(self, diagram: "Diagram", x: int, shape: MoveShape) -> Optional[Tuple["Diagram", int]]:
        slice_ = diagram.get_slice(x)
        h = diagram.cells[x].height
        if shape.neighbour_above:
            index = h + diagram.source_size(x)
            if index >= len(slice_.cells):
                return None
            return slice_, index
        if h <= 0:
            return None
        return slice_, h - 1

    def _horizontal_shift(self, diagram: "Diagram", move: object, x: int) -> int:
        shape = self.shape(move)
        if not shape.deeper:
            return 0
        found = self._neighbour(diagram, x, shape)
        if found is None:
            raise InvalidMove(self.parse_move(move).value, (x,), f"no 2-cell next to cell {x}")
        slice_, index = found
        growth = slice_.target_size(index) - slice_.source_size(index)
        return growth if shape.neighbour_above else -growth

    # ------------------------------------------------------------------
    # operations

    def interchanger_allowed(self, diagram: "Diagram", move: object, key: Coordinates) -> bool:
        shape = self.shape(move)
        if len(key) != 1:
            return False
        x = key[0]
        cell = self._generator_cell(diagram, x)
        if cell is None:
            return False
        found = self._neighbour(diagram, x, shape)
        if found is None:
            return False
        slice_, index = found

        if shape.neighbour_above:
            c_lo, c_hi = slice_.cell_span(index, Boundary.SOURCE)
            g_lo, g_hi = self._edge_span(diagram, x, Boundary.TARGET)
        else:
            c_lo, c_hi = slice_.cell_span(index, Boundary.TARGET)
            g_lo, g_hi = self._edge_span(diagram, x, Boundary.SOURCE)
        if shape.deeper and g_lo < c_hi:
            return False
        if not shape.deeper and g_hi > c_lo:
            return False

        h = cell.height
        s = diagram.source_size(x)
        t = diagram.target_size(x)
        if not shape.inverse:
            if shape.side is Side.LEFT:
                expected = self._chain(shape.subtype, h, t, 1)
            else:
                expected = self._chain(shape.subtype, h - 1, 1, t)
            actual = diagram.cells[x + 1:x + 1 + t]
        else:
            if x - s < 0:
                return False
            if shape.side is Side.LEFT:
                expected = self._chain(shape.subtype, h - 1, s, 1)
            else:
                expected = self._chain(shape.subtype, h, 1, s)
            actual = diagram.cells[x - s:x]
        return diagram.instructions_equiv(actual, expected)

    def rewrite_paste_data(self, diagram: "Diagram", move: object, key: Coordinates) -> List[NCell]:
        shape = self.shape(move)
        x = self._site(diagram, move, key)
        g = diagram.cells[x]
        h = g.height
        s = diagram.source_size(x)
        t = diagram.target_size(x)
        dx = self._horizontal_shift(diagram, move, x)
        if not shape.inverse:
            if shape.side is Side.LEFT:
                return self._chain(shape.subtype, h, s, 1) + [g.lifted(1, dx)]
            return self._chain(shape.subtype, h - 1, 1, s) + [g.lifted(-1, dx)]
        if shape.side is Side.LEFT:
            return [g.lifted(-1, dx)] + self._chain(shape.subtype, h - 1, t, 1)
        return [g.lifted(1, dx)] + self._chain(shape.subtype, h, 1, t)

    def source_region(self, diagram: "Diagram", move: object, key: Coordinates) -> Tuple[int, int]:
        x = self._site(diagram, move, key)
        if self.shape(move).inverse:
            s = diagram.source_size(x)
            if x - s < 0:
                raise InvalidMove(self.parse_move(move).value, key, f"no interchangers below cell {x}")
            return x - s, s + 1
        return x, 1 + diagram.target_size(x)

    def target_size(self, diagram: "Diagram", move: object, key: Coordinates) -> int:
        x = self._site(diagram, move, key)
        if self.shape(move).inverse:
            return 1 + diagram.target_size(x)
        return diagram.source_size(x) + 1

    def inverse_key(self, diagram: "Diagram", move: object, key: Coordinates) -> Coordinates:
        x = self._site(diagram, move, key)
        s = diagram.source_size(x)
        return (x - s,) if self.shape(move).inverse else (x + s,)

    def interchanger_coordinates(self, diagram: "Diagram", move: object, key: Coordinates) -> Coordinates:
        """Placement of ``g`` after the move followed by its new index.

        This is read off the pasted cells instead of applying a fixed offset
        per suffix, so the horizontal shift of a deeper move is included.
        """

        paste = self.rewrite_paste_data(diagram, move, key)
        moved = paste[0] if self.shape(move).inverse else paste[-1]
        return moved.position + self.inverse_key(diagram, move, key)

    # ------------------------------------------------------------------
    # decomposition

    def expand(self, diagram: "Diagram", move: object, *args: int) -> List[NCell]:  # type: ignore[override]
        """Decompose an ``n x m`` pull-through region into elementary moves.

        ``n`` consecutive 3-cells are pulled through by ``m`` neighbouring
        2-cells.  ``x`` is the index of the first 3-cell, or for inverse moves
        of the cell just before it; ``y`` is the slice height the region starts
        at and ``l`` the number of slice cells it spans.  Where the region is
        wider than a 3-cell's own source, the interchangers acting on the
        extra slice cells are first moved past that 3-cell by ``Int``/``IntI``
        moves keyed by 3-cell index.  Each step is applied to a scratch copy,
        so the result is always a composite that rewrites ``diagram``.
        ``n == 0`` or ``m == 0`` yields an empty list.
        """

        x, y, n, l, m = args
        move = self.parse_move(move)
        if n == 0 or m == 0:
            return []
        start = x + 1 if _SHAPES[move].inverse else x  # type: ignore[index]
        cells, _ = self._expand(diagram.copy(), move, start, y, n, l, m)  # type: ignore[arg-type]
        return cells

    def _expand(
        self, work: "Diagram", move: PullThroughMove, p: int, y: int, n: int, l: int, m: int
    ) -> Tuple[List[NCell], int]:
        # returns the cells applied to ``work`` and the new index of the first 3-cell
        if n == 0 or m == 0:
            return [], p
        shape = _SHAPES[move]
        if n == 1 and m == 1:
            return self._pull(work, move, p, y, l)
        if m > 1 and (n == 1 or m > n):
            step = 1 if shape.neighbour_above else -1
            first, p = self._expand(work, move, p, y, n, l, 1)
            rest, p = self._expand(work, move, p, y + step, n, l, m - 1)
            return first + rest, p
        if shape.inverse:
            growth = work.target_size(p) - work.source_size(p)
            before = len(work.cells)
            first, start = self._expand(work, move, p, y, 1, l, m)
            rest, _ = self._expand(work, move, p + 1 + len(work.cells) - before, y, n - 1, l + growth, m)
            return first + rest, start
        growth = sum(work.target_size(i) - work.source_size(i) for i in range(p, p + n - 1))
        first, _ = self._expand(work, move, p + n - 1, y, 1, l + growth, m)
        rest, start = self._expand(work, move, p, y, n - 1, l, m)
        return first + rest, start

    def _pull(self, work: "Diagram", move: PullThroughMove, p: int, y: int, l: int) -> Tuple[List[NCell], int]:
        shape = _SHAPES[move]
        cell = self._generator_cell(work, p)
        if cell is None:
            raise InvalidMove(move.value, (p,), f"no generator 3-cell at {p}")
        h = cell.height
        s = work.source_size(p)
        a = y + l - h - s
        b = h - y
        if a < 0 or b < 0:
            raise StructuralMismatch(f"cell {p} (height {h}, size {s}) does not fit in region [{y}, {y + l})")

        # slice cells above (a) and below (b) g that the carried cell crosses outside g's own region
        lead, trail = (a, b) if shape.side is Side.LEFT else (b, a)
        swap = self.interchangers.swap
        cells = []
        if not shape.inverse:
            for i in range(lead):
                cells.append(swap(work, p + i))
            p += lead
            cells.append(self._apply(work, move, p))
            p += s
            for i in range(trail):
                cells.append(swap(work, p + i))
            return cells, p + trail

        for i in range(trail):
            cells.append(swap(work, p - 1 - i))
        p -= trail
        cells.append(self._apply(work, move, p))
        p -= s
        for i in range(lead):
            cells.append(swap(work, p - 1 - i))
        return cells, p - lead

    @staticmethod
    def _apply(work: "Diagram", move: PullThroughMove, p: int) -> NCell:
        cell = NCell(move.value, key=(p,))
        work.rewrite(cell)
        return cell

    def interpret_drag(self, diagram: "Diagram", drag: Drag) -> Optional[DragOption]:
        if not drag.coordinates:
            return None
        key = (drag.coordinates[0],)
        options = self.drag_options(diagram, _UP_OPTIONS if drag.up else _DOWN_OPTIONS, key)
        possible = [option for option in options if option.possible]
        if not possible:
            logger.debug("interpret_drag: no pull-through allowed at %s", key)
            return None
        logger.debug("interpret_drag: allowed %s", ", ".join(option.name for option in possible))
        if len(possible) == 1:
            return possible[0]
        first, second, third, fourth = options if drag.right else options[2:] + options[:2]
        if first.possible:
            return first
        if second.possible:
            return second
        if third.possible:
            return third
        return fourth


apply_debug_logging(globals(), logger=logger, skip={"PullThroughMove", "Side", "MoveShape"})
