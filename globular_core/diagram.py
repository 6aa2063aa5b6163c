"""Diagrams: composites of generator placements and family moves.

An n-diagram is stored as its source (an (n-1)-diagram) together with an
ordered list of :class:`~globular_core.ncell.NCell` records.  Slice ``k`` is
the source rewritten by cells ``0..k-1``; the target boundary is the last
slice.  A 0-diagram has no source and exactly one cell.

Search operations (``enumerate``, ``matches_at``, slicing) work on copies, so
a diagram only changes when ``rewrite`` or ``attach`` commit a result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .boundary import (
    Boundary,
    BoundaryPath,
    BoundingBox,
    Coordinates,
    add_coordinates,
    elementwise_max,
    format_boundary_path,
    parse_boundary_path,
    unit_offset,
)
from .config import get_engine_config
from .errors import DimensionMismatch, InvalidMove, NotFound, StructuralMismatch
from .logging_utils import debug_log_call
from .matching import Inclusion, Match, as_coordinates
from .ncell import NCell

if TYPE_CHECKING:  # pragma: no cover
    from .families.base import Drag, DragOption, FamilyRegistry, SingularityFamily
    from .signature import Signature

logger = logging.getLogger(__name__)


class Diagram:
    def __init__(self, signature: "Signature", source: Optional["Diagram"], cells: Optional[Iterable[NCell]] = None):
        self.signature = signature
        self.source = source
        self.cells: List[NCell] = list(cells or [])
        if source is None and len(self.cells) != 1:
            raise DimensionMismatch("a 0-diagram holds exactly one cell")

    # ------------------------------------------------------------------
    # basic structure

    @property
    def dimension(self) -> int:
        return 0 if self.source is None else self.source.dimension + 1

    @property
    def families(self) -> "FamilyRegistry":
        return self.signature.families

    def copy(self) -> "Diagram":
        source = self.source.copy() if self.source is not None else None
        return Diagram(self.signature, source, self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Diagram):
            return NotImplemented
        return self.diagram_bijection(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Diagram(dim={self.dimension}, cells={self.cells!r})"

    def _require_boundary(self) -> "Diagram":
        if self.source is None:
            raise DimensionMismatch("a 0-diagram has no boundary")
        return self.source

    # ------------------------------------------------------------------
    # boundaries and slices

    def get_source_boundary(self) -> "Diagram":
        return self._require_boundary().copy()

    def get_target_boundary(self) -> "Diagram":
        self._require_boundary()
        return self.get_slice(len(self.cells))

    def get_boundary(self, boundary: Union[Boundary, str]) -> "Diagram":
        if parse_boundary_path(boundary) == (Boundary.SOURCE,):
            return self.get_source_boundary()
        return self.get_target_boundary()

    def boundary_along(self, path: Union[str, Sequence[object]]) -> "Diagram":
        """Follow a boundary path, e.g. ``'ss'`` for the source of the source."""

        current = self
        for token in parse_boundary_path(path):  # type: ignore[arg-type]
            current = current.get_boundary(token)
        return current

    def get_slice(self, x: int) -> "Diagram":
        source = self._require_boundary()
        if not 0 <= x <= len(self.cells):
            raise IndexError(f"slice {x} out of range for a diagram with {len(self.cells)} cells")
        current = source.copy()
        for cell in self.cells[:x]:
            current.rewrite(cell)
        return current

    def slices(self) -> Iterator["Diagram"]:
        """Yield every slice from the source up to the target."""

        current = self._require_boundary().copy()
        yield current.copy()
        for cell in self.cells:
            current.rewrite(cell)
            yield current.copy()

    # ------------------------------------------------------------------
    # geometry

    def _lookup(self, cell: NCell) -> Optional[Tuple["SingularityFamily", object]]:
        return self.families.lookup(cell.id)

    def source_size(self, x: int) -> int:
        """Number of slice cells consumed by the cell at height ``x``."""

        cell = self.cells[x]
        found = self._lookup(cell)
        if found is not None:
            family, move = found
            return family.source_region(self.get_slice(x), move, cell.position)[1]
        return self.signature.get_generator(cell.id).source_size

    def target_size(self, x: int) -> int:
        """Number of slice cells produced by the cell at height ``x``."""

        cell = self.cells[x]
        found = self._lookup(cell)
        if found is not None:
            family, move = found
            return family.target_size(self.get_slice(x), move, cell.position)
        return self.signature.get_generator(cell.id).target_size

    def cell_span(self, x: int, boundary: Boundary = Boundary.SOURCE) -> Tuple[int, int]:
        """Interval of slice heights covered by the source (or target) of cell ``x``."""

        start = self.cells[x].height
        size = self.source_size(x) if boundary is Boundary.SOURCE else self.target_size(x)
        return start, start + size

    def full_dimensions(self) -> Coordinates:
        """Extent per dimension: widest slice in every lower dimension, then the cell count."""

        if self.source is None:
            return ()
        rows = [slice_.full_dimensions() for slice_ in self.slices()]
        return elementwise_max(rows, self.dimension - 1) + (len(self.cells),)

    def get_slice_bounding_box(self, x: int) -> BoundingBox:
        cell = self.cells[x]
        found = self._lookup(cell)
        if found is not None:
            family, move = found
            return family.interchanger_bounding_box(self.get_slice(x), move, cell.position)
        generator = self.signature.get_generator(cell.id)
        assert generator.source is not None and cell.coordinates is not None
        size = generator.source.full_dimensions()
        return BoundingBox(cell.coordinates, add_coordinates(cell.coordinates, size))

    # ------------------------------------------------------------------
    # structural comparison and search

    def diagram_bijection(self, other: "Diagram") -> bool:
        """Structural equality: same dimension, boundaries and cell sequences."""

        if self.dimension != other.dimension:
            return False
        if self.cells != other.cells:
            return False
        if self.source is None or other.source is None:
            return self.source is None and other.source is None
        return self.source.diagram_bijection(other.source)

    def boost(self) -> "Diagram":
        """Wrap this diagram as its own identity one dimension up (in place)."""

        self.source = Diagram(self.signature, self.source, self.cells)
        self.cells = []
        return self

    def _cells_agree(self, needle: "Diagram", prefix: Coordinates, height: int) -> bool:
        if height < 0 or height + len(needle.cells) > len(self.cells):
            return False
        for index, cell in enumerate(needle.cells):
            if self.cells[height + index] != cell.moved(prefix):
                return False
        return True

    def matches_at(self, needle: "Diagram", coordinates: Union[Inclusion, Match, Sequence[int]]) -> bool:
        """Check a single placement of ``needle`` without searching for others."""

        coords = as_coordinates(coordinates)
        if needle.dimension != self.dimension:
            raise DimensionMismatch(
                f"cannot place a {needle.dimension}-diagram in a {self.dimension}-diagram"
            )
        if len(coords) != self.dimension:
            return False
        if self.source is None:
            return self.cells[0].id == needle.cells[0].id
        height = coords[-1]
        prefix = coords[:-1]
        if not self._cells_agree(needle, prefix, height):
            return False
        assert needle.source is not None
        return self.get_slice(height).matches_at(needle.source, prefix)

    def _inclusions(self, needle: "Diagram") -> Iterator[Coordinates]:
        if self.source is None:
            if self.cells[0].id == needle.cells[0].id:
                yield ()
            return
        assert needle.source is not None
        last = len(self.cells) - len(needle.cells)
        current = self.source.copy()
        for height in range(last + 1):
            for prefix in current._inclusions(needle.source):
                if self._cells_agree(needle, prefix, height):
                    yield prefix + (height,)
            if height < last:
                current.rewrite(self.cells[height])

    @debug_log_call(logger, name="Diagram.enumerate")
    def enumerate(self, needle: "Diagram") -> List[Inclusion]:
        """Every structure-preserving inclusion of ``needle`` (same dimension) into this diagram.

        Results are ordered by height, then by the order of the inclusions of
        ``needle``'s source into the slice at that height.  The engine
        configuration's ``max_matches`` truncates the list.
        """

        if needle.dimension != self.dimension:
            raise DimensionMismatch(
                f"cannot enumerate a {needle.dimension}-diagram in a {self.dimension}-diagram;"
                " boost the needle first"
            )
        limit = get_engine_config().max_matches
        found: List[Inclusion] = []
        if limit == 0:
            return found
        for coords in self._inclusions(needle):
            found.append(Inclusion(coords, len(needle.cells)))
            if limit is not None and len(found) >= limit:
                break
        return found

    # ------------------------------------------------------------------
    # mutation

    def _substitute(self, old: "Diagram", new: "Diagram", coordinates: Coordinates) -> None:
        if not self.matches_at(old, coordinates):
            raise StructuralMismatch(
                f"region at {list(coordinates)} does not match the expected {old.dimension}-diagram"
            )
        prefix = coordinates[:-1]
        height = coordinates[-1] if coordinates else 0
        self.cells[height:height + len(old.cells)] = [cell.moved(prefix) for cell in new.cells]

    def rewrite(self, cell: NCell) -> "Diagram":
        """Apply one (n+1)-cell to this n-diagram in place."""

        found = self._lookup(cell)
        if found is not None:
            family, move = found
            if not family.acts_on(self.dimension):
                raise DimensionMismatch(f"{cell.id} does not act on {self.dimension}-diagrams")
            key = cell.position
            if not family.interchanger_allowed(self, move, key):
                raise InvalidMove(cell.id, key)
            start, length = family.source_region(self, move, key)
            replacement = family.rewrite_paste_data(self, move, key)
            self.cells[start:start + length] = replacement
            return self

        generator = self.signature.get_generator(cell.id)
        if generator.dimension != self.dimension + 1:
            raise DimensionMismatch(
                f"generator {cell.id} is a {generator.dimension}-cell and cannot rewrite a "
                f"{self.dimension}-diagram"
            )
        if cell.coordinates is None:
            raise StructuralMismatch(f"placement of {cell.id} carries no coordinates")
        assert generator.source is not None and generator.target is not None
        self._substitute(generator.source, generator.target, cell.coordinates)
        return self

    @debug_log_call(logger, name="Diagram.attach", log_result=False)
    def attach(
        self,
        attached: "Diagram",
        boundary_path: Union[str, Sequence[object]],
        inclusion: Union[Inclusion, Match, Sequence[int]],
    ) -> "Diagram":
        """Compose ``attached`` onto the boundary named by ``boundary_path``.

        The path has one token per boundary step: ``'t'`` appends a diagram of
        the same dimension on top, ``'s'`` prepends it below, and longer paths
        (``'tt'``, ``'ss'``...) whisker a lower-dimensional diagram into every
        slice.  ``inclusion`` is the location found by a prior enumeration.
        The diagram is left untouched when the region does not agree.
        """

        path = parse_boundary_path(boundary_path)  # type: ignore[arg-type]
        coords = as_coordinates(inclusion)
        if not path:
            raise StructuralMismatch("attachment needs a non-empty boundary path")
        if len(set(path)) != 1:
            raise StructuralMismatch(f"mixed boundary path {format_boundary_path(path)!r}")
        if attached.dimension < 1:
            raise DimensionMismatch("0-cells can never be attached")
        if self.dimension - attached.dimension != len(path) - 1:
            raise DimensionMismatch(
                f"a {attached.dimension}-diagram attaches to a {self.dimension}-diagram along a path "
                f"of length {self.dimension - attached.dimension + 1}, got {format_boundary_path(path)!r}"
            )

        work = self.copy()
        work._attach(attached, path, coords)
        self.source = work.source
        self.cells = work.cells
        return self

    def _attach(self, attached: "Diagram", path: BoundaryPath, coordinates: Coordinates) -> None:
        side = path[0]
        if len(path) == 1:
            placed = [cell.moved(coordinates) for cell in attached.cells]
            if side is Boundary.TARGET:
                assert attached.source is not None
                if not self.get_target_boundary().matches_at(attached.source, coordinates):
                    raise StructuralMismatch(
                        f"source of the attached diagram does not match the target at {list(coordinates)}"
                    )
                self.cells.extend(placed)
            else:
                self._require_boundary()._substitute(
                    attached.get_target_boundary(), attached.get_source_boundary(), coordinates
                )
                self.cells[0:0] = placed
            return

        self._require_boundary()._attach(attached, path[1:], coordinates)
        if side is Boundary.SOURCE:
            offsets = unit_offset(self.dimension - 1, attached.dimension - 1, len(attached.cells))
            self.cells = [cell.moved(offsets) for cell in self.cells]

    # ------------------------------------------------------------------
    # singularity family dispatch

    def _family_move(self, move: object) -> Tuple["SingularityFamily", object]:
        name = getattr(move, "value", move)
        found = self.families.lookup(str(name))
        if found is None:
            raise NotFound(str(name), f"unknown move type {name!r}")
        return found

    def expand(self, move: object, *args: int) -> List[NCell]:
        family, member = self._family_move(move)
        return family.expand(self, member, *args)

    def interchanger_allowed(self, move: object, key: Sequence[int]) -> bool:
        family, member = self._family_move(move)
        return family.interchanger_allowed(self, member, tuple(key))

    def rewrite_paste_data(self, move: object, key: Sequence[int]) -> List[NCell]:
        family, member = self._family_move(move)
        return family.rewrite_paste_data(self, member, tuple(key))

    def get_interchanger_coordinates(self, move: object, key: Sequence[int]) -> Coordinates:
        family, member = self._family_move(move)
        return family.interchanger_coordinates(self, member, tuple(key))

    def get_interchanger_bounding_box(self, move: object, key: Sequence[int]) -> BoundingBox:
        family, member = self._family_move(move)
        return family.interchanger_bounding_box(self, member, tuple(key))

    def get_inverse_key(self, move: object, key: Sequence[int]) -> Coordinates:
        family, member = self._family_move(move)
        return family.inverse_key(self, member, tuple(key))

    def get_drag_options(self, moves: Sequence[object], key: Sequence[int]) -> List["DragOption"]:
        options = []
        for move in moves:
            family, member = self._family_move(move)
            options.extend(family.drag_options(self, [member], tuple(key)))
        return options

    def interpret_drag(self, drag: "Drag") -> Optional["DragOption"]:
        """Ask each family acting on this diagram to interpret ``drag``; first answer wins."""

        for family in self.families.families_for_dimension(self.dimension + 1):
            option = family.interpret_drag(self, drag)
            if option is not None:
                return option
        logger.debug("No family interprets drag %s on a %d-diagram", drag, self.dimension)
        return None

    @staticmethod
    def instructions_equiv(first: Sequence[NCell], second: Sequence[NCell]) -> bool:
        """Cell-for-cell equality of two instruction lists."""

        return list(first) == list(second)
