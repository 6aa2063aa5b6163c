from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import DimensionMismatch, StructuralMismatch

if TYPE_CHECKING:  # pragma: no cover
    from .diagram import Diagram


@dataclass(frozen=True, eq=False)
class Generator:
    """Atomic named morphism with a source and target one dimension lower.

    Generators are immutable; an empty ``identifier`` is filled in by the
    signature level that stores the generator.
    """

    source: Optional["Diagram"]
    target: Optional["Diagram"]
    identifier: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.source is None) != (self.target is None):
            raise DimensionMismatch("a generator needs both boundaries or neither")
        if self.source is not None and self.target is not None:
            if self.source.dimension != self.target.dimension:
                raise DimensionMismatch(
                    f"source is {self.source.dimension}-dimensional but target is "
                    f"{self.target.dimension}-dimensional"
                )

    @property
    def dimension(self) -> int:
        if self.source is None or self.target is None:
            return 0
        return 1 + max(self.source.dimension, self.target.dimension)

    @property
    def source_size(self) -> int:
        return len(self.source.cells) if self.source is not None else 0

    @property
    def target_size(self) -> int:
        return len(self.target.cells) if self.target is not None else 0


def check_globularity(source: "Diagram", target: "Diagram") -> None:
    """Raise unless ``source`` and ``target`` can bound a common generator."""

    if source.dimension != target.dimension:
        raise DimensionMismatch("source and target must be the same dimension")
    if source.dimension == 0:
        return
    if not source.get_source_boundary().diagram_bijection(target.get_source_boundary()):
        raise StructuralMismatch("source of source does not match source of target")
    if not source.get_target_boundary().diagram_bijection(target.get_target_boundary()):
        raise StructuralMismatch("target of source does not match target of target")
