"""Dimension-indexed hierarchy of generators."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Dict, List, Optional

from .diagram import Diagram
from .errors import DimensionMismatch, NotFound
from .generator import Generator
from .ncell import NCell

if TYPE_CHECKING:  # pragma: no cover
    from .families.base import FamilyRegistry

logger = logging.getLogger(__name__)


class SignatureLevel:
    """Generators of one fixed dimension, in insertion order."""

    def __init__(self, dimension: int, owner: "Signature") -> None:
        self.dimension = dimension
        self._owner = owner
        self._generators: Dict[str, Generator] = {}

    def __len__(self) -> int:
        return len(self._generators)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._generators

    @property
    def identifiers(self) -> List[str]:
        return list(self._generators)

    def get(self, identifier: str) -> Optional[Generator]:
        return self._generators.get(identifier)

    def add_generator(self, generator: Generator) -> Generator:
        if generator.dimension != self.dimension:
            raise DimensionMismatch(
                f"cannot store a {generator.dimension}-cell at signature level {self.dimension}"
            )
        identifier = generator.identifier or self._owner._fresh_identifier(self.dimension)
        self._owner._claim_identifier(identifier)
        stored = replace(generator, identifier=identifier)
        self._generators[identifier] = stored
        logger.info("Added %d-cell %s to signature", self.dimension, identifier)
        return stored


class Signature:
    """Owned, indexed sequence of levels; ``levels[k]`` stores the k-cells.

    The signature also carries the singularity-family registry so every
    diagram built on it can dispatch family moves.
    """

    def __init__(self, families: "FamilyRegistry", top_dimension: int = 0) -> None:
        self.families = families
        self._counter = 0
        self.levels: List[SignatureLevel] = []
        for dimension in range(top_dimension + 1):
            self.levels.append(SignatureLevel(dimension, self))

    @property
    def n(self) -> int:
        """Dimension of the top level."""

        return len(self.levels) - 1

    def level(self, dimension: int) -> SignatureLevel:
        if dimension < 0 or dimension > self.n:
            raise DimensionMismatch(f"signature has no level {dimension} (top is {self.n})")
        return self.levels[dimension]

    def lift(self) -> SignatureLevel:
        level = SignatureLevel(self.n + 1, self)
        self.levels.append(level)
        logger.debug("Signature lifted to dimension %d", level.dimension)
        return level

    def add_generator(self, generator: Generator) -> Generator:
        """Store ``generator`` at the top level."""

        return self.levels[-1].add_generator(generator)

    def get_generator(self, identifier: str) -> Generator:
        for level in self.levels:
            generator = level.get(identifier)
            if generator is not None:
                return generator
        raise NotFound(identifier, f"no generator {identifier!r} in signature")

    def has_generator(self, identifier: str) -> bool:
        return any(identifier in level for level in self.levels)

    def create_diagram(self, identifier: str) -> Diagram:
        """Return the generator ``identifier`` as a diagram with a single cell."""

        generator = self.get_generator(identifier)
        if generator.source is None:
            return Diagram(self, None, [NCell(generator.identifier, ())])
        placement = NCell(generator.identifier, tuple([0] * (generator.dimension - 1)))
        return Diagram(self, generator.source.copy(), [placement])

    def get_cells(self) -> List[List[str]]:
        return [level.identifiers for level in self.levels]

    def _fresh_identifier(self, dimension: int) -> str:
        while True:
            self._counter += 1
            candidate = f"{dimension}-cell-{self._counter}"
            if not self.has_generator(candidate) and not self.families.is_move(candidate):
                return candidate

    def _claim_identifier(self, identifier: str) -> None:
        if self.has_generator(identifier):
            raise ValueError(f"generator identifier {identifier!r} already in use")
        if self.families.is_move(identifier):
            raise ValueError(f"generator identifier {identifier!r} clashes with a family move")
