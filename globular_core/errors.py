"""Error kinds raised by the diagram core."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class GlobularError(Exception):
    """Base class for every error raised by :mod:`globular_core`."""


class StructuralMismatch(GlobularError):
    """Raised when an attach/rewrite target disagrees with the located region."""


class DimensionMismatch(GlobularError, ValueError):
    """Raised when boundary or generator dimensions disagree."""


class NotFound(GlobularError, LookupError):
    """Raised for an unknown generator identifier or move type."""

    def __init__(self, identifier: str, message: Optional[str] = None):
        super().__init__(message or f"unknown identifier {identifier!r}")
        self.identifier = identifier


class InvalidMove(GlobularError):
    """Raised when ``interchanger_allowed`` rejects a requested move."""

    def __init__(self, move: str, key: Sequence[int], message: Optional[str] = None):
        self.move = move
        self.key: Tuple[int, ...] = tuple(key)
        super().__init__(message or f"move {move} not allowed at key {list(self.key)}")


__all__ = [
    "GlobularError",
    "StructuralMismatch",
    "DimensionMismatch",
    "NotFound",
    "InvalidMove",
]
