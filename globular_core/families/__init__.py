"""Singularity families shipped with the engine."""

from .base import Drag, DragOption, FamilyDescriptor, FamilyRegistry, SingularityFamily
from .interchanger import InterchangerFamily, InterchangerMove
from .pull_through import PullThroughFamily, PullThroughMove


def build_default_registry() -> FamilyRegistry:
    """Return a frozen registry holding the ``Int`` and ``IntL`` families."""

    interchangers = InterchangerFamily()
    registry = FamilyRegistry([interchangers, PullThroughFamily(interchangers)])
    return registry.freeze()


__all__ = [
    "Drag",
    "DragOption",
    "FamilyDescriptor",
    "FamilyRegistry",
    "SingularityFamily",
    "InterchangerFamily",
    "InterchangerMove",
    "PullThroughFamily",
    "PullThroughMove",
    "build_default_registry",
]
