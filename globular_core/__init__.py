from .errors import DimensionMismatch, GlobularError, InvalidMove, NotFound, StructuralMismatch
from .boundary import Boundary, BoundingBox, parse_boundary_path
from .config import EngineConfig, get_engine_config, set_engine_config
from .ncell import NCell
from .diagram import Diagram
from .generator import Generator, check_globularity
from .signature import Signature, SignatureLevel
from .matching import Inclusion, Match, find_matches, limit_matches
from .families import (
    Drag,
    DragOption,
    FamilyDescriptor,
    FamilyRegistry,
    InterchangerFamily,
    InterchangerMove,
    PullThroughFamily,
    PullThroughMove,
    SingularityFamily,
    build_default_registry,
)
from .attachment import AttachMode, EnumerationData, commit_attachment, prepare_attachment
from .project import Project
from .printer import format_cell, format_diagram, format_signature

__all__ = [
    'GlobularError',
    'StructuralMismatch',
    'DimensionMismatch',
    'NotFound',
    'InvalidMove',
    'Boundary',
    'BoundingBox',
    'parse_boundary_path',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'NCell',
    'Diagram',
    'Generator',
    'check_globularity',
    'Signature',
    'SignatureLevel',
    'Inclusion',
    'Match',
    'find_matches',
    'limit_matches',
    'Drag',
    'DragOption',
    'FamilyDescriptor',
    'FamilyRegistry',
    'SingularityFamily',
    'InterchangerFamily',
    'InterchangerMove',
    'PullThroughFamily',
    'PullThroughMove',
    'build_default_registry',
    'AttachMode',
    'EnumerationData',
    'prepare_attachment',
    'commit_attachment',
    'Project',
    'format_cell',
    'format_diagram',
    'format_signature',
]
