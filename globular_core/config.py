"""Configuration helpers for the diagram engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Tunables shared by enumeration and generator creation."""

    max_matches: Optional[int] = None
    check_globularity: bool = True


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    if config.max_matches is not None and config.max_matches < 0:
        raise ValueError("max_matches must be non-negative")
    _ENGINE_CONFIG = copy.deepcopy(config)
