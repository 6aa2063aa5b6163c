"""DEBUG call tracing for the engine's public entry points.

Arguments and results are rendered with :func:`describe`, which prints a
diagram as its dimension and leading cell ids instead of its full cell list,
so traces stay short while enumeration and rewriting walk through slices.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

_SHOWN_CELLS = 4
_SHOWN_ITEMS = 6

_short = reprlib.Repr()
_short.maxother = 120
_short.maxstring = 80


def _is_diagram(value: Any) -> bool:
    return hasattr(value, "cells") and hasattr(value, "dimension") and hasattr(value, "signature")


def describe(value: Any) -> str:
    """Short rendering of a traced value."""

    if _is_diagram(value):
        ids = [cell.id for cell in value.cells[:_SHOWN_CELLS]]
        if len(value.cells) > _SHOWN_CELLS:
            ids.append("...")
        body = " ".join(ids) if ids else "identity"
        return f"<{value.dimension}-diagram {len(value.cells)} cells: {body}>"
    if isinstance(value, (list, tuple)) and not hasattr(value, "_fields"):
        shown = ", ".join(describe(item) for item in value[:_SHOWN_ITEMS])
        if len(value) > _SHOWN_ITEMS:
            shown += f", ... ({len(value)} total)"
        return f"[{shown}]" if isinstance(value, list) else f"({shown})"
    return _short.repr(value)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorator logging entry, exit and raised errors of ``func`` at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, "_traced", False):
            return func
        label = name or func.__qualname__

        @wraps(func)
        def traced(*args: Any, **kwargs: Any) -> Any:
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            rendered = [describe(arg) for arg in args]
            rendered.extend(f"{key}={describe(value)}" for key, value in kwargs.items())
            logger.debug("-> %s(%s)", label, ", ".join(rendered))
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.debug("<- %s raised %s: %s", label, type(exc).__name__, exc)
                raise
            if log_result:
                logger.debug("<- %s = %s", label, describe(result))
            else:
                logger.debug("<- %s", label)
            return result

        traced._traced = True  # type: ignore[attr-defined]
        return cast(F, traced)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace the public functions and public methods of the classes defined in ``namespace``.

    ``skip`` holds names (``"func"``, ``"Class"`` or ``"Class.method"``) to
    leave alone; names starting with an underscore are never wrapped.
    """

    module = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module))
    skipped: Set[str] = set(skip or ())

    for name, value in list(namespace.items()):
        if name.startswith("_") or name in skipped or getattr(value, "__module__", None) != module:
            continue
        if inspect.isfunction(value):
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif inspect.isclass(value):
            for attr, member in list(vars(value).items()):
                qualified = f"{name}.{attr}"
                if attr.startswith("_") or qualified in skipped or not inspect.isfunction(member):
                    continue
                setattr(value, attr, debug_log_call(logger, name=qualified)(member))
