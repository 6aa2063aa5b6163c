from typing import List

from .diagram import Diagram
from .ncell import NCell
from .signature import Signature


def format_cell(cell: NCell) -> str:
    if cell.coordinates is not None:
        return f"{cell.id}@[{','.join(str(v) for v in cell.coordinates)}]"
    return f"{cell.id}#[{','.join(str(v) for v in (cell.key or ()))}]"


def format_cells(cells: List[NCell]) -> str:
    return " ".join(format_cell(cell) for cell in cells) or "(identity)"


def format_diagram(diagram: Diagram, indent: str = "") -> str:
    """Render a diagram one dimension per line, innermost source last."""

    lines = []
    current = diagram
    pad = indent
    while current is not None:
        lines.append(f"{pad}{current.dimension}: {format_cells(current.cells)}")
        current = current.source
        pad += "  "
    return "\n".join(lines)


def format_signature(signature: Signature) -> str:
    lines = []
    for level in signature.levels:
        parts = []
        for identifier in level.identifiers:
            generator = level.get(identifier)
            if generator is None or generator.source is None or generator.target is None:
                parts.append(identifier)
                continue
            parts.append(
                f"{identifier}: {format_cells(generator.source.cells)} -> {format_cells(generator.target.cells)}"
            )
        lines.append(f"{level.dimension}-cells: " + ("; ".join(parts) if parts else "(none)"))
    return "\n".join(lines)
