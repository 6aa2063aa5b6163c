from globular_core import NCell
from globular_core.printer import format_cell, format_cells, format_diagram, format_signature


def test_format_cell_marks_family_keys():
    assert format_cell(NCell("g", (1, 0))) == "g@[1,0]"
    assert format_cell(NCell("Int", key=(2,))) == "Int#[2]"
    assert format_cell(NCell("x", ())) == "x@[]"


def test_format_cells_names_identities():
    assert format_cells([]) == "(identity)"


def test_format_diagram_lists_each_dimension(side_by_side):
    assert format_diagram(side_by_side) == "2: a@[1] b@[0]\n  1: f@[] f@[]\n    0: x@[]"


def test_format_diagram_indents(world):
    assert format_diagram(world.strip(1), indent="> ") == "> 1: f@[]\n>   0: x@[]"


def test_format_signature(world):
    lines = format_signature(world.signature).splitlines()

    assert lines[0] == "0-cells: x"
    assert lines[1] == "1-cells: f: x@[] -> x@[]"
    assert lines[2].startswith("2-cells: a: f@[] -> f@[]; b: ")
    assert "m: f@[] f@[] -> f@[]" in lines[2]
    assert lines[3].startswith("3-cells: g: a@[0] -> b@[0]")
