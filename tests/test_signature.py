import re

import pytest

from globular_core import Diagram, Generator, NCell, Signature, check_globularity
from globular_core.errors import DimensionMismatch, NotFound, StructuralMismatch


def test_add_generator_assigns_unique_identifiers(registry):
    signature = Signature(registry)

    first = signature.add_generator(Generator(None, None))
    second = signature.add_generator(Generator(None, None))

    assert re.fullmatch(r"0-cell-\d+", first.identifier)
    assert first.identifier != second.identifier
    assert signature.get_cells() == [[first.identifier, second.identifier]]


def test_add_generator_rejects_wrong_level(world):
    with pytest.raises(DimensionMismatch):
        world.signature.level(1).add_generator(Generator(None, None, "y"))


def test_add_generator_rejects_taken_and_reserved_names(world):
    with pytest.raises(ValueError):
        world.signature.level(0).add_generator(Generator(None, None, "x"))
    with pytest.raises(ValueError):
        world.signature.level(0).add_generator(Generator(None, None, "Int-L"))


def test_generator_needs_both_boundaries(world):
    with pytest.raises(DimensionMismatch):
        Generator(world.strip(1), None)
    with pytest.raises(DimensionMismatch):
        Generator(world.strip(1), world.surface(1, [("a", 0)]))


def test_get_generator_searches_every_level(world):
    assert world.signature.get_generator("x").dimension == 0
    assert world.signature.get_generator("m").source_size == 2
    assert world.signature.get_generator("k").target_size == 1
    with pytest.raises(NotFound) as excinfo:
        world.signature.get_generator("nope")
    assert excinfo.value.identifier == "nope"


def test_levels_and_cells_listing(world):
    signature = world.signature

    assert signature.n == 3
    assert signature.get_cells() == [["x"], ["f"], ["a", "b", "m"], ["g", "w", "k"]]
    with pytest.raises(DimensionMismatch):
        signature.level(4)

    signature.lift()
    assert signature.n == 4
    assert len(signature.level(4)) == 0


def test_create_diagram_places_generator_at_origin(world):
    point = world.signature.create_diagram("x")
    assert point.dimension == 0
    assert point.cells == [NCell("x", ())]

    g = world.signature.create_diagram("g")
    assert g.dimension == 3
    assert g.cells == [NCell("g", (0, 0))]
    assert g.get_source_boundary() == world.surface(1, [("a", 0)])
    assert g.get_target_boundary() == world.surface(1, [("b", 0)])


def test_check_globularity(world):
    check_globularity(world.surface(1, [("a", 0)]), world.surface(1, [("b", 0)]))
    check_globularity(world.strip(2), world.strip(5))

    with pytest.raises(StructuralMismatch):
        check_globularity(world.surface(1, [("a", 0)]), world.surface(2, [("m", 0)]))
    with pytest.raises(DimensionMismatch):
        check_globularity(world.strip(1), world.surface(1, [("a", 0)]))


def test_globularity_law_holds_for_generator_boundaries(world):
    for identifier in ["a", "m", "g", "k"]:
        diagram = world.signature.create_diagram(identifier)
        source = diagram.get_source_boundary()
        target = diagram.get_target_boundary()
        assert source.get_source_boundary() == target.get_source_boundary()
        assert source.get_target_boundary() == target.get_target_boundary()


def test_generator_diagrams_are_independent_copies(world):
    diagram = world.signature.create_diagram("a")
    diagram.source.cells.append(NCell("f", ()))

    assert world.signature.get_generator("a").source.cells == [NCell("f", ())]
    assert isinstance(diagram, Diagram)
