import pytest

from globular_core import BoundingBox, Diagram, EngineConfig, NCell, set_engine_config
from globular_core.errors import DimensionMismatch, InvalidMove, NotFound, StructuralMismatch


def test_zero_diagram_holds_exactly_one_cell(world):
    with pytest.raises(DimensionMismatch):
        Diagram(world.signature, None, [])

    point = world.signature.create_diagram("x")
    with pytest.raises(DimensionMismatch):
        point.get_source_boundary()
    with pytest.raises(DimensionMismatch):
        point.get_slice(0)


def test_slices_follow_the_cells(world, side_by_side):
    assert side_by_side.dimension == 2
    assert side_by_side.get_slice(0) == world.strip(2)
    assert side_by_side.get_target_boundary() == world.strip(2)
    assert len(list(side_by_side.slices())) == 3
    with pytest.raises(IndexError):
        side_by_side.get_slice(3)


def test_target_boundary_applies_every_cell(world):
    diagram = world.surface(3, [("m", 1)])

    assert diagram.get_target_boundary() == world.strip(2)
    assert diagram.get_boundary("source") == world.strip(3)
    assert diagram.boundary_along("ts") == world.signature.create_diagram("x")


def test_globularity_law_for_composites(pulled, side_by_side):
    for diagram in (pulled, side_by_side):
        source = diagram.get_source_boundary()
        target = diagram.get_target_boundary()
        assert source.get_source_boundary() == target.get_source_boundary()
        assert source.get_target_boundary() == target.get_target_boundary()


@pytest.mark.parametrize("times", [1, 2, 3])
def test_boost_then_boundaries_recovers_original(side_by_side, times):
    boosted = side_by_side.copy()
    for _ in range(times):
        boosted.boost()

    assert boosted.dimension == side_by_side.dimension + times
    source, target = boosted, boosted
    for _ in range(times):
        source = source.get_source_boundary()
        target = target.get_target_boundary()
    assert source == side_by_side
    assert target == side_by_side


def test_diagram_bijection_is_structural(world, side_by_side):
    assert side_by_side == world.surface(2, [("a", 1), ("b", 0)])
    assert side_by_side != world.surface(2, [("b", 0), ("a", 1)])
    assert side_by_side != world.strip(2)
    assert not side_by_side.diagram_bijection(world.surface(3, [("a", 1), ("b", 0)]))


def test_full_dimensions(world, side_by_side, pulled):
    assert world.signature.create_diagram("x").full_dimensions() == ()
    assert world.strip(3).full_dimensions() == (3,)
    assert side_by_side.full_dimensions() == (2, 2)
    assert world.surface(2, [("m", 0)]).full_dimensions() == (2, 1)
    assert pulled.full_dimensions() == (2, 2, 2)


def test_slice_bounding_boxes(side_by_side, pulled):
    assert side_by_side.get_slice_bounding_box(0) == BoundingBox((1,), (2,))
    assert side_by_side.get_slice_bounding_box(1) == BoundingBox((0,), (1,))
    assert pulled.get_slice_bounding_box(0) == BoundingBox((1, 0), (2, 1))
    assert pulled.get_slice_bounding_box(1) == BoundingBox((0, 0), (2, 2))


def test_source_and_target_sizes(world, pulled):
    merge = world.surface(3, [("m", 1)])

    assert merge.source_size(0) == 2
    assert merge.target_size(0) == 1
    assert merge.cell_span(0) == (1, 3)
    assert pulled.source_size(1) == 2
    assert pulled.target_size(1) == 2


def test_enumerate_lists_every_inclusion_in_order(world):
    haystack = world.strip(3)

    matches = haystack.enumerate(world.strip(2))

    assert [match.coordinates for match in matches] == [(0,), (1,)]
    assert [match.length for match in matches] == [2, 2]
    assert haystack.enumerate(world.strip(2)) == matches
    assert haystack.enumerate(world.strip(4)) == []


def test_enumerate_respects_max_matches(world):
    set_engine_config(EngineConfig(max_matches=1))

    assert [m.coordinates for m in world.strip(4).enumerate(world.strip(1))] == [(0,)]


def test_enumerate_in_two_dimensions(world, side_by_side):
    b = world.signature.create_diagram("b")
    a = world.signature.create_diagram("a")

    assert [m.coordinates for m in side_by_side.enumerate(b)] == [(0, 1)]
    assert [m.coordinates for m in side_by_side.enumerate(a)] == [(1, 0)]
    assert side_by_side.enumerate(world.signature.create_diagram("m")) == []


def test_enumerate_includes_identity(side_by_side, pulled, world):
    for diagram in (side_by_side, pulled, world.strip(2)):
        found = [m.coordinates for m in diagram.enumerate(diagram.copy())]
        assert tuple([0] * diagram.dimension) in found


def test_enumerate_requires_equal_dimension(world, side_by_side):
    with pytest.raises(DimensionMismatch):
        side_by_side.enumerate(world.strip(1))


def test_matches_at_checks_single_site(world, side_by_side):
    b = world.signature.create_diagram("b")

    assert side_by_side.matches_at(b, (0, 1))
    assert not side_by_side.matches_at(b, (1, 1))
    assert not side_by_side.matches_at(b, (0, 5))
    assert not side_by_side.matches_at(b, (0,))


def test_rewrite_with_generator(world):
    diagram = world.strip(3)

    diagram.rewrite(NCell("m", (1,)))

    assert diagram == world.strip(2)


def test_rewrite_mismatch_leaves_diagram_untouched(world, side_by_side):
    before = side_by_side.copy()

    with pytest.raises(StructuralMismatch):
        side_by_side.rewrite(NCell("g", (0, 0)))
    with pytest.raises(NotFound):
        side_by_side.rewrite(NCell("zzz", (0,)))
    with pytest.raises(DimensionMismatch):
        side_by_side.rewrite(NCell("a", (0,)))

    assert side_by_side == before


def test_rewrite_with_family_move(world, side_by_side):
    side_by_side.rewrite(NCell("Int", key=(0,)))

    assert side_by_side == world.surface(2, [("b", 0), ("a", 1)])

    with pytest.raises(InvalidMove) as excinfo:
        side_by_side.rewrite(NCell("Int", key=(0,)))
    assert excinfo.value.move == "Int"
    assert excinfo.value.key == (0,)
    with pytest.raises(DimensionMismatch):
        world.strip(2).rewrite(NCell("Int", key=(0,)))


def test_attach_on_target_stacks_cells(world):
    diagram = world.surface(1, [("a", 0)])

    diagram.attach(world.signature.create_diagram("b"), "t", (0,))

    assert diagram == world.surface(1, [("a", 0), ("b", 0)])


def test_attach_on_source_prepends_cells(world):
    diagram = world.surface(1, [("a", 0)])

    diagram.attach(world.signature.create_diagram("m"), "s", (0,))

    assert diagram == world.surface(2, [("m", 0), ("a", 0)])


def test_whiskering_on_source_shifts_existing_cells(world):
    diagram = world.surface(1, [("a", 0)])

    diagram.attach(world.signature.create_diagram("f"), "ss", ())

    assert diagram == world.surface(2, [("a", 1)])


def test_whiskering_on_target_keeps_positions(world):
    diagram = world.surface(1, [("a", 0)])

    diagram.attach(world.signature.create_diagram("f"), ["target", "target"], ())

    assert diagram == world.surface(2, [("a", 0)])


def test_attach_validation(world):
    diagram = world.surface(1, [("a", 0)])
    before = diagram.copy()
    m = world.signature.create_diagram("m")

    with pytest.raises(StructuralMismatch):
        diagram.attach(m, "t", (0,))
    with pytest.raises(StructuralMismatch):
        diagram.attach(world.signature.create_diagram("f"), "st", ())
    with pytest.raises(DimensionMismatch):
        diagram.attach(world.signature.create_diagram("f"), "t", ())
    with pytest.raises(DimensionMismatch):
        diagram.attach(world.signature.create_diagram("x"), "sss", ())

    assert diagram == before


def test_instructions_equiv():
    cells = [NCell("Int", key=(0,)), NCell("Int", key=(1,))]

    assert Diagram.instructions_equiv(cells, list(cells))
    assert not Diagram.instructions_equiv(cells, cells[::-1])
