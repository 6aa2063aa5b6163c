import pytest

from globular_core import Boundary, Inclusion, Match, find_matches, limit_matches
from globular_core.errors import DimensionMismatch
from globular_core.matching import as_coordinates, navigate


def test_inclusion_mapping_and_anchors():
    inclusion = Inclusion((1, 2), 3)

    assert inclusion.height == 2
    assert inclusion.mapping == {0: 2, 1: 3, 2: 4}
    assert inclusion.touches([4])
    assert not inclusion.touches([0, 1, 5])


def test_as_coordinates_accepts_records_and_sequences():
    inclusion = Inclusion((0, 1), 1)

    assert as_coordinates(inclusion) == (0, 1)
    assert as_coordinates(Match(inclusion, (), (1, 1))) == (0, 1)
    assert as_coordinates([3, 4]) == (3, 4)


def test_find_matches_without_path_is_plain_enumeration(world):
    assert [m.coordinates for m in find_matches(world.strip(3), world.strip(2))] == [(0,), (1,)]


def test_find_matches_boosts_lower_dimensional_needles(world, side_by_side):
    f = world.signature.create_diagram("f")

    on_target = find_matches(side_by_side, f, "tt")
    on_source = find_matches(side_by_side, f, [Boundary.SOURCE, Boundary.SOURCE])

    assert [m.coordinates for m in on_target] == [()]
    assert [m.coordinates for m in on_source] == [()]


def test_find_matches_pairs_source_with_target(world):
    host = world.strip(3)
    merge = world.signature.create_diagram("m")

    assert len(find_matches(host, merge.get_target_boundary(), "")) == 3
    assert [m.coordinates for m in find_matches(world.surface(3, []), merge, "s")] == [(0,), (1,), (2,)]
    assert [m.coordinates for m in find_matches(world.surface(3, []), merge, "t")] == [(0,), (1,)]


def test_find_matches_rejects_larger_needles(world):
    with pytest.raises(DimensionMismatch):
        find_matches(world.strip(2), world.signature.create_diagram("a"))


def test_navigate_walks_opposite_boundaries(world, side_by_side):
    host, needle = navigate(side_by_side, world.signature.create_diagram("m"), (Boundary.SOURCE,))

    assert host == world.strip(2)
    assert needle == world.strip(1)


def test_limit_matches_keeps_matches_touching_anchors():
    matches = [Inclusion((0,), 2), Inclusion((1,), 2), Inclusion((2,), 2)]

    assert limit_matches(matches, [0]) == [matches[0]]
    assert limit_matches(matches, [2]) == [matches[1], matches[2]]
    assert limit_matches(matches, []) == []

    wrapped = [Match(inclusion, (Boundary.TARGET,), (2,)) for inclusion in matches]
    assert limit_matches(wrapped, [3]) == [wrapped[2]]
