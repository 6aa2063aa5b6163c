from types import SimpleNamespace

import pytest

from globular_core import (
    Diagram,
    Generator,
    NCell,
    Signature,
    build_default_registry,
    get_engine_config,
    set_engine_config,
)


@pytest.fixture(scope="session")
def registry():
    return build_default_registry()


@pytest.fixture(autouse=True)
def _restore_engine_config():
    previous = get_engine_config()
    yield
    set_engine_config(previous)


def strip(signature, width):
    """1-diagram ``f f ... f`` on the 0-cell ``x``."""

    x = signature.create_diagram("x")
    return Diagram(signature, x, [NCell("f", ()) for _ in range(width)])


def surface(signature, width, placements):
    """2-diagram over ``strip(width)`` with ``(id, position)`` placements from bottom to top."""

    return Diagram(signature, strip(signature, width), [NCell(name, (pos,)) for name, pos in placements])


@pytest.fixture
def world(registry):
    """Signature with ``x``; ``f: x -> x``; ``a, b: f -> f``; ``m: ff -> f``;
    3-cells ``g: a -> b``, ``w: a -> a`` and ``k: aaa -> a``."""

    signature = Signature(registry)
    signature.level(0).add_generator(Generator(None, None, "x"))
    for _ in range(3):
        signature.lift()
    x = signature.create_diagram("x")
    signature.level(1).add_generator(Generator(x, x.copy(), "f"))
    f = strip(signature, 1)
    signature.level(2).add_generator(Generator(f, f.copy(), "a"))
    signature.level(2).add_generator(Generator(f.copy(), f.copy(), "b"))
    signature.level(2).add_generator(Generator(strip(signature, 2), f.copy(), "m"))
    a = surface(signature, 1, [("a", 0)])
    signature.level(3).add_generator(Generator(a, surface(signature, 1, [("b", 0)]), "g"))
    signature.level(3).add_generator(Generator(a.copy(), a.copy(), "w"))
    signature.level(3).add_generator(
        Generator(surface(signature, 1, [("a", 0)] * 3), a.copy(), "k")
    )
    return SimpleNamespace(
        signature=signature,
        strip=lambda width: strip(signature, width),
        surface=lambda width, placements: surface(signature, width, placements),
    )


@pytest.fixture
def side_by_side(world):
    """``a`` on the right strand, then ``b`` on the left strand."""

    return world.surface(2, [("a", 1), ("b", 0)])


@pytest.fixture
def pulled(world, side_by_side):
    """3-diagram: ``g`` turns ``a`` into ``b``, then the two ``b`` cells are interchanged."""

    return Diagram(world.signature, side_by_side, [NCell("g", (1, 0)), NCell("Int", key=(0,))])
