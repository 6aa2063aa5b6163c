from typing import Callable, Dict, List, Tuple

from . import Diagram, Generator, NCell, Project
from .boundary import format_boundary_path
from .families import Drag
from .matching import Match
from .printer import format_diagram, format_signature

Snapshot = Tuple[str, Diagram]


def build_world(project: Project) -> Dict[str, Generator]:
    """Populate ``project`` with a small signature.

    ``f: x -> x``; 2-cells ``a, b: f -> f`` and ``m: ff -> f``; the 3-cell
    ``g: a -> b``.
    """

    signature = project.signature
    x = signature.create_diagram(project.list_generators()[0][0])
    while signature.n < 3:
        signature.lift()

    cells: Dict[str, Generator] = {}
    cells["f"] = signature.level(1).add_generator(Generator(x, x.copy(), "f"))
    f = signature.create_diagram("f")
    ff = Diagram(signature, x.copy(), [NCell("f", ()), NCell("f", ())])
    cells["a"] = signature.level(2).add_generator(Generator(f, f.copy(), "a"))
    cells["b"] = signature.level(2).add_generator(Generator(f.copy(), f.copy(), "b"))
    cells["m"] = signature.level(2).add_generator(Generator(ff, f.copy(), "m"))
    cells["g"] = signature.level(3).add_generator(
        Generator(signature.create_diagram("a"), signature.create_diagram("b"), "g")
    )
    return cells


def _pick(matches: List[Match], side: str, coordinates: Tuple[int, ...]) -> Match:
    for match in matches:
        if format_boundary_path(match.boundary_path)[:1] == side and match.inclusion.coordinates == coordinates:
            return match
    raise LookupError(f"no {side} match at {list(coordinates)}")


def _side_by_side(project: Project) -> Diagram:
    """Working diagram ``a`` on the right, ``b`` on the left above it."""

    project.clear_diagram()
    project.select_generator("a")
    whisker = project.select_generator("f")
    assert whisker is not None
    project.attach(whisker, _pick(whisker.matches, "s", ()))
    stacked = project.select_generator("b")
    assert stacked is not None
    project.attach(stacked, _pick(stacked.matches, "t", (0,)))
    return project.diagram  # type: ignore[return-value]


def interchange_scenario() -> List[Snapshot]:
    project = Project()
    build_world(project)
    diagram = _side_by_side(project)
    snapshots = [("before", diagram.copy())]
    project.click_cell(0)
    project.click_cell(1)
    snapshots.append(("after Int", diagram.copy()))
    return snapshots


def pull_through_scenario() -> List[Snapshot]:
    project = Project()
    build_world(project)
    _side_by_side(project)
    diagram = project.take_identity()
    rewrite = project.select_generator("g")
    assert rewrite is not None
    project.attach(rewrite, rewrite.matches[-1])
    swap = Diagram(project.signature, diagram.get_target_boundary(), [NCell("Int", key=(0,))])
    diagram.attach(swap, "t", (0, 0))
    snapshots = [("before", diagram.copy())]
    project.drag(Drag((1, 1), (0,)))
    snapshots.append(("after pull-through", diagram.copy()))
    return snapshots


def attach_scenario() -> List[Snapshot]:
    project = Project()
    build_world(project)
    project.select_generator("f")
    for _ in range(2):
        data = project.select_generator("f")
        assert data is not None
        project.attach(data, data.matches[-1])
    project.take_identity()
    snapshots = []
    for _ in range(2):
        data = project.select_generator("m")
        assert data is not None
        matches = [match for match in data.matches if format_boundary_path(match.boundary_path) == "t"]
        project.attach(data, matches[0])
        snapshots.append((f"after m ({len(matches)} site(s))", project.diagram.copy()))  # type: ignore[union-attr]
    return snapshots


SCENARIOS: Dict[str, Callable[[], List[Snapshot]]] = {
    "interchange": interchange_scenario,
    "pull-through": pull_through_scenario,
    "attach": attach_scenario,
}


def run(scenario: str = "interchange") -> None:
    project = Project()
    build_world(project)
    print(f"Signature:\n{format_signature(project.signature)}\n")
    for label, diagram in SCENARIOS[scenario]():
        print(f"{label}:\n{format_diagram(diagram, indent='  ')}\n")


if __name__ == "__main__":
    run()
