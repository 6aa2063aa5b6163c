import logging

import pytest

from globular_core import NCell
from globular_core.logging_utils import apply_debug_logging, debug_log_call, describe

logger = logging.getLogger("globular_core.tests.tracing")


def test_describe_summarises_diagrams(world, side_by_side):
    assert describe(side_by_side) == "<2-diagram 2 cells: a b>"
    assert describe(world.strip(0)) == "<1-diagram 0 cells: identity>"
    assert describe(world.surface(1, [("a", 0)] * 6)) == "<2-diagram 6 cells: a a a a ...>"


def test_describe_truncates_long_lists():
    rendered = describe(list(range(10)))

    assert rendered == "[0, 1, 2, 3, 4, 5, ... (10 total)]"
    assert describe((NCell("a", (0,)),)) == "(NCell('a', [0]))"


def test_debug_log_call_traces_arguments_and_result(caplog, side_by_side):
    @debug_log_call(logger, name="count_cells")
    def count_cells(diagram):
        return len(diagram.cells)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        assert count_cells(side_by_side) == 2

    assert caplog.messages == [
        "-> count_cells(<2-diagram 2 cells: a b>)",
        "<- count_cells = 2",
    ]


def test_debug_log_call_is_silent_above_debug(caplog):
    @debug_log_call(logger)
    def identity(value):
        return value

    with caplog.at_level(logging.INFO, logger=logger.name):
        assert identity(3) == 3

    assert caplog.records == []


def test_debug_log_call_reports_and_reraises_errors(caplog):
    @debug_log_call(logger, name="explode", log_result=False)
    def explode():
        raise ValueError("boom")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with pytest.raises(ValueError):
            explode()

    assert caplog.messages[-1] == "<- explode raised ValueError: boom"


def test_apply_debug_logging_wraps_public_callables_only(caplog):
    def visible():
        return "seen"

    def _hidden():
        return "hidden"

    def skipped():
        return "skipped"

    class Tracked:
        def public(self):
            return 1

        def quiet(self):
            return 2

    Tracked.__module__ = visible.__module__
    namespace = {
        "__name__": visible.__module__,
        "visible": visible,
        "_hidden": _hidden,
        "skipped": skipped,
        "Tracked": Tracked,
    }

    apply_debug_logging(namespace, logger=logger, skip={"skipped", "Tracked.quiet"})

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        namespace["visible"]()
        namespace["_hidden"]()
        namespace["skipped"]()
        Tracked().public()
        Tracked().quiet()

    entered = [message for message in caplog.messages if message.startswith("->")]
    assert [message.split("(")[0] for message in entered] == ["-> visible", "-> Tracked.public"]
    assert namespace["_hidden"] is _hidden
