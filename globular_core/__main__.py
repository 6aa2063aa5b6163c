import argparse
import logging
import sys
from typing import Optional, Sequence

from globular_core import EngineConfig, GlobularError, format_diagram, get_engine_config, set_engine_config
from globular_core.demo import SCENARIOS

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a globular diagram scenario")
    parser.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        default="interchange",
        help="Scenario to run (default: interchange)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--max-matches",
        type=int,
        help="Stop enumerating after this many matches",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    previous = get_engine_config()
    if args.max_matches is not None:
        try:
            set_engine_config(EngineConfig(max_matches=args.max_matches, check_globularity=previous.check_globularity))
        except ValueError as exc:
            parser.error(str(exc))

    logger.info("Running scenario %s", args.scenario)
    try:
        snapshots = SCENARIOS[args.scenario]()
    except GlobularError as exc:
        logger.error("Scenario %s failed: %s", args.scenario, exc)
        return 1
    finally:
        set_engine_config(previous)

    print(f"Scenario: {args.scenario}")
    for label, diagram in snapshots:
        print(f"{label}:")
        print(format_diagram(diagram, indent="  "))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
