"""Command line entry point: load a map, search it, print the result."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import CONFIG, Config, load_config
from .core.costs import available_cost_models, get_cost_model
from .core.node import Coord
from .errors import PathfindingError
from .persistence.map_io import load_map
from .persistence.serializer import save_result
from .search.astar import AStarSearch
from .search.neighbors import available_neighborhoods, get_neighborhood
from .utils.terminal_view import TerminalView

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_INVALID = 2


def configure_logging(config: Config, level: str | None = None) -> None:
    """Apply the root level and per-module levels from ``config``."""

    level_str = (level or config.logging.global_level).upper()
    numeric_level = getattr(logging, level_str, logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    for module_name, module_level in config.logging.module_levels.items():
        module_numeric_level = getattr(logging, str(module_level).upper(), None)
        if isinstance(module_numeric_level, int):
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning(
                "Invalid log level '%s' for module '%s' in config.", module_level, module_name
            )


def parse_coord(text: str) -> Coord:
    """Parse ``"x,y"`` into an integer pair."""

    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"coordinates must be integers: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridpath", description="Find a shortest walkable path on an ASCII grid map."
    )
    parser.add_argument("map", type=Path, help="map file (.txt or .txt.gz)")
    parser.add_argument("--from", dest="start", type=parse_coord, metavar="X,Y",
                        help="start cell; defaults to the map's S")
    parser.add_argument("--to", dest="goal", type=parse_coord, metavar="X,Y",
                        help="goal cell; defaults to the map's G")
    parser.add_argument("--cost-model", choices=available_cost_models(), default=None)
    parser.add_argument("--neighborhood", choices=available_neighborhoods(), default=None)
    parser.add_argument("--config", type=Path, default=None, help="alternative config.yaml")
    parser.add_argument("--log-level", default=None, help="override logging.global_level")
    parser.add_argument("--no-colour", action="store_true", help="plain ASCII output")
    parser.add_argument("--json", dest="json_out", type=Path, default=None,
                        help="also write the result to this JSON file")
    parser.add_argument("--trace", action="store_true", help="record search events")
    return parser


def run(args: argparse.Namespace, config: Config) -> int:
    cost_model = get_cost_model(args.cost_model or config.search.cost_model)
    neighborhood = get_neighborhood(args.neighborhood or config.search.neighborhood)
    grid = load_map(args.map, cost_model=cost_model)
    logger.info("Loaded %s (%dx%d)", args.map, grid.width, grid.height)

    search = AStarSearch(
        grid,
        neighborhood=neighborhood,
        record_events=args.trace or config.search.record_events,
    )
    if args.start is None and args.goal is None:
        path = search.find_path_to_goal()
    else:
        start = args.start if args.start is not None else grid.start_node().position
        goal = args.goal if args.goal is not None else grid.goal_node().position
        path = search.find_path(start[0], start[1], goal[0], goal[1])

    colour = config.render.colour and not args.no_colour
    TerminalView(colour=colour).render(grid, path)
    if path:
        print(f"path: {len(path)} nodes, cost {path[-1].past_cost:.3f}")
    else:
        print("no path")

    if args.json_out is not None:
        save_result(path, search.last_trace, args.json_out)
        logger.info("Wrote result to %s", args.json_out)
    return EXIT_FOUND if path else EXIT_NO_PATH


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config) if args.config is not None else CONFIG
    configure_logging(config, args.log_level)

    try:
        return run(args, config)
    except (PathfindingError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
