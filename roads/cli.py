"""Command line entry point: resolve a left-turn-biased route from a map data dump."""

import argparse
import logging
import sys

import orjson

from core.geo import Coordinate
from roads.config import RouterConfig, load_config
from roads.io.map_data import FileMapDataProvider
from roads.routing.resolver import RouteResolver
from roads.routing.results import RouteSuccess

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_ROUTE = 2


def setup_logging(log_level: str) -> None:
    """Configure root logging; stdout is reserved for the JSON result."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Left-turn-biased route finder")
    parser.add_argument("--map-file", required=True, help="Overpass JSON dump with nodes and ways")
    parser.add_argument("--start", required=True, type=Coordinate.parse, help="Start as LAT,LON")
    parser.add_argument("--end", required=True, type=Coordinate.parse, help="End as LAT,LON")
    parser.add_argument("--config", default=None, help="Optional JSON router config")
    parser.add_argument("--log-level", default="INFO", help="Log level")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit code: 0 on success, 2 when no route could be produced,
        1 on unexpected errors
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else RouterConfig()
        resolver = RouteResolver(config=config)
        result = resolver.fetch_and_resolve(args.start, args.end, FileMapDataProvider(args.map_file))
    except (OSError, ValueError) as e:
        logging.error(f"Error resolving route: {e}", exc_info=True)
        return EXIT_ERROR

    sys.stdout.write(orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2).decode() + "\n")
    return EXIT_OK if isinstance(result, RouteSuccess) else EXIT_NO_ROUTE


if __name__ == "__main__":
    sys.exit(main())
