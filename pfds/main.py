"""Command line entry point for pfds.

Sorts integers through one of the persistent structures. Values come from
the arguments, or from stdin when there are none.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import Any, List, Optional, Sequence

from pfds.common import Flip, Impossible
from pfds.config import (
    DEFAULT_STRUCTURE,
    STRUCTURE_LOOKUP,
    SortConfig,
    Structure,
    init_config,
)
from pfds.pairing import PairingHeap
from pfds.plist import PList
from pfds.sortable import Sortable
from pfds.splay import splay_sort


def sort_values(config: SortConfig, values: Sequence[int]) -> List[int]:
    """Sort values with the structure named in the config.

    Args:
        config: Which structure to use and in which direction.
        values: The values to sort.

    Returns:
        The values in ascending order, or descending if configured.
    """
    elems: List[Any] = [Flip(v) for v in values] if config.descending else list(values)
    logging.debug("sorting %d values with %s", len(elems), config.structure.name)
    match config.structure:
        case Structure.Pairing:
            ordered = PairingHeap.mk(elems).list()
        case Structure.Splay:
            ordered = splay_sort(PList.mk(elems)).list()
        case Structure.Sortable:
            ordered = Sortable.mk(elems).sort().list()
        case _:
            raise Impossible
    return [e.value for e in ordered] if config.descending else ordered


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser."""
    parser = ArgumentParser(prog="pfds")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument(
        "--structure", choices=sorted(STRUCTURE_LOOKUP), default=DEFAULT_STRUCTURE
    )
    parser.add_argument("--descending", action="store_true")
    parser.add_argument("values", nargs="*", type=int)
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse arguments, sort, and print the result on one line."""
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    config = init_config(args.structure, args.descending)
    values: List[int] = args.values
    if not values:
        logging.info("reading values from stdin")
        values = [int(word) for word in sys.stdin.read().split()]
    print(" ".join(str(v) for v in sort_values(config, values)))


if __name__ == "__main__":
    main()
