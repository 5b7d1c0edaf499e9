"""Configuration for the pfds command line sorter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Dict

DEFAULT_STRUCTURE = "sortable"
"""Structure used when none is named on the command line."""


@unique
class Structure(Enum):
    """Which persistent structure does the sorting."""

    Pairing = auto()  # Pairing heap, drained with delete_min
    Splay = auto()  # Splay heap, via splay_sort
    Sortable = auto()  # Lazy bottom-up mergesort


STRUCTURE_LOOKUP: Dict[str, Structure] = {
    struct.name.lower(): struct for struct in Structure
}
"""Command line names of each structure."""


@dataclass(frozen=True)
class SortConfig:
    """Settings for a single sorting run."""

    structure: Structure
    descending: bool


def init_config(
    structure_name: str = DEFAULT_STRUCTURE, descending: bool = False
) -> SortConfig:
    """Build a config from command line values.

    Args:
        structure_name: One of the keys of STRUCTURE_LOOKUP, case insensitive.
        descending: Whether to sort largest first.

    Returns:
        The corresponding SortConfig.

    Raises:
        ValueError: If the structure name is unknown.
    """
    structure = STRUCTURE_LOOKUP.get(structure_name.lower())
    if structure is None:
        raise ValueError(f"Unknown structure: {structure_name}")
    return SortConfig(structure=structure, descending=descending)
