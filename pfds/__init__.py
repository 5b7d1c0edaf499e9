from pfds.common import (
    EmptyHeapError,
    EmptyListError,
    EmptyNodeError,
    Entry,
    Flip,
    Ordering,
)
from pfds.pairing import PairingHeap
from pfds.plist import PList
from pfds.sortable import Sortable
from pfds.splay import SplayHeap, splay_sort
from pfds.susp import Susp
from pfds.tree import PTree

__all__ = [
    "EmptyHeapError",
    "EmptyListError",
    "EmptyNodeError",
    "Entry",
    "Flip",
    "Ordering",
    "PList",
    "PTree",
    "PairingHeap",
    "Sortable",
    "SplayHeap",
    "Susp",
    "splay_sort",
]
