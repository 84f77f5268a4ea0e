"""Per-product mutual exclusion for read-modify-write sequences.

Planners read transaction sums and the snapshot, then write both; two
overlapping calls for the same product would otherwise both see the
old state and apply the same delta twice.

Products are hashed onto a fixed set of lock stripes, so memory stays
bounded however many products a long-running process touches.  Two
products sharing a stripe only serialize against each other.
"""

from __future__ import annotations

import threading
import zlib
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager

DEFAULT_STRIPES = 64


class ProductLocks:

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        if stripes < 1:
            raise ValueError("stripes must be at least 1")
        self._stripes = [threading.RLock() for _ in range(stripes)]

    def _index(self, product_id: str) -> int:
        return zlib.crc32(product_id.encode("utf-8")) % len(self._stripes)

    def for_product(self, product_id: str) -> threading.RLock:
        return self._stripes[self._index(product_id)]

    @contextmanager
    def hold(self, product_ids: Iterable[str | None]) -> Iterator[None]:
        """Hold the locks of every product in *product_ids*.

        Stripes are taken in index order so two batches naming the same
        products cannot deadlock.
        """
        indexes = sorted({self._index(pid) for pid in product_ids if pid})
        with ExitStack() as stack:
            for index in indexes:
                stack.enter_context(self._stripes[index])
            yield


_shared = ProductLocks()


def shared_locks() -> ProductLocks:
    """The process-wide lock set used when a service is given none."""
    return _shared
