"""Heap profile snapshot.

Uses tracemalloc allocation sites when tracing is active, otherwise falls
back to counting live gc-tracked objects by type.
"""

import gc
import logging
import tracemalloc
from collections import Counter
from typing import BinaryIO, List

from debug_bundle.utils.errors import ConstructionError

logger = logging.getLogger(__name__)

HEAP_SOURCE_NAME = "heapSource"
DEFAULT_HEAP_TOP = 25


def _type_name(obj) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


class HeapProfileSource:
    """Writes the top ``top`` heap consumers at call time."""

    def __init__(
        self,
        top: int = DEFAULT_HEAP_TOP,
        trace_malloc: bool = False,
        nframes: int = 1,
    ):
        """Initialize heap profile source.

        Args:
            top: Number of allocation sites (or types) to report
            trace_malloc: Start tracemalloc now if it is not already tracing
            nframes: Frames stored per allocation when starting tracemalloc
        """
        if top < 1:
            raise ConstructionError(HEAP_SOURCE_NAME, "top must be at least 1")

        if trace_malloc and not tracemalloc.is_tracing():
            try:
                tracemalloc.start(nframes)
            except (RuntimeError, ValueError) as e:
                raise ConstructionError(HEAP_SOURCE_NAME, f"tracemalloc: {e}") from e
            logger.info(f"Started tracemalloc with {nframes} frame(s)")

        self.top = top

    def write(self, sink: BinaryIO) -> None:
        lines = [
            "# heap profile",
            f"# gc counts: {gc.get_count()}",
        ]

        if tracemalloc.is_tracing():
            lines.extend(self._tracemalloc_lines())
        else:
            lines.extend(self._object_count_lines())

        sink.write(("\n".join(lines) + "\n").encode("utf-8"))

    def _tracemalloc_lines(self) -> List[str]:
        snapshot = tracemalloc.take_snapshot().filter_traces(
            (tracemalloc.Filter(False, tracemalloc.__file__),)
        )
        current, peak = tracemalloc.get_traced_memory()
        stats = snapshot.statistics("lineno")

        lines = [
            f"# tracemalloc current: {current} bytes",
            f"# tracemalloc peak: {peak} bytes",
            f"# allocation sites: {len(stats)}",
        ]
        lines.extend(str(stat) for stat in stats[: self.top])
        return lines

    def _object_count_lines(self) -> List[str]:
        counts = Counter(_type_name(obj) for obj in gc.get_objects())
        lines = [
            "# tracemalloc not tracing; live objects by type",
            f"# tracked objects: {sum(counts.values())}",
        ]
        lines.extend(f"{n} {name}" for name, n in counts.most_common(self.top))
        return lines
