"""Wall-clock sampling profile of all running threads.

The profile is captured by polling ``sys._current_frames()`` at a fixed
interval for the configured duration. Every live thread is counted on every
sample, so threads parked in a blocking call (``Event.wait``, socket reads)
accumulate samples just like busy ones. Output uses the folded-stack format
understood by flamegraph tooling:

    # cpu profile
    # clock: wall
    # duration: 5.000s
    MainThread;serve (server.py:88);handle (app.py:12) 37
"""

import logging
import sys
import threading
import time
from collections import Counter
from typing import BinaryIO, Dict

from debug_bundle.utils.errors import ConstructionError

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_INTERVAL = 0.01  # 100Hz
CPU_SOURCE_NAME = "cpuSource"


def _thread_names() -> Dict[int, str]:
    return {t.ident: t.name for t in threading.enumerate() if t.ident is not None}


def _fold_stack(thread_name: str, frame) -> str:
    """Render a frame chain root-first as ``thread;f1;f2``."""
    frames = []
    while frame is not None:
        code = frame.f_code
        frames.append(f"{code.co_name} ({code.co_filename}:{frame.f_lineno})")
        frame = frame.f_back
    frames.append(thread_name)
    return ";".join(reversed(frames))


class CPUProfileSource:
    """Blocks for ``duration`` seconds while sampling thread stacks.

    Samples are wall-clock: idle threads are included.
    """

    def __init__(self, duration: float, interval: float = DEFAULT_SAMPLE_INTERVAL):
        """Initialize CPU profile source.

        Args:
            duration: Capture window in seconds
            interval: Seconds between samples

        Raises:
            ConstructionError: If the window is invalid or the interpreter
                cannot expose thread frames
        """
        if duration <= 0:
            raise ConstructionError(CPU_SOURCE_NAME, "profile duration must be positive")
        if interval <= 0:
            raise ConstructionError(CPU_SOURCE_NAME, "sample interval must be positive")
        if not hasattr(sys, "_current_frames"):
            raise ConstructionError(
                CPU_SOURCE_NAME, "sys._current_frames is not available on this interpreter"
            )

        self.duration = duration
        self.interval = interval

    def write(self, sink: BinaryIO) -> None:
        own_ident = threading.get_ident()
        names = _thread_names()
        stacks: Counter = Counter()
        samples = 0

        deadline = time.monotonic() + self.duration
        while True:
            for ident, frame in sys._current_frames().items():
                if ident == own_ident:
                    continue
                if ident not in names:
                    names = _thread_names()
                stacks[_fold_stack(names.get(ident, f"thread-{ident}"), frame)] += 1
            samples += 1

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(self.interval, remaining))

        logger.debug(f"CPU profile: {samples} samples, {len(stacks)} distinct stacks")

        lines = [
            "# cpu profile",
            "# clock: wall",
            f"# duration: {self.duration:.3f}s",
            f"# interval: {self.interval:.3f}s",
            f"# samples: {samples}",
            f"# distinct stacks: {len(stacks)}",
        ]
        lines.extend(f"{stack} {count}" for stack, count in stacks.most_common())
        sink.write(("\n".join(lines) + "\n").encode("utf-8"))
