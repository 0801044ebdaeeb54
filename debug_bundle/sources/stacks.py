"""Stack dump of every live thread."""

import sys
import threading
import traceback
from typing import BinaryIO

from debug_bundle.utils.errors import ConstructionError

GOROUTINE_SOURCE_NAME = "goroutineProfile"


class ThreadStackSource:
    """Dumps the current stack of all threads, like a goroutine dump."""

    def __init__(self):
        if not hasattr(sys, "_current_frames"):
            raise ConstructionError(
                GOROUTINE_SOURCE_NAME, "sys._current_frames is not available on this interpreter"
            )

    def write(self, sink: BinaryIO) -> None:
        frames = sys._current_frames()
        threads = {t.ident: t for t in threading.enumerate()}

        chunks = [f"# thread dump: {len(frames)} threads\n"]
        for ident, frame in frames.items():
            thread = threads.get(ident)
            if thread is not None:
                header = f"thread {thread.name!r} (id={ident}, daemon={thread.daemon}):"
            else:
                header = f"thread <unknown> (id={ident}):"
            chunks.append("\n" + header + "\n")
            chunks.extend(traceback.format_stack(frame))

        sink.write("".join(chunks).encode("utf-8"))
