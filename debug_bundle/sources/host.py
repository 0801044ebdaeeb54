"""Host and process metadata."""

import os
import platform
import socket
import sys
import threading
from datetime import datetime, timezone
from typing import BinaryIO, List, Optional

from pydantic import BaseModel, Field

from debug_bundle import __version__

HOST_SOURCE_NAME = "hostSource"


class HostInfo(BaseModel):
    """Snapshot of the host and the running process."""

    pid: int
    ppid: int
    hostname: str
    executable: str
    argv: List[str] = Field(default_factory=list)
    cwd: Optional[str] = None
    python_version: str
    python_implementation: str
    platform: str
    machine: str
    cpu_count: Optional[int] = None
    thread_count: int = 0
    debug_bundle_version: str = __version__
    collected_at: datetime


def collect_host_info() -> HostInfo:
    """Collect host metadata for the current process."""
    try:
        cwd: Optional[str] = os.getcwd()
    except OSError:
        # Working directory was removed underneath the process
        cwd = None

    return HostInfo(
        pid=os.getpid(),
        ppid=os.getppid(),
        hostname=socket.gethostname(),
        executable=sys.executable,
        argv=list(sys.argv),
        cwd=cwd,
        python_version=platform.python_version(),
        python_implementation=platform.python_implementation(),
        platform=platform.platform(),
        machine=platform.machine(),
        cpu_count=os.cpu_count(),
        thread_count=threading.active_count(),
        collected_at=datetime.now(timezone.utc),
    )


class HostInfoSource:
    """Writes ``HostInfo`` as indented JSON."""

    def write(self, sink: BinaryIO) -> None:
        sink.write(collect_host_info().model_dump_json(indent=2).encode("utf-8"))
