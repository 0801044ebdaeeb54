"""Source capability contract and generic adapters.

A source is anything that can write its diagnostic payload to a binary sink.
It raises on failure and must not keep a reference to the sink after
``write`` returns.
"""

import json
from typing import Any, BinaryIO, Callable, Protocol, runtime_checkable


@runtime_checkable
class Source(Protocol):
    """Diagnostic producer registered under a name in the bundle."""

    def write(self, sink: BinaryIO) -> None: ...


class BytesSource:
    """Source that writes a fixed payload."""

    def __init__(self, content: bytes = b""):
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.content = content

    def write(self, sink: BinaryIO) -> None:
        sink.write(self.content)


class CallableSource:
    """Wraps a plain ``func(sink)`` callable as a source."""

    def __init__(self, func: Callable[[BinaryIO], Any]):
        self.func = func

    def write(self, sink: BinaryIO) -> None:
        self.func(sink)


class JSONSource:
    """Writes the JSON encoding of whatever ``func()`` returns.

    Usage:
        writer.register_source("config.json", JSONSource(lambda: settings))
    """

    def __init__(self, func: Callable[[], Any], indent: int = 2):
        self.func = func
        self.indent = indent

    def write(self, sink: BinaryIO) -> None:
        data = json.dumps(self.func(), indent=self.indent, default=str)
        sink.write(data.encode("utf-8"))
