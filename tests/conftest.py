"""Shared fixtures for debug bundle tests."""

import io
import zipfile
from typing import BinaryIO, Dict

import pytest


class FakeSource:
    """Records calls and writes fixed content, or raises."""

    def __init__(self, content: bytes = b"", should_err: bool = False):
        self.content = content
        self.should_err = should_err
        self.calls = 0

    @property
    def called(self) -> bool:
        return self.calls > 0

    def write(self, sink: BinaryIO) -> None:
        self.calls += 1
        if self.should_err:
            raise RuntimeError("bad write")
        sink.write(self.content)


@pytest.fixture
def make_source():
    """Factory for FakeSource instances."""

    def _make(content: bytes = b"", should_err: bool = False) -> FakeSource:
        return FakeSource(content=content, should_err=should_err)

    return _make


@pytest.fixture
def read_zip():
    """Parse zip bytes into a {name: content} dict."""

    def _read(content: bytes) -> Dict[str, bytes]:
        with zipfile.ZipFile(io.BytesIO(content)) as zf:
            return {info.filename: zf.read(info) for info in zf.infolist()}

    return _read
