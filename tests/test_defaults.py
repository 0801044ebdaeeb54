"""Tests for the default source set."""

import sys
import threading

import pytest
from debug_bundle.bundle import SourceRegistry, ZipWriter
from debug_bundle.sources import (
    DEFAULT_SOURCE_NAMES,
    new_default_source_set,
    new_zip_writer_with_default_sources,
)
from debug_bundle.utils.errors import ConstructionError

EXPECTED_NAMES = {"cpuSource", "heapSource", "hostSource", "goroutineProfile"}


def _body_lines(data: bytes):
    return [line for line in data.decode("utf-8").splitlines() if line and not line.startswith("#")]


class TestDefaultSourceSet:
    """Tests for new_default_source_set."""

    def test_registers_exactly_four_sources(self):
        """Should register the four fixed names."""
        registry = new_default_source_set(1.0)
        assert isinstance(registry, SourceRegistry)
        assert set(registry.names()) == EXPECTED_NAMES
        assert set(DEFAULT_SOURCE_NAMES) == EXPECTED_NAMES

    def test_build_contains_all_sources(self, read_zip):
        """A build should contain real profile data for every default source."""
        stop = threading.Event()

        def busy_loop():
            while not stop.is_set():
                sum(range(1000))

        worker = threading.Thread(target=busy_loop, name="busy-worker", daemon=True)
        worker.start()
        try:
            content = ZipWriter(new_default_source_set(1.0)).build()
        finally:
            stop.set()
            worker.join()
        assert len(content) > 0

        entries = read_zip(content)
        assert set(entries) == EXPECTED_NAMES
        for name, data in entries.items():
            assert len(data) > 0, name
        assert entries["cpuSource"].startswith(b"# cpu profile")
        assert entries["heapSource"].startswith(b"# heap profile")
        assert entries["goroutineProfile"].startswith(b"# thread dump")

        cpu_stacks = _body_lines(entries["cpuSource"])
        assert any(line.startswith("busy-worker;") for line in cpu_stacks)
        for line in cpu_stacks:
            assert int(line.rsplit(" ", 1)[1]) >= 1
        assert len(_body_lines(entries["heapSource"])) >= 1
        assert "busy_loop" in entries["goroutineProfile"].decode("utf-8")

    def test_invalid_duration_fails_construction(self):
        """A non-positive duration should fail the whole construction."""
        with pytest.raises(ConstructionError) as exc_info:
            new_default_source_set(0)
        assert exc_info.value.source == "cpuSource"

    def test_missing_frame_support_fails_construction(self, monkeypatch):
        """Missing interpreter facilities should fail construction."""
        monkeypatch.delattr(sys, "_current_frames")
        with pytest.raises(ConstructionError):
            new_default_source_set(1.0)

    def test_zip_writer_with_default_sources(self):
        """Convenience constructor should wrap the default registry."""
        writer = new_zip_writer_with_default_sources(1.0, heap_top=5)
        assert set(writer.source_names()) == EXPECTED_NAMES
