"""Diagnostic sources and the default source set."""

from .cpu import CPUProfileSource, DEFAULT_SAMPLE_INTERVAL
from .heap import HeapProfileSource, DEFAULT_HEAP_TOP
from .host import HostInfo, HostInfoSource, collect_host_info
from .stacks import ThreadStackSource
from .defaults import (
    DEFAULT_SOURCE_NAMES,
    new_default_source_set,
    new_zip_writer_with_default_sources,
)

__all__ = [
    "CPUProfileSource",
    "DEFAULT_SAMPLE_INTERVAL",
    "HeapProfileSource",
    "DEFAULT_HEAP_TOP",
    "HostInfo",
    "HostInfoSource",
    "collect_host_info",
    "ThreadStackSource",
    "DEFAULT_SOURCE_NAMES",
    "new_default_source_set",
    "new_zip_writer_with_default_sources",
]
