"""Default source set: CPU profile, heap profile, host info, thread dump."""

import logging

from debug_bundle.bundle import SourceRegistry, ZipWriter
from .cpu import CPUProfileSource, DEFAULT_SAMPLE_INTERVAL, CPU_SOURCE_NAME
from .heap import HeapProfileSource, DEFAULT_HEAP_TOP, HEAP_SOURCE_NAME
from .host import HostInfoSource, HOST_SOURCE_NAME
from .stacks import ThreadStackSource, GOROUTINE_SOURCE_NAME

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_NAMES = [
    CPU_SOURCE_NAME,
    HEAP_SOURCE_NAME,
    HOST_SOURCE_NAME,
    GOROUTINE_SOURCE_NAME,
]


def new_default_source_set(
    profile_duration: float,
    sample_interval: float = DEFAULT_SAMPLE_INTERVAL,
    heap_top: int = DEFAULT_HEAP_TOP,
    trace_malloc: bool = False,
) -> SourceRegistry:
    """Create a registry holding the four default sources.

    Every source is created before anything is registered, so a failure
    never leaves a partially-populated registry behind.

    Args:
        profile_duration: CPU profile capture window in seconds
        sample_interval: Seconds between CPU samples
        heap_top: Number of heap entries to report
        trace_malloc: Start tracemalloc for allocation-site heap profiles

    Returns:
        SourceRegistry with cpuSource, heapSource, hostSource, goroutineProfile

    Raises:
        ConstructionError: If a profiling facility is unavailable
    """
    sources = {
        CPU_SOURCE_NAME: CPUProfileSource(profile_duration, sample_interval),
        HEAP_SOURCE_NAME: HeapProfileSource(top=heap_top, trace_malloc=trace_malloc),
        HOST_SOURCE_NAME: HostInfoSource(),
        GOROUTINE_SOURCE_NAME: ThreadStackSource(),
    }

    registry = SourceRegistry()
    for name, source in sources.items():
        registry.register(name, source)

    logger.debug(f"Created default source set (cpu profile {profile_duration}s)")
    return registry


def new_zip_writer_with_default_sources(
    profile_duration: float,
    **options,
) -> ZipWriter:
    """Create a ZipWriter over ``new_default_source_set``.

    Extra keyword options are passed through to ``new_default_source_set``.
    """
    return ZipWriter(new_default_source_set(profile_duration, **options))
