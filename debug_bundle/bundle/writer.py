"""Zip archive assembly from registered sources.

A build is all-or-nothing: the first source that raises aborts it and no
archive bytes reach the caller.
"""

import io
import logging
import time
import zipfile
from typing import BinaryIO, List, Optional

from debug_bundle.bundle.registry import SourceRegistry
from debug_bundle.bundle.source import Source
from debug_bundle.utils.errors import SourceWriteError

logger = logging.getLogger(__name__)

ZIP_MEDIA_TYPE = "application/zip"
ZIP_FILE_NAME = "debug.zip"


class ZipWriter:
    """Builds a zip with one entry per registered source.

    Usage:
        writer = ZipWriter()
        writer.register_source("host.json", HostInfoSource())

        with open("debug.zip", "wb") as f:
            writer.write_zip(f)
    """

    def __init__(
        self,
        registry: Optional[SourceRegistry] = None,
        compression: int = zipfile.ZIP_DEFLATED,
    ):
        """Initialize writer.

        Args:
            registry: Registry to read sources from (new empty one if None)
            compression: zipfile compression method for entries
        """
        self.registry = registry if registry is not None else SourceRegistry()
        self.compression = compression

    def register_source(self, name: str, source: Source) -> None:
        """Register a source; see ``SourceRegistry.register``."""
        self.registry.register(name, source)

    def source_names(self) -> List[str]:
        """Get registered source names."""
        return self.registry.names()

    def build(self) -> bytes:
        """Build the archive in memory.

        Returns:
            Complete zip archive bytes

        Raises:
            SourceWriteError: If any source fails (remaining sources are skipped)
        """
        sources = self.registry.snapshot()
        started = time.monotonic()
        logger.debug(f"Building debug zip with {len(sources)} sources")

        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", self.compression) as zf:
            for name, source in sources:
                # Closing the entry can fail too (e.g. size limits), so it is
                # attributed to the source as well.
                try:
                    with zf.open(name, "w") as entry:
                        source.write(entry)
                except Exception as e:
                    raise SourceWriteError(name, e) from e

        content = buf.getvalue()
        logger.info(
            f"Built debug zip: {len(sources)} entries, {len(content)} bytes "
            f"in {time.monotonic() - started:.2f}s"
        )
        return content

    def write_zip(self, sink: BinaryIO) -> None:
        """Build the archive and write it to ``sink``.

        Nothing is written to ``sink`` unless every source succeeds.

        Raises:
            SourceWriteError: If any source fails
        """
        sink.write(self.build())
