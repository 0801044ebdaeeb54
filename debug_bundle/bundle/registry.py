"""Name to source mapping used by the zip writer."""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from debug_bundle.bundle.source import Source
from debug_bundle.utils.errors import DuplicateNameError

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Collision-safe registry of diagnostic sources.

    Entries are only ever added. Every access goes through one lock, so a
    build reading the registry sees a source either fully registered or not
    at all.

    Usage:
        registry = SourceRegistry()
        registry.register("host.json", HostInfoSource())
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._sources: Dict[str, Source] = {}

    def register(self, name: str, source: Source) -> None:
        """Register a source under a unique name.

        Args:
            name: Archive entry filename
            source: Object implementing ``write(sink)``

        Raises:
            DuplicateNameError: If ``name`` is already registered
            ValueError: If ``name`` is empty
        """
        if not isinstance(name, str) or not name:
            raise ValueError("source name must be a non-empty string")

        with self._lock:
            if name in self._sources:
                raise DuplicateNameError(name)
            self._sources[name] = source

        logger.debug(f"Registered debug source: {name}")

    def snapshot(self) -> List[Tuple[str, Source]]:
        """Get a consistent copy of all entries in registration order."""
        with self._lock:
            return list(self._sources.items())

    def get(self, name: str) -> Optional[Source]:
        """Get the source registered under ``name``."""
        with self._lock:
            return self._sources.get(name)

    def names(self) -> List[str]:
        """Get all registered names."""
        with self._lock:
            return list(self._sources)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._sources

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)
