"""Source registry and zip archive assembly."""

from .source import Source, BytesSource, CallableSource, JSONSource
from .registry import SourceRegistry
from .writer import ZipWriter, ZIP_MEDIA_TYPE, ZIP_FILE_NAME

__all__ = [
    "Source",
    "BytesSource",
    "CallableSource",
    "JSONSource",
    "SourceRegistry",
    "ZipWriter",
    "ZIP_MEDIA_TYPE",
    "ZIP_FILE_NAME",
]
