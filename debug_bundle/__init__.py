"""Debug Bundle - package diagnostic probes into a downloadable zip."""

__version__ = "0.1.0"
