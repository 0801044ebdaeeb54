"""HTTP surface for the debug bundle."""

from .handler import http_handler, register_handler
from .server import create_app, run_server

__all__ = [
    "http_handler",
    "register_handler",
    "create_app",
    "run_server",
]
