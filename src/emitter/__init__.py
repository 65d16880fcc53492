"""Minimal synchronous publish/subscribe emitter."""

from .core import Emitter, Listener, Registration, create_emitter
from .logging_config import configure_logging

__all__ = [
    "Emitter",
    "Listener",
    "Registration",
    "configure_logging",
    "create_emitter",
]

__version__ = "1.0.0"
