"""
archscribe Common Module

Shared infrastructure: configuration, logging and input schemas.
"""

from .config import ArchScribeConfig, load_config, save_config
from .logging_utils import configure_logging, StreamSelectingHandler

__all__ = [
    "ArchScribeConfig",
    "load_config",
    "save_config",
    "configure_logging",
    "StreamSelectingHandler",
]
