"""
Weather tools, search history context and history widget for the DAIN agent platform.
"""

from .agent.registry import ServiceRegistry
from .infra.history_store import HistoryStore, MemoryHistoryStore
from .service import build_service

__version__ = "1.0.0"
__all__ = [
    "HistoryStore",
    "MemoryHistoryStore",
    "ServiceRegistry",
    "build_service",
]
