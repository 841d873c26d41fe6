"""Per-agent, append-only log of current-conditions lookups."""

from __future__ import annotations

from functools import lru_cache
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ..schemas import HistoryEntry
from .config import get_config


class HistoryStore:
    def append(self, agent_id: str, entry: HistoryEntry) -> None:
        raise NotImplementedError

    def recent(self, agent_id: str, n: int) -> Tuple[HistoryEntry, ...]:
        raise NotImplementedError

    def all(self, agent_id: str) -> Tuple[HistoryEntry, ...]:
        raise NotImplementedError

    def count(self, agent_id: str) -> int:
        raise NotImplementedError


class _AgentLog:
    __slots__ = ("entries", "lock")

    def __init__(self) -> None:
        self.entries: List[HistoryEntry] = []
        self.lock = Lock()


class MemoryHistoryStore(HistoryStore):
    """Process-lifetime store with one lock per agent.

    The map lock only guards creation and lookup of an agent's log; reads and
    appends then synchronize on that agent's own lock, so agents never wait
    on each other.
    """

    def __init__(self) -> None:
        self._logs: Dict[str, _AgentLog] = {}
        self._lock = Lock()

    def _get_log(self, agent_id: str, create: bool = False) -> Optional[_AgentLog]:
        with self._lock:
            log = self._logs.get(agent_id)
            if log is None and create:
                log = _AgentLog()
                self._logs[agent_id] = log
            return log

    def append(self, agent_id: str, entry: HistoryEntry) -> None:
        log = self._get_log(agent_id, create=True)
        with log.lock:
            log.entries.append(entry)

    def recent(self, agent_id: str, n: int) -> Tuple[HistoryEntry, ...]:
        if n <= 0:
            return ()
        log = self._get_log(agent_id)
        if log is None:
            return ()
        with log.lock:
            return tuple(log.entries[-n:])

    def all(self, agent_id: str) -> Tuple[HistoryEntry, ...]:
        log = self._get_log(agent_id)
        if log is None:
            return ()
        with log.lock:
            return tuple(log.entries)

    def count(self, agent_id: str) -> int:
        log = self._get_log(agent_id)
        if log is None:
            return 0
        with log.lock:
            return len(log.entries)


def build_history_store() -> HistoryStore:
    cfg = get_config()
    store = (cfg.history_store or "memory").lower()
    if store == "memory":
        return MemoryHistoryStore()
    raise ValueError(f"unsupported history store: {store}")


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStore:
    return build_history_store()
