"""Read projections over the history store: agent context and UI widget."""

from __future__ import annotations

import json
from typing import List

from ...domain.formatting import format_location, format_number, format_timestamp
from ...infra.history_store import HistoryStore
from ...schemas import AgentInfo, HistoryEntry, TableColumn, TableDescription, ToolResult


EMPTY_CONTEXT_MESSAGE = "No previous weather searches found for this user."
EMPTY_WIDGET_TEXT = "No weather search history available."
EMPTY_WIDGET_MESSAGE = "You haven't made any weather searches yet."
DEFAULT_CONTEXT_LIMIT = 5

HISTORY_TABLE_COLUMNS = (
    TableColumn(key="timestamp", header="Time", type="text", width="25%"),
    TableColumn(key="location", header="Location", type="text", width="25%"),
    TableColumn(key="temperature", header="Temperature", type="text", width="25%"),
    TableColumn(key="windSpeed", header="Wind Speed", type="text", width="25%"),
)


def build_history_context(
    agent: AgentInfo,
    *,
    store: HistoryStore,
    limit: int = DEFAULT_CONTEXT_LIMIT,
) -> str:
    recent = store.recent(agent.id, limit)
    if not recent:
        return EMPTY_CONTEXT_MESSAGE
    total = store.count(agent.id)
    # A write may land between the two reads; never report fewer than shown.
    total = max(total, len(recent))
    rendered = json.dumps(
        [entry.to_payload() for entry in recent], indent=2, ensure_ascii=False
    )
    return f"User has made {total} weather searches. Recent searches:\n{rendered}"


def _history_row(entry: HistoryEntry) -> dict:
    return {
        "timestamp": format_timestamp(entry.timestamp),
        "location": format_location(entry.latitude, entry.longitude),
        "temperature": f"{format_number(entry.temperature)}°C",
        "windSpeed": f"{format_number(entry.wind_speed)} km/h",
    }


def build_history_table(entries: List[HistoryEntry]) -> TableDescription:
    return TableDescription(
        columns=list(HISTORY_TABLE_COLUMNS),
        rows=[_history_row(entry) for entry in entries],
    )


def build_history_widget(agent: AgentInfo, *, store: HistoryStore) -> ToolResult:
    history = store.all(agent.id)
    if not history:
        return ToolResult(
            text=EMPTY_WIDGET_TEXT,
            data={},
            ui={"type": "p", "children": EMPTY_WIDGET_MESSAGE},
        )
    table = build_history_table(list(history))
    return ToolResult(
        text=f"Weather search history: {len(history)} searches",
        data=[entry.to_payload() for entry in history],
        ui={"type": "table", "uiData": table.model_dump_json()},
    )
