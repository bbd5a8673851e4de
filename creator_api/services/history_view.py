"""Read-only projection of the history list for the HTML page and detail route."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from creator_api.domain.records import parse_timestamp, record_id
from creator_api.services.history_service import HistoryStore


@dataclass
class HistoryCard:
    backend_id: str
    date: str
    title: str
    topic: str


@dataclass
class HistoryDetail:
    backend_id: str
    meta: str
    topic: str
    titles: list[str]
    description: str
    hashtags: str
    script: str


def _date_parts(created_at: str | None) -> tuple[str, str]:
    moment = parse_timestamp(created_at)
    if not moment:
        return (created_at or "", "")
    return moment.strftime("%Y-%m-%d"), moment.strftime("%H:%M:%S")


class HistoryProjection:
    """Rebuilt in full on every publish from the store; never writes back."""

    def __init__(self, store: HistoryStore) -> None:
        self._records: list[dict] = []
        self.cards: list[HistoryCard] = []
        self._unsubscribe = store.subscribe(self.render)
        self.render(store.current_list())

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def render(self, records: list[dict]) -> None:
        self._records = list(records)
        cards = []
        for record in self._records:
            day, clock = _date_parts(record.get("created_at"))
            cards.append(
                HistoryCard(
                    backend_id=record_id(record),
                    date=f"{day} {clock}".strip(),
                    title=record.get("title_1") or "No title",
                    topic=record.get("topic") or "",
                )
            )
        self.cards = cards

    def detail(self, backend_id: str) -> Optional[HistoryDetail]:
        for record in self._records:
            if record_id(record) != backend_id:
                continue
            day, clock = _date_parts(record.get("created_at"))
            return HistoryDetail(
                backend_id=backend_id,
                meta=f"Saved on {day} at {clock} • {record.get('tone', '')} • {record.get('audience', '')}",
                topic=record.get("topic") or "",
                titles=[t for t in (record.get("title_1"), record.get("title_2"), record.get("title_3")) if t],
                description=record.get("description") or "",
                hashtags=record.get("hashtags") or "",
                script=record.get("script") or "",
            )
        return None

    def close(self) -> None:
        self._unsubscribe()
