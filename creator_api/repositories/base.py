"""
Remote record store interface.

The history service talks to its remote backend only through this
abstraction. Calls run on a worker thread under a timeout; the caller hands
each call a CancelToken and cancels it once it stops waiting, so a backend
must not commit or push after the token is cancelled.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

ChangeHandler = Callable[[List[dict]], None]


class CancelToken:
    """Set by the caller when it has given up on a backend call."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class StoreResult:
    """Outcome of a backend call: ``ok`` plus an error message or the stored record."""

    ok: bool
    error: Optional[str] = None
    record: Optional[dict] = None

    @classmethod
    def success(cls, record: dict | None = None) -> "StoreResult":
        return cls(ok=True, record=record)

    @classmethod
    def failure(cls, error: str) -> "StoreResult":
        return cls(ok=False, error=error or "Unknown error")


class RecordStore(ABC):
    """A backend able to persist history records and push its full list on change."""

    @abstractmethod
    def init(self, on_change: ChangeHandler, cancel: CancelToken | None = None) -> StoreResult:
        """Prepare the backend, register the change handler and push the current list."""

    @abstractmethod
    def create(self, record: dict, cancel: CancelToken | None = None) -> StoreResult:
        """Persist one record unless ``cancel`` fires first; the result carries the stored copy."""
