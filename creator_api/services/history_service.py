"""
History persistence use cases.

HistoryStore owns the in-memory record list and hides which backend is in
use. It tries the remote store first and falls back to the local JSON slot
when the remote store is missing, reports a failed init, raises or times out.
The choice is made once; a ready store never switches backends.

Remote calls run on worker threads. Pushes they trigger are handed back to
the event loop, so the list and its listeners are only touched on the loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

from creator_api.core.config import DEFAULT_HISTORY_LIMIT, Settings, get_settings
from creator_api.domain.records import build_record, dedupe_records
from creator_api.repositories.base import CancelToken, RecordStore
from creator_api.repositories.json_storage import JSONRecordStore, SerializationError
from creator_api.repositories.sql_repository import SQLRecordStore

logger = logging.getLogger(__name__)

Listener = Callable[[List[dict]], None]


class BackendMode(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class StoreState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class HistoryError(Exception):
    """Base class for save failures; converted into a SaveResult at the store boundary."""

    code = "history_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotReadyError(HistoryError):
    code = "not_ready"


class CapacityExceededError(HistoryError):
    code = "capacity_exceeded"


class BackendFailureError(HistoryError):
    code = "backend_failure"


class SerializationFailureError(HistoryError):
    code = "serialization_failure"


@dataclass
class SaveResult:
    ok: bool
    record: Optional[dict] = None
    error: Optional[str] = None
    message: str = ""


class HistoryStore:
    """Durable, observable list of saved records over a remote or local backend."""

    def __init__(
        self,
        *,
        local: JSONRecordStore,
        remote: RecordStore | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
        timeout: float = 10.0,
        remote_init_attempts: int = 1,
        retry_delay: float = 0.5,
    ) -> None:
        self._local = local
        self._remote = remote
        self._limit = limit
        self._timeout = timeout
        self._remote_init_attempts = max(1, remote_init_attempts)
        self._retry_delay = retry_delay
        self._records: list[dict] = []
        self._listeners: list[Listener] = []
        self._state = StoreState.UNINITIALIZED
        self._mode: BackendMode | None = None
        self._save_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    # -------------------------- state --------------------------
    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def mode(self) -> BackendMode | None:
        return self._mode

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    @property
    def limit(self) -> int:
        return self._limit

    def current_list(self) -> list[dict]:
        return [dict(record) for record in self._records]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for full-list publishes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------- lifecycle --------------------------
    async def initialize(self) -> BackendMode | None:
        if self._state is not StoreState.UNINITIALIZED:
            return self._mode
        self._state = StoreState.INITIALIZING

        if self._remote is None:
            logger.info("Remote history store not configured; using local fallback")
            return self._use_local()

        attempts = self._remote_init_attempts
        for attempt in range(1, attempts + 1):
            try:
                result = await self._call(self._remote.init, self._handle_remote_change)
            except asyncio.TimeoutError:
                reason = f"timed out after {self._timeout}s"
            except Exception as exc:
                reason = f"{exc.__class__.__name__}: {exc}"
            else:
                if result.ok:
                    self._mode = BackendMode.REMOTE
                    self._state = StoreState.READY
                    logger.info("History store ready (remote, %d records)", len(self._records))
                    return self._mode
                reason = result.error or "init reported failure"
            logger.warning("Remote history init failed (attempt %d/%d): %s", attempt, attempts, reason)
            if attempt < attempts:
                await asyncio.sleep(self._retry_delay)

        logger.warning("Falling back to local history store at %s", self._local.path)
        return self._use_local()

    def _use_local(self) -> BackendMode:
        self._mode = BackendMode.LOCAL
        self._publish(self._local.load())
        self._state = StoreState.READY
        logger.info("History store ready (local, %d records)", len(self._records))
        return self._mode

    # -------------------------- writes --------------------------
    async def save(self, content: Mapping[str, Any]) -> SaveResult:
        """Persist generated content; failures come back as a result, never raised."""
        try:
            record = await self._save(content)
        except HistoryError as exc:
            logger.warning("History save failed (%s): %s", exc.code, exc.message)
            return SaveResult(ok=False, error=exc.code, message=exc.message)
        if self._mode is BackendMode.LOCAL:
            message = "Saved to local history successfully!"
        else:
            message = "Saved to history successfully!"
        return SaveResult(ok=True, record=record, message=message)

    async def _save(self, content: Mapping[str, Any]) -> dict:
        if not self.is_ready:
            raise NotReadyError("Storage not ready. Please wait a moment.")
        async with self._save_lock:
            if len(self._records) >= self._limit:
                raise CapacityExceededError(f"History limit reached ({self._limit} items)")
            record = build_record(content)
            if self._mode is BackendMode.LOCAL:
                return self._save_local(record)
            return await self._save_remote(record)

    def _save_local(self, record: dict) -> dict:
        try:
            stored = self._local.append(record)
        except SerializationError as exc:
            raise SerializationFailureError(f"Error saving: {exc}") from exc
        self._publish(self._local.load())
        return stored

    async def _save_remote(self, record: dict) -> dict:
        try:
            result = await self._call(self._remote.create, record)
        except asyncio.TimeoutError as exc:
            raise BackendFailureError(
                f"Failed to save: remote store timed out after {self._timeout}s"
            ) from exc
        except Exception as exc:
            raise BackendFailureError(f"Error saving: {exc}") from exc
        if not result.ok:
            raise BackendFailureError(f"Failed to save: {result.error or 'Unknown error'}")
        return result.record or record

    # -------------------------- publishing --------------------------
    def _handle_remote_change(self, records: list[dict]) -> None:
        """Entry point for backend pushes; may be called from a worker thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            self._apply_remote_change(records)
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._apply_remote_change(records)
        else:
            loop.call_soon_threadsafe(self._apply_remote_change, records)

    def _apply_remote_change(self, records: list[dict]) -> None:
        if self._mode is BackendMode.LOCAL:
            # late push from a remote init that already timed out
            return
        self._publish(records)

    def _publish(self, records: list[dict] | None) -> None:
        self._records = dedupe_records(records)
        for listener in list(self._listeners):
            try:
                listener(self.current_list())
            except Exception:
                logger.exception("History listener %r failed", listener)

    async def _call(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a backend call on a worker thread; on timeout the call's token is cancelled."""
        self._loop = asyncio.get_running_loop()
        cancel = CancelToken()
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args, cancel), timeout=self._timeout
            )
        except (asyncio.TimeoutError, asyncio.CancelledError):
            cancel.cancel()
            raise


def build_history_store(settings: Settings | None = None) -> HistoryStore:
    """Pick the backends for this process: SQL when DATABASE_URL is set, always a JSON fallback."""
    settings = settings or get_settings()
    remote: RecordStore | None = SQLRecordStore() if settings.remote_configured else None
    local = JSONRecordStore(settings.history_file, settings.history_slot)
    return HistoryStore(
        local=local,
        remote=remote,
        limit=settings.history_limit,
        timeout=settings.backend_timeout_seconds,
        remote_init_attempts=settings.remote_init_attempts,
    )
