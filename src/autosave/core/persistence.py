"""Persistence trigger: save the whole settings object on every change.

The snapshot is taken and encoded synchronously inside the notification, so
it always reflects one complete in-memory state. The write itself is handed
to the async bridge and the setter returns without waiting for it.

Overlapping writes are left racy by default: each one opens and rewrites the
file on its own and the last write to *complete* decides the file content.
With ``ordered=True`` writes queue on a lock in dispatch order instead, so the
file converges to the latest snapshot.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future, wait
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .fields import FieldChanged
from .ports import SnapshotWriter
from .snapshot import encode_snapshot

if TYPE_CHECKING:
    from ..async_bridge import AsyncBridge
    from .observable import ObservableSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveOutcome:
    path: Path
    ok: bool
    error: str | None = None


class PersistenceTrigger:
    """Subscribes to one settings object and persists it on each change."""

    def __init__(
        self,
        path: Path,
        writer: SnapshotWriter,
        bridge: "AsyncBridge",
        *,
        indent: int = 2,
        ordered: bool = False,
    ):
        self.path = Path(path)
        self.ordered = ordered
        self._writer = writer
        self._bridge = bridge
        self._indent = indent
        self._settings: ObservableSettings | None = None
        self._inflight: set[Future] = set()
        self._inflight_lock = threading.Lock()
        # Created on the bridge loop; replaced if the bridge restarts
        self._write_lock: asyncio.Lock | None = None
        self._write_lock_loop: asyncio.AbstractEventLoop | None = None

    def attach(self, settings: "ObservableSettings") -> None:
        if self._settings is not None and self._settings is not settings:
            raise RuntimeError("PersistenceTrigger is already attached to another object")
        if self._settings is None:
            self._settings = settings
            settings.subscribe(self.on_notified)

    def detach(self) -> None:
        if self._settings is not None:
            self._settings.unsubscribe(self.on_notified)
            self._settings = None

    def on_notified(self, event: FieldChanged) -> Future:
        logger.debug("Saving %s after %s changed", self.path, event.name)
        return self.save()

    def save(self) -> Future:
        """Dispatch a write of the current state; never raises."""
        if self._settings is None:
            return self._failed("not attached to a settings object")

        try:
            data = encode_snapshot(self._settings.snapshot(), indent=self._indent)
            state = self._settings.describe()
        except (TypeError, ValueError) as e:
            logger.error("Could not serialize settings for %s: %s", self.path, e)
            return self._failed(str(e))

        try:
            future = self._bridge.submit(self._write(data, state))
        except RuntimeError as e:
            logger.error("Could not dispatch settings save to %s: %s", self.path, e)
            return self._failed(str(e))

        with self._inflight_lock:
            self._inflight.add(future)
        future.add_done_callback(self._forget)
        return future

    @property
    def pending(self) -> int:
        with self._inflight_lock:
            return len(self._inflight)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until every in-flight write has finished."""
        with self._inflight_lock:
            futures = list(self._inflight)
        if not futures:
            return True
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    async def _write(self, data: bytes, state: str) -> SaveOutcome:
        try:
            if self.ordered:
                async with self._lock_for_loop():
                    await self._writer.write(self.path, data)
            else:
                await self._writer.write(self.path, data)
        except asyncio.CancelledError:
            logger.error("Save to %s was cancelled before completing", self.path)
            raise
        except Exception as e:
            logger.error("Failed to save settings to %s: %s", self.path, e)
            return SaveOutcome(self.path, False, str(e))

        logger.info("Settings saved to %s\n%s", self.path, state)
        return SaveOutcome(self.path, True)

    def _lock_for_loop(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._write_lock is None or self._write_lock_loop is not loop:
            self._write_lock = asyncio.Lock()
            self._write_lock_loop = loop
        return self._write_lock

    def _forget(self, future: Future) -> None:
        with self._inflight_lock:
            self._inflight.discard(future)

    def _failed(self, error: str) -> Future:
        future: Future = Future()
        future.set_result(SaveOutcome(self.path, False, error))
        return future
