"""Background event loop for fire-and-forget snapshot writes.

Setters run on the caller's thread and must not wait for storage. Each save
is submitted as a coroutine to one persistent asyncio loop running in a
daemon thread; the caller gets a ``concurrent.futures.Future`` back and is
free to ignore it.

    caller thread                      writer thread
    -------------                      -------------
    set_field()
      -> notify
        -> submit(write coro) -------> asyncio loop runs write
      <- returns immediately            Future resolved on completion

Usage:
    bridge = get_async_bridge()  # Singleton, started on first use
    future = bridge.submit(write_snapshot())
"""

import asyncio
import atexit
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Coroutine

logger = logging.getLogger(__name__)

# Upper bound on how long interpreter exit waits for in-flight writes
EXIT_DRAIN_TIMEOUT = 10.0


class AsyncBridge:
    """Persistent asyncio event loop owned by a dedicated thread.

    Coroutines may be submitted from any thread. ``drain()`` waits for what is
    already scheduled; stopping without draining cancels whatever is still
    pending on the loop.
    """

    def __init__(self, name: str = "autosave-writer"):
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()
        self._lock = threading.Lock()

    def _run_loop(self):
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        # File IO (aiofiles) runs on this pool
        self._loop.set_default_executor(
            ThreadPoolExecutor(thread_name_prefix=f"{self._name}-io")
        )
        self._started.set()

        try:
            self._loop.run_forever()
        finally:
            pending = asyncio.all_tasks(self._loop)
            for task in pending:
                task.cancel()
            if pending:
                self._loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )
            self._loop.run_until_complete(self._loop.shutdown_default_executor())
            self._loop.close()
            self._loop = None

    def start(self) -> None:
        """Start the loop thread. No-op if already running."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return

            self._started.clear()
            self._thread = threading.Thread(
                target=self._run_loop,
                name=self._name,
                daemon=True,
            )
            self._thread.start()

            self._started.wait(timeout=5.0)
            if not self._started.is_set():
                raise RuntimeError("Failed to start async bridge event loop")

    def drain(self, timeout: float | None = None) -> bool:
        """Wait until every task scheduled on the loop has finished.

        Tasks scheduled while draining are waited for too. Returns False if
        some are still running when the timeout expires.
        """
        loop = self._loop
        if loop is None or not loop.is_running():
            return True
        if threading.current_thread() is self._thread:
            raise RuntimeError("drain() cannot be called from the bridge loop")

        future = asyncio.run_coroutine_threadsafe(_wait_pending(timeout), loop)
        try:
            return future.result(None if timeout is None else timeout + 1.0)
        except FutureTimeout:
            future.cancel()
            return False

    def stop(self, drain_timeout: float | None = None) -> None:
        """Stop the loop and join the thread. Safe to call multiple times.

        With ``drain_timeout`` set, pending work gets that long to finish
        before the loop stops and cancels the rest.
        """
        if drain_timeout is not None and not self.drain(drain_timeout):
            logger.warning("Stopping async bridge with writes still pending")

        with self._lock:
            if self._loop is not None:
                self._loop.call_soon_threadsafe(self._loop.stop)

            if self._thread is not None:
                self._thread.join(timeout=5.0)
                self._thread = None

            self._started.clear()

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        """Schedule coro on the loop and return its Future without waiting.

        Raises:
            RuntimeError: If the bridge is not started
        """
        if self._loop is None:
            coro.close()
            raise RuntimeError("AsyncBridge not started. Call start() first.")

        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._loop is not None
            and self._loop.is_running()
        )


async def _wait_pending(timeout: float | None) -> bool:
    deadline = None if timeout is None else time.monotonic() + timeout
    current = asyncio.current_task()
    while True:
        pending = {t for t in asyncio.all_tasks() if t is not current}
        if not pending:
            return True
        remaining = None if deadline is None else deadline - time.monotonic()
        if remaining is not None and remaining <= 0:
            return False
        await asyncio.wait(pending, timeout=remaining)


# Module-level singleton
_bridge_instance: AsyncBridge | None = None
_bridge_lock = threading.Lock()
_exit_hook_registered = False


def get_async_bridge() -> AsyncBridge:
    """Return the shared bridge, starting (or restarting) it as needed."""
    global _bridge_instance

    with _bridge_lock:
        if _bridge_instance is None:
            _bridge_instance = AsyncBridge()
            _bridge_instance.start()
            atexit.register(_cleanup_bridge, EXIT_DRAIN_TIMEOUT)
            _register_exit_drain()

        elif not _bridge_instance.is_running:
            _bridge_instance.start()

        return _bridge_instance


def _register_exit_drain():
    # Threading exit hooks run in reverse registration order, before atexit.
    # concurrent.futures.thread registered its shutdown hook at import, so
    # this drain runs while the IO pool still accepts work.
    global _exit_hook_registered
    if _exit_hook_registered:
        return
    try:
        threading._register_atexit(_drain_at_exit)
    except RuntimeError as e:
        logger.debug("Exit drain not registered: %s", e)
        return
    _exit_hook_registered = True


def _drain_at_exit():
    bridge = _bridge_instance
    if bridge is not None and not bridge.drain(EXIT_DRAIN_TIMEOUT):
        logger.warning("Exiting with settings writes still pending")


def _cleanup_bridge(drain_timeout: float | None = None):
    global _bridge_instance
    if _bridge_instance is not None:
        try:
            _bridge_instance.stop(drain_timeout)
        except RuntimeError as e:
            logger.warning("Async bridge did not stop cleanly: %s", e)
        _bridge_instance = None


def reset_async_bridge():
    """Stop and forget the shared bridge (for testing)."""
    with _bridge_lock:
        _cleanup_bridge()
