"""Background removal of expired conversation contexts.

Expired contexts are already invisible to readers. The sweeper only
reclaims their memory on a fixed interval.
"""

import asyncio

from registrar.conversation.store import ContextStore
from registrar.observability.logging import get_logger

logger = get_logger(__name__)


class ContextSweeper:
    """Periodically calls ContextStore.sweep on the running event loop."""

    def __init__(self, store: ContextStore, interval_seconds: float = 300):
        """Initialize sweeper.

        Args:
            store: Store to sweep
            interval_seconds: Seconds between sweeps
        """
        self._store = store
        self._interval_seconds = interval_seconds
        self._running = False
        self._sweep_task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the sweep loop."""
        if self._running:
            logger.warning("sweeper_already_running")
            return

        self._running = True
        self._sweep_task = asyncio.create_task(self._sweep_loop())

        logger.info("sweeper_started", interval_seconds=self._interval_seconds)

    async def stop(self) -> None:
        """Stop the sweep loop."""
        if not self._running:
            return

        self._running = False

        if self._sweep_task:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
            self._sweep_task = None

        logger.info("sweeper_stopped")

    async def _sweep_loop(self) -> None:
        """Background loop removing expired contexts."""
        while self._running:
            try:
                await self._store.sweep()
            except Exception as e:
                logger.error("sweep_loop_error", error=str(e))

            await asyncio.sleep(self._interval_seconds)
