import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from fifoqueue.modules.api import DrainState

if TYPE_CHECKING:
    from .queue import FifoQueue

logger = logging.getLogger(__name__)


class AutoDequeueLoop:
    def __init__(self, queue: "FifoQueue"):
        """
        Initialize the auto-dequeue loop.

        Args:
            queue: Queue whose drain policy drives the loop
        """
        self._queue = queue
        self._state = DrainState.IDLE
        self._stop_requested = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._idle: Optional[asyncio.Event] = None
        self.rounds = 0

    @property
    def state(self) -> DrainState:
        return self._state

    def start(self) -> bool:
        """
        Start draining the queue into the worker.

        Returns:
            False if no worker is configured or no event loop is running,
            True otherwise

        Logic:
        1. Refuse without a worker or outside a running event loop
        2. If a round is already scheduled, keep it and withdraw any stop request
        3. Otherwise run the first round now; it schedules the next one
        """
        if not self._queue.policy.has_worker:
            logger.debug("Auto-dequeue not started: no dequeue worker configured")
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Auto-dequeue not started: no running event loop")
            return False

        if self._state != DrainState.IDLE:
            self._stop_requested = False
            self._state = DrainState.DRAINING
            return True

        self._stop_requested = False
        self._state = DrainState.DRAINING
        self._loop = loop
        self._idle = asyncio.Event()
        self.rounds = 0

        logger.info(
            f"Auto-dequeue started (size={self._queue.size()}, "
            f"batch_size={self._queue.policy.batch_size}, delay={self._queue.policy.delay}ms, "
            f"manual_stop={self._queue.policy.manual_stop})"
        )

        try:
            self._round()
        except Exception:
            self._finish("first round failed")
            raise

        return True

    def stop(self) -> None:
        """
        Request the loop to stop.

        A round that is already scheduled is not cancelled: it still makes
        its worker call, then sees the request and does not reschedule.
        """
        if self._state == DrainState.IDLE:
            logger.debug("Auto-dequeue stop requested while idle")
            return

        self._stop_requested = True
        self._state = DrainState.STOPPED
        logger.info("Auto-dequeue stop requested")

    async def wait_until_idle(self) -> None:
        """Wait for the loop to go idle."""
        if self._state == DrainState.IDLE or self._idle is None:
            return
        await self._idle.wait()

    def _round(self) -> None:
        queue = self._queue
        policy = queue.policy

        # Without manual stop an empty queue ends the loop before the worker is called
        if policy.manual_stop or not queue.is_empty():
            queue.run_worker()
        self.rounds += 1

        if self._should_continue():
            self._loop.call_later(policy.delay_seconds, self._scheduled_round)
            logger.debug(f"Auto-dequeue round {self.rounds} done, next in {policy.delay}ms")
        else:
            self._finish()

    def _scheduled_round(self) -> None:
        try:
            self._round()
        except Exception:
            logger.exception(f"Dequeue worker failed in round {self.rounds + 1}, auto-dequeue stopped")
            self._finish("worker failed")

    def _should_continue(self) -> bool:
        policy = self._queue.policy

        if self._stop_requested:
            return False
        if not policy.has_worker:
            return False
        if policy.manual_stop:
            return True
        return not self._queue.is_empty()

    def _finish(self, reason: Optional[str] = None) -> None:
        if reason is None:
            if self._stop_requested:
                reason = "stop requested"
            elif not self._queue.policy.has_worker:
                reason = "worker removed"
            else:
                reason = "queue empty"

        self._stop_requested = False
        self._state = DrainState.IDLE
        if self._idle is not None:
            self._idle.set()

        logger.info(f"Auto-dequeue finished after {self.rounds} rounds ({reason})")
