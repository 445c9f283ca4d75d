import logging
from typing import Any, Iterator, List, Optional

from fifoqueue.config.provider import ConfigProvider, EnvConfigProvider
from fifoqueue.modules.api import DequeueWorker, DrainPolicy, DrainState, ExtractionMode

from .auto_dequeue import AutoDequeueLoop
from .extraction import select_strategy

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("value", "next")

    def __init__(self, value: Any):
        self.value = value
        self.next: Optional["_Node"] = None


class FifoQueue:
    def __init__(
        self,
        worker: Optional[DequeueWorker] = None,
        batch_size: int = 1,
        delay: float = 10,
        manual_stop: bool = False,
    ):
        """
        Initialize FIFO queue.

        Args:
            worker: Callback receiving (batch, is_empty); enables async mode
            batch_size: Elements per batch for worker-driven extraction
            delay: Milliseconds between auto-dequeue rounds
            manual_stop: Keep draining an empty queue until stop_auto_dequeue()

        Raises:
            pydantic.ValidationError: If batch_size < 1 or delay < 0
        """
        self.policy = DrainPolicy(
            worker=worker, batch_size=batch_size, delay=delay, manual_stop=manual_stop
        )
        self._head: Optional[_Node] = None
        self._tail: Optional[_Node] = None
        self._length = 0
        self._loop = AutoDequeueLoop(self)

    @classmethod
    def from_config(
        cls,
        worker: Optional[DequeueWorker] = None,
        provider: Optional[ConfigProvider] = None,
    ) -> "FifoQueue":
        """Build a queue from a configuration provider (environment by default)."""
        config = (provider or EnvConfigProvider()).get_queue_config()
        return cls(
            worker=worker,
            batch_size=config.batch_size,
            delay=config.delay_ms,
            manual_stop=config.manual_stop,
        )

    @property
    def state(self) -> DrainState:
        return self._loop.state

    @property
    def extraction_mode(self) -> ExtractionMode:
        return select_strategy(self.policy.has_worker).mode

    def enqueue(self, value: Any) -> None:
        """Append value at the tail."""
        node = _Node(value)

        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node

        self._tail = node
        self._length += 1

    def _dequeue_one(self) -> Optional[Any]:
        if self._head is None:
            return None

        node = self._head
        self._head = node.next
        if self._head is None:
            self._tail = None
        node.next = None
        self._length -= 1

        return node.value

    def dequeue_batch(self, batch_size: Optional[int] = None) -> List[Any]:
        """
        Remove up to batch_size elements from the head.

        Args:
            batch_size: Elements requested (None = policy.batch_size)

        Returns:
            Dequeued elements in FIFO order (empty if nothing to dequeue)
        """
        requested = self.policy.batch_size if batch_size is None else batch_size
        limit = max(0, min(requested, self._length))

        elements = [self._dequeue_one() for _ in range(limit)]

        # reset pointers if empty
        if self._length == 0:
            self.clear()

        return elements

    def dequeue(self, batch_size: int = 1) -> Optional[List[Any]]:
        """
        Remove and return elements from the queue.

        With a worker bound, batch_size is ignored: one batch of
        policy.batch_size elements goes to the worker and None is returned.

        Args:
            batch_size: Elements requested in direct mode

        Returns:
            Dequeued elements, or None in worker-driven mode
        """
        strategy = select_strategy(self.policy.has_worker)
        return strategy.extract(self, batch_size)

    def run_worker(self) -> bool:
        """
        Pass one batch to the worker.

        Returns:
            True if the worker was called, False if none is set
        """
        if not self.policy.has_worker:
            return False

        batch = self.dequeue_batch()
        self.policy.worker(batch, self.is_empty())
        return True

    def start_auto_dequeue(self) -> bool:
        """
        Drain the queue into the worker every policy.delay milliseconds.

        Must be called from a running asyncio event loop. The first round
        runs immediately; following rounds are scheduled on that loop.
        Without manual_stop the loop ends once the queue is empty.

        Returns:
            False if no worker is configured or no event loop is running,
            True otherwise
        """
        return self._loop.start()

    def stop_auto_dequeue(self) -> None:
        """Stop auto-dequeue after the already-scheduled round, if any."""
        self._loop.stop()

    async def wait_until_idle(self) -> None:
        """Wait until auto-dequeue has finished."""
        await self._loop.wait_until_idle()

    def set_dequeue_worker_callback(self, worker: DequeueWorker) -> None:
        """Bind a worker, which turns on auto-dequeue/async mode."""
        self.policy.worker = worker

    def remove_dequeue_worker_callback(self) -> None:
        """Unbind the worker, which turns off auto-dequeue/async mode."""
        self.policy.worker = None
        logger.debug("Dequeue worker removed")

    def peek(self) -> Optional[Any]:
        """Return the next element to be dequeued without removing it."""
        if self._head is None:
            return None
        return self._head.value

    def size(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def clear(self) -> None:
        """Empty the queue. The drain policy is kept."""
        self._head = None
        self._tail = None
        self._length = 0

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        node = self._head
        while node is not None:
            yield node.value
            node = node.next

    def __repr__(self) -> str:
        return (
            f"FifoQueue(size={self._length}, mode={self.extraction_mode.value}, "
            f"state={self.state.value})"
        )
