"""Extraction strategies selected by whether a dequeue worker is bound."""

from typing import TYPE_CHECKING, Any, List, Optional, Protocol

from fifoqueue.modules.api import ExtractionMode

if TYPE_CHECKING:
    from .queue import FifoQueue


class ExtractionStrategy(Protocol):
    """Protocol for the dequeue() behaviour of a queue."""

    mode: ExtractionMode

    def extract(self, queue: "FifoQueue", batch_size: int) -> Optional[List[Any]]:
        """
        Extract elements from the queue.

        Args:
            queue: Queue to extract from
            batch_size: Requested batch size (may be ignored)

        Returns:
            Dequeued elements, or None when they were handed to the worker
        """
        ...


class DirectBatch:
    """Return the batch to the caller."""

    mode = ExtractionMode.DIRECT_BATCH

    def extract(self, queue: "FifoQueue", batch_size: int) -> List[Any]:
        return queue.dequeue_batch(batch_size)


class WorkerDriven:
    """Hand one configured-size batch to the worker and return nothing."""

    mode = ExtractionMode.WORKER_DRIVEN

    def extract(self, queue: "FifoQueue", batch_size: int) -> None:
        # batch_size is ignored, the worker always gets policy.batch_size
        queue.run_worker()
        return None


DIRECT_BATCH = DirectBatch()
WORKER_DRIVEN = WorkerDriven()


def select_strategy(has_worker: bool) -> ExtractionStrategy:
    """Pick the strategy for the current worker binding."""
    return WORKER_DRIVEN if has_worker else DIRECT_BATCH
