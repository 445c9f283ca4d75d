"""
fifoqueue - FIFO queue with async drain support

A first-in-first-out queue that works as a regular queue, or as an
automated async queue once a dequeue worker is set.

Sync mode:
    queue = FifoQueue()
    queue.enqueue(element)
    queue.dequeue(batch_size)

Async mode:
    queue = FifoQueue(worker=callback, batch_size=11, delay=500)
    queue.enqueue(element)
    queue.start_auto_dequeue()

Each auto-dequeue round calls worker(dequeued_elements, is_empty).

Modules:
- api: Drain policy and state models
- queue: Linked-list storage, extraction strategies, auto-dequeue loop
"""

from fifoqueue.modules.api import DrainPolicy, DrainState, ExtractionMode
from fifoqueue.modules.queue import FifoQueue

__version__ = "1.0.0"

__all__ = ["FifoQueue", "DrainPolicy", "DrainState", "ExtractionMode"]
