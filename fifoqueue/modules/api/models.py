"""
fifoqueue shared data models.

These models define the drain policy and the states passed between
the queue, its extraction strategies and the auto-dequeue loop.
"""

from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Worker callback: receives the dequeued batch and whether the queue is empty now
DequeueWorker = Callable[[List[Any], bool], Any]

# Enums


class DrainState(str, Enum):
    """State of the auto-dequeue loop."""

    IDLE = "idle"
    DRAINING = "draining"
    STOPPED = "stopped"


class ExtractionMode(str, Enum):
    """How dequeue() extracts elements."""

    DIRECT_BATCH = "direct_batch"
    WORKER_DRIVEN = "worker_driven"


# Policy Models


class DrainPolicy(BaseModel):
    """Configuration bundle governing worker callback, batch size, delay and stop mode."""

    model_config = ConfigDict(validate_assignment=True)

    worker: Optional[DequeueWorker] = Field(
        default=None, description="Callback invoked with (batch, is_empty) on each drain round"
    )
    batch_size: int = Field(
        default=1, description="Elements extracted per batch", ge=1
    )
    delay: float = Field(
        default=10, description="Milliseconds between auto-dequeue rounds", ge=0
    )
    manual_stop: bool = Field(
        default=False, description="Keep draining on an empty queue until stopped"
    )

    @property
    def delay_seconds(self) -> float:
        """Delay converted for the event loop."""
        return self.delay / 1000.0

    @property
    def has_worker(self) -> bool:
        return self.worker is not None and callable(self.worker)
