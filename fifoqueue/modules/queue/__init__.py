"""
Queue Module - Black Box Interface

Purpose: FIFO storage with synchronous and worker-driven extraction
Interface: enqueue(), dequeue(), start_auto_dequeue(), stop_auto_dequeue(), peek(), clear()
Hidden: Node chain, extraction strategy selection, timer scheduling

Can be replaced with any FIFO store offering the same drain contract.
"""

from .queue import FifoQueue

__all__ = ["FifoQueue"]
