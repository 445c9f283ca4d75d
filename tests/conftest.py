"""
Shared pytest fixtures for fifoqueue tests.

This module provides common fixtures including:
- Worker mocks recording (batch, is_empty) calls
- Pre-filled queues for sync and async tests
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fifoqueue.modules.queue import FifoQueue


@pytest.fixture
def worker():
    """Mock dequeue worker."""
    return MagicMock(return_value=None)


@pytest.fixture
def queue():
    """Queue without a worker (sync mode)."""
    return FifoQueue()


@pytest.fixture
def hundred_queue():
    """Queue holding 0..99 with batch size 11."""
    q = FifoQueue(batch_size=11)
    for i in range(100):
        q.enqueue(i)
    return q
