import os
import random
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fifoqueue.modules.api import ExtractionMode
from fifoqueue.modules.queue import FifoQueue


def test_new_queue_is_empty(queue):
    """Test a fresh queue has no elements"""
    assert queue.is_empty()
    assert queue.size() == 0
    assert queue.peek() is None
    assert len(queue) == 0


def test_enqueue_increments_size(queue):
    """Test enqueue appends at the tail"""
    queue.enqueue("a")
    queue.enqueue("b")

    assert queue.size() == 2
    assert not queue.is_empty()
    assert queue.peek() == "a"
    assert list(queue) == ["a", "b"]


def test_fifo_order_one_at_a_time(queue):
    """Test dequeuing one at a time returns insertion order"""
    values = [random.randint(0, 1000) for _ in range(50)]
    for v in values:
        queue.enqueue(v)

    dequeued = []
    while not queue.is_empty():
        dequeued.extend(queue.dequeue())

    assert dequeued == values


def test_size_after_enqueues_and_dequeues(queue):
    """Test size equals N - M"""
    for i in range(20):
        queue.enqueue(i)
    for _ in range(7):
        queue.dequeue()

    assert queue.size() == 13


def test_dequeue_without_worker_scenario(queue):
    """Test default dequeue returns single-element lists then an empty list"""
    for i in range(3):
        queue.enqueue(i)

    assert queue.dequeue() == [0]
    assert queue.dequeue() == [1]
    assert queue.dequeue() == [2]
    assert queue.dequeue() == []
    assert queue.is_empty()


def test_dequeue_batch_larger_than_size_is_clamped(queue):
    """Test batch requests larger than the queue return everything"""
    for i in range(3):
        queue.enqueue(i)

    assert queue.dequeue(4) == [0, 1, 2]
    assert queue.is_empty()
    assert queue.peek() is None


def test_dequeue_batch_uses_policy_batch_size(hundred_queue):
    """Test dequeue_batch(None) uses the configured batch size"""
    batch = hundred_queue.dequeue_batch(None)

    assert batch == list(range(11))
    assert hundred_queue.size() == 89
    assert hundred_queue.peek() == 11


@pytest.mark.parametrize("requested", [0, 1, 5, 10, 15])
def test_dequeue_batch_returns_min_of_request_and_size(queue, requested):
    """Test dequeue_batch(k) returns min(k, S) elements"""
    for i in range(10):
        queue.enqueue(i)

    batch = queue.dequeue_batch(requested)

    assert len(batch) == min(requested, 10)
    assert queue.size() == 10 - min(requested, 10)
    assert batch == list(range(min(requested, 10)))


def test_dequeue_batch_negative_request_is_clamped(queue):
    """Test negative batch requests return nothing"""
    queue.enqueue(1)

    assert queue.dequeue_batch(-3) == []
    assert queue.size() == 1


def test_dequeue_batch_on_empty_queue(queue):
    """Test extraction on an empty queue returns an empty list"""
    assert queue.dequeue_batch(5) == []
    assert queue.dequeue_batch() == []


def test_enqueue_after_drain_reuses_queue(queue):
    """Test the chain is rebuilt correctly after emptying"""
    queue.enqueue(1)
    queue.dequeue()
    queue.enqueue(2)
    queue.enqueue(3)

    assert queue.peek() == 2
    assert queue.dequeue(2) == [2, 3]


def test_peek_does_not_change_queue(queue):
    """Test peek keeps size and order"""
    for i in range(5):
        queue.enqueue(i)

    for _ in range(3):
        assert queue.peek() == 0

    assert queue.size() == 5
    assert list(queue) == [0, 1, 2, 3, 4]


def test_none_elements_are_preserved(queue):
    """Test None can be stored as an element"""
    queue.enqueue(None)
    queue.enqueue("x")

    assert queue.size() == 2
    assert queue.dequeue(2) == [None, "x"]


def test_clear_empties_queue(queue):
    """Test clear resets the queue"""
    for i in range(5):
        queue.enqueue(i)

    queue.clear()

    assert queue.is_empty()
    assert queue.size() == 0
    assert queue.peek() is None
    assert list(queue) == []


def test_clear_is_idempotent(queue):
    """Test clearing an empty queue is a no-op"""
    queue.clear()
    queue.clear()

    assert queue.is_empty()
    assert queue.dequeue() == []


def test_clear_keeps_policy(worker):
    """Test clear does not touch the drain policy"""
    q = FifoQueue(worker=worker, batch_size=4, delay=25, manual_stop=True)
    q.enqueue(1)

    q.clear()

    assert q.policy.worker is worker
    assert q.policy.batch_size == 4
    assert q.policy.delay == 25
    assert q.policy.manual_stop is True


class TestWorkerDrivenDequeue:
    """Test the coupling between a bound worker and dequeue()."""

    def test_mode_follows_worker_binding(self, worker):
        """Test extraction mode switches with the worker"""
        q = FifoQueue()
        assert q.extraction_mode == ExtractionMode.DIRECT_BATCH

        q.set_dequeue_worker_callback(worker)
        assert q.extraction_mode == ExtractionMode.WORKER_DRIVEN

        q.remove_dequeue_worker_callback()
        assert q.extraction_mode == ExtractionMode.DIRECT_BATCH

    def test_dequeue_with_worker_returns_none(self, worker):
        """Test dequeue() hands one batch to the worker and ignores batch_size"""
        q = FifoQueue(worker=worker, batch_size=2)
        for i in range(5):
            q.enqueue(i)

        result = q.dequeue(4)

        assert result is None
        worker.assert_called_once_with([0, 1], False)
        assert q.size() == 3

    def test_dequeue_with_worker_on_empty_queue(self, worker):
        """Test worker still gets called with an empty batch"""
        q = FifoQueue(worker=worker)

        assert q.dequeue() is None
        worker.assert_called_once_with([], True)

    def test_run_worker_reports_empty_after_extraction(self, worker):
        """Test is_empty is evaluated after the batch is taken"""
        q = FifoQueue(worker=worker, batch_size=3)
        for i in range(3):
            q.enqueue(i)

        assert q.run_worker() is True
        worker.assert_called_once_with([0, 1, 2], True)

    def test_run_worker_without_worker_is_noop(self, queue):
        """Test run_worker does nothing without a worker"""
        queue.enqueue(1)

        assert queue.run_worker() is False
        assert queue.size() == 1

    def test_worker_return_value_is_discarded(self):
        """Test the worker's result never reaches the caller"""
        q = FifoQueue(worker=MagicMock(return_value="ignored"))
        q.enqueue(1)

        assert q.dequeue() is None

    def test_remove_worker_restores_direct_batch(self, worker):
        """Test removing the worker returns batches again"""
        q = FifoQueue(worker=worker)
        for i in range(3):
            q.enqueue(i)

        q.remove_dequeue_worker_callback()

        assert q.dequeue(4) == [0, 1, 2]
        worker.assert_not_called()


def test_repr_shows_size_mode_and_state(queue):
    """Test repr summarises the queue"""
    queue.enqueue(1)

    assert repr(queue) == "FifoQueue(size=1, mode=direct_batch, state=idle)"
