#!/usr/bin/env python3
"""
fifoqueue - Demo Entry Point

Runs the queue in async mode (auto-dequeue of 100 elements) or in
sync mode (one-by-one and batch dequeue). Settings come from the
FIFOQUEUE_* environment variables unless overridden on the command line.
"""

import argparse
import asyncio
import logging
import logging.config as log_config
from typing import Any, List

from fifoqueue.config.provider import EnvConfigProvider, QueueConfig
from fifoqueue.logging_config import get_logging_config
from fifoqueue.modules.queue import FifoQueue

logger = logging.getLogger("fifoqueue.demo")


def print_batch(elements: List[Any], is_empty: bool) -> None:
    logger.info(f"Got elements from the queue: {elements} :: Is queue empty?: {is_empty}")


async def run_async(queue: FifoQueue) -> None:
    for i in range(100):
        queue.enqueue(i)

    logger.info(f"Queue size: {queue.size()}")
    logger.info(f"First element to be dequeued: {queue.peek()}")
    logger.info("Starting dequeue worker")

    queue.start_auto_dequeue()
    await queue.wait_until_idle()


def run_sync(queue: FifoQueue) -> None:
    queue.clear()
    for i in range(3):
        queue.enqueue(i)

    queue.remove_dequeue_worker_callback()
    for _ in range(4):
        logger.info(f"Dequeued element: {queue.dequeue()}")

    for i in range(3):
        queue.enqueue(i)
    logger.info(f"Dequeued elements: {queue.dequeue(4)}")


def build_parser(config: QueueConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="fifoqueue demo")
    parser.add_argument("--sync", action="store_true", help="Run the synchronous demo")
    parser.add_argument("--batch-size", type=int, default=config.batch_size)
    parser.add_argument("--delay", type=float, default=config.delay_ms, help="Delay between rounds in ms")
    parser.add_argument("--log-level", default=config.log_level)
    return parser


def main() -> None:
    config = EnvConfigProvider().get_queue_config()
    args = build_parser(config).parse_args()

    log_config.dictConfig(get_logging_config(args.log_level))
    # demo output goes through the same handler
    logging.getLogger("fifoqueue.demo").setLevel(logging.INFO)

    queue = FifoQueue(
        worker=print_batch,
        batch_size=args.batch_size,
        delay=args.delay,
        manual_stop=config.manual_stop,
    )

    if args.sync:
        run_sync(queue)
    else:
        if queue.policy.manual_stop:
            logger.warning("FIFOQUEUE_MANUAL_STOP is set; the demo stops the loop once the queue is empty")
        asyncio.run(_run_until_drained(queue))


async def _run_until_drained(queue: FifoQueue) -> None:
    if not queue.policy.manual_stop:
        await run_async(queue)
        return

    for i in range(100):
        queue.enqueue(i)
    queue.start_auto_dequeue()
    while not queue.is_empty():
        await asyncio.sleep(queue.policy.delay_seconds)
    queue.stop_auto_dequeue()
    await queue.wait_until_idle()


if __name__ == "__main__":
    main()
