"""Deadline-bounded concurrent execution of batched tasks.

This module provides:
- BatchOrchestrator: Partitions file pairs into batches, runs one task per
  batch on a private thread pool and reduces the outcomes to one verdict
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from sftpbatch.client.batching import batched
from sftpbatch.client.outcomes import classify_future, reduce_outcomes
from sftpbatch.client.types import BatchTimeoutError, UploadTimeoutError
from sftpbatch.core.types import OperationKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from concurrent.futures import Future

    from sftpbatch.client.tasks import Task
    from sftpbatch.core.types import FilePair

    TaskFactory = Callable[[list[FilePair], Callable[[], bool]], Task]

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """Run a batched operation under a single global deadline.

    Every call to execute_batched() creates, uses and tears down its own
    thread pool; nothing is shared between calls. Individual task failures
    never abort sibling tasks and surface only as a False verdict. Only a
    deadline breach (BatchTimeoutError) or an interruption of the waiting
    thread (KeyboardInterrupt) escape to the caller.

    Usage:
        orchestrator = BatchOrchestrator(
            lambda batch, cancel_check: TransferTask(
                OperationKind.UPLOAD, params, batch, transport, cancel_check
            ),
            kind=OperationKind.UPLOAD,
        )
        ok = orchestrator.execute_batched(pairs, batch_size=50, timeout=600)
    """

    def __init__(
        self,
        task_factory: TaskFactory,
        kind: OperationKind = OperationKind.UPLOAD,
        max_workers: int = 1,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            task_factory: Builds a task from a batch and a cancel check.
            kind: Operation performed by the tasks, for messages and errors.
            max_workers: Worker threads in each call's pool.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._task_factory = task_factory
        self._kind = kind
        self._max_workers = max_workers

    @property
    def kind(self) -> OperationKind:
        """Get the operation kind of this orchestrator."""
        return self._kind

    def execute_batched(
        self,
        file_pairs: Sequence[FilePair],
        batch_size: int,
        timeout: float,
    ) -> bool:
        """Execute the operation over all pairs, batch_size pairs per task.

        Args:
            file_pairs: All file pairs of the call.
            batch_size: Maximum pairs per task. Non-positive means no tasks.
            timeout: Seconds to wait for all tasks, counted from the start
                of the wait.

        Returns:
            True only if every task returned True.

        Raises:
            BatchTimeoutError: If tasks were still running at the deadline.
            KeyboardInterrupt: If the wait was interrupted.
        """
        if not file_pairs:
            return True

        file_count = len(file_pairs)
        cancel_event = threading.Event()
        tasks = [
            self._task_factory(batch, cancel_event.is_set)
            for batch in batched(file_pairs, batch_size)
        ]
        logger.info(
            f"Starting {self._kind.label} of {file_count} files "
            f"in {len(tasks)} batches (timeout {timeout:g}s)"
        )

        executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix=f"sftpbatch-{self._kind.label}",
        )
        futures: list[Future[bool]] = []
        start_time = time.monotonic()
        try:
            for task in tasks:
                futures.append(executor.submit(task))

            # No further submissions; wait for the queue to drain
            executor.shutdown(wait=False)
            _, not_done = wait(futures, timeout=timeout)
            if not_done:
                logger.error(
                    f"{self._kind.label.capitalize()} of {file_count} files timed out "
                    f"after {timeout:g} seconds ({len(not_done)} of {len(futures)} "
                    f"tasks unfinished)"
                )
                raise self._timeout_error(file_count, timeout)

            success = reduce_outcomes(classify_future(future) for future in futures)
            elapsed = time.monotonic() - start_time
            logger.info(
                f"Finished {self._kind.label} of {file_count} files "
                f"in {elapsed:.2f}s, success={success}"
            )
            return success

        except KeyboardInterrupt:
            logger.error("Interrupted while waiting for tasks to finish!")
            raise

        finally:
            # Running tasks stop at their next file boundary
            cancel_event.set()
            for future in futures:
                future.cancel()
            executor.shutdown(wait=False, cancel_futures=True)

    def _timeout_error(self, file_count: int, timeout: float) -> BatchTimeoutError:
        if self._kind == OperationKind.UPLOAD:
            return UploadTimeoutError(file_count, timeout)
        return BatchTimeoutError(file_count, timeout, self._kind)
