"""Task abstraction binding one operation to one batch.

This module provides:
- Task: Protocol for a zero-argument unit of work returning a verdict
- TransferTask: Task that delegates one operation kind to a Transport
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sftpbatch.client.transport import Transport
    from sftpbatch.core.config import ConnectionParameters
    from sftpbatch.core.types import FilePair, OperationKind

logger = logging.getLogger(__name__)


class Task(Protocol):
    """Protocol for units of work handed to the orchestrator.

    A task takes no arguments, blocks until done and returns True only if
    every file pair it covers succeeded. It may raise.
    """

    def __call__(self) -> bool: ...


@dataclass(frozen=True)
class TransferTask:
    """One operation over one batch of file pairs.

    Tasks are immutable after construction and share nothing with sibling
    tasks except read-only connection parameters and the cancel check.

    Attributes:
        kind: Operation to perform.
        params: Connection parameters forwarded to the transport.
        batch: File pairs covered by this task.
        transport: Backend executing the operation.
        cancel_check: Optional function that returns True if cancelled.
    """

    kind: OperationKind
    params: ConnectionParameters
    batch: Sequence[FilePair]
    transport: Transport
    cancel_check: Callable[[], bool] | None = None

    def __call__(self) -> bool:
        """Run the operation and return the batch verdict."""
        logger.debug(f"{self.kind.label} task started: {len(self.batch)} files")
        success = self.transport.execute(
            self.kind,
            self.batch,
            self.params,
            cancel_check=self.cancel_check,
        )
        logger.debug(
            f"{self.kind.label} task finished: {len(self.batch)} files, success={success}"
        )
        return success
