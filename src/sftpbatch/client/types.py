"""Error types for sftpbatch client operations."""

from __future__ import annotations

from sftpbatch.core.types import OperationKind


class TransferError(Exception):
    """Base exception for transfer errors."""


class BatchTimeoutError(TransferError):
    """A batched operation did not finish before its deadline.

    Attributes:
        file_count: Total number of file pairs in the batched call.
        timeout: The configured deadline in seconds.
        kind: The operation that timed out.
    """

    def __init__(self, file_count: int, timeout: float, kind: OperationKind) -> None:
        super().__init__(
            f"{kind.label.capitalize()} of {file_count} files timed out "
            f"after {timeout:g} seconds!"
        )
        self.file_count = file_count
        self.timeout = timeout
        self.kind = kind


class UploadTimeoutError(BatchTimeoutError):
    """A batched upload did not finish before its deadline."""

    def __init__(self, file_count: int, timeout: float) -> None:
        super().__init__(file_count, timeout, OperationKind.UPLOAD)


class TaskCancelledError(TransferError):
    """Raised inside a task that observed a cancellation request."""
