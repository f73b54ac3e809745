"""Client facade for SFTP file operations.

This module provides:
- Client: Per-operation entry points (single pair, list of pairs, and
  batched with a global timeout)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sftpbatch.client.orchestrator import BatchOrchestrator
from sftpbatch.client.tasks import TransferTask
from sftpbatch.client.transport import SftpTransport
from sftpbatch.core.config import TransferConfig
from sftpbatch.core.types import FilePair, OperationKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sftpbatch.client.transport import Transport
    from sftpbatch.core.config import ConnectionParameters

logger = logging.getLogger(__name__)


class Client:
    """SFTP client.

    Simple calls run one task covering every given pair on the calling
    thread and propagate its exceptions. upload_files() and
    download_files() with a batch_size go through a BatchOrchestrator
    instead and may raise BatchTimeoutError.

    Usage:
        client = Client(ConnectionParameters(host="sftp.example.com", username="me"))
        client.upload("report.csv", "/data/report.csv")
        client.upload_files(pairs, batch_size=20, timeout=300)
        client.check_files(["/data/a.csv", "/data/b.csv"])
    """

    def __init__(
        self,
        params: ConnectionParameters,
        transport: Transport | None = None,
        config: TransferConfig | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            params: Connection parameters shared by every task.
            transport: Backend for remote operations. Defaults to SftpTransport.
            config: Defaults for batched calls.
        """
        self.params = params
        self.transport: Transport = transport or SftpTransport()
        self.config = config or TransferConfig()

    @classmethod
    def create(cls, params: ConnectionParameters) -> Client:
        """Create a client with the default transport and config."""
        return cls(params)

    # Upload

    def upload(self, local_path: str, remote_path: str) -> bool:
        """Upload one file."""
        return self.upload_files([FilePair(local_path, remote_path)])

    def upload_files(
        self,
        pairs: Sequence[FilePair],
        batch_size: int | None = None,
        timeout: float | None = None,
    ) -> bool:
        """Upload many files.

        Without batch_size, all pairs are uploaded by one task on the
        calling thread. With batch_size, pairs are split into batches run
        concurrently under one deadline.

        Args:
            pairs: Local/remote pairs to upload.
            batch_size: Pairs per task for a batched upload.
            timeout: Deadline in seconds for a batched upload
                (default: config.timeout).

        Returns:
            True if every file was uploaded.

        Raises:
            UploadTimeoutError: If a batched upload missed its deadline.
        """
        return self._run(OperationKind.UPLOAD, pairs, batch_size, timeout)

    # Download

    def download(self, local_path: str, remote_path: str) -> bool:
        """Download one file."""
        return self.download_files([FilePair(local_path, remote_path)])

    def download_files(
        self,
        pairs: Sequence[FilePair],
        batch_size: int | None = None,
        timeout: float | None = None,
    ) -> bool:
        """Download many files, optionally batched like upload_files()."""
        return self._run(OperationKind.DOWNLOAD, pairs, batch_size, timeout)

    # Existence check

    def check_file(self, remote_path: str) -> bool:
        """Check that one remote file exists."""
        return self.check_files([remote_path])

    def check_files(self, remote_paths: Sequence[str]) -> bool:
        """Check that every remote file exists."""
        return self._run_once(OperationKind.EXISTS, [FilePair.same(p) for p in remote_paths])

    # Rename

    def rename(self, pair: FilePair) -> bool:
        """Rename one remote file from pair.local_path to pair.remote_path."""
        return self.rename_files([pair])

    def rename_files(self, pairs: Sequence[FilePair]) -> bool:
        """Rename many remote files."""
        return self._run_once(OperationKind.RENAME, pairs)

    # Delete

    def delete(self, remote_path: str) -> bool:
        """Delete one remote file."""
        return self.delete_files([remote_path])

    def delete_files(self, remote_paths: Sequence[str]) -> bool:
        """Delete many remote files."""
        return self._run_once(OperationKind.DELETE, [FilePair.same(p) for p in remote_paths])

    # Internals

    def make_task(
        self,
        kind: OperationKind,
        batch: Sequence[FilePair],
        cancel_check: Callable[[], bool] | None = None,
    ) -> TransferTask:
        """Build a task for one batch."""
        return TransferTask(
            kind=kind,
            params=self.params,
            batch=batch,
            transport=self.transport,
            cancel_check=cancel_check,
        )

    def _run_once(self, kind: OperationKind, pairs: Sequence[FilePair]) -> bool:
        return self.make_task(kind, list(pairs))()

    def _run(
        self,
        kind: OperationKind,
        pairs: Sequence[FilePair],
        batch_size: int | None,
        timeout: float | None,
    ) -> bool:
        if batch_size is None:
            return self._run_once(kind, pairs)

        logger.debug(f"Batched {kind.label} to {self.params.address}")
        orchestrator = BatchOrchestrator(
            lambda batch, cancel_check: self.make_task(kind, batch, cancel_check),
            kind=kind,
            max_workers=self.config.max_workers,
        )
        return orchestrator.execute_batched(
            pairs,
            batch_size,
            self.config.timeout if timeout is None else timeout,
        )
