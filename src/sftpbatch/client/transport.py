"""Transport layer executing remote operations over SFTP.

This module provides:
- Transport: Protocol every task backend implements
- SftpTransport: paramiko-backed implementation, one session per call
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import paramiko

from sftpbatch.client.types import TaskCancelledError
from sftpbatch.core.types import OperationKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sftpbatch.core.config import ConnectionParameters
    from sftpbatch.core.types import FilePair

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Protocol for the remote operation capability.

    Implementations perform one operation kind over a whole batch and
    report the logical AND of the per-pair results.
    """

    def execute(
        self,
        kind: OperationKind,
        batch: Sequence[FilePair],
        params: ConnectionParameters,
        cancel_check: Callable[[], bool] | None = None,
    ) -> bool:
        """Execute the operation over every pair in the batch.

        Args:
            kind: Operation to perform.
            batch: File pairs to operate on.
            params: Connection parameters for the remote endpoint.
            cancel_check: Optional function that returns True if cancelled.

        Returns:
            True if every pair succeeded, False otherwise.

        Raises:
            TaskCancelledError: If cancel_check fired mid-batch.
            Exception: Connection, authentication or protocol failures.
        """
        ...


class SftpTransport:
    """Execute batches against an SFTP server using paramiko.

    Each execute() call opens its own SSH connection and SFTP session and
    closes both before returning, so one instance can be shared by tasks
    running on different threads.

    Usage:
        transport = SftpTransport()
        ok = transport.execute(OperationKind.UPLOAD, pairs, params)
    """

    def __init__(self) -> None:
        self._handlers: dict[OperationKind, Callable[[paramiko.SFTPClient, FilePair], bool]] = {
            OperationKind.UPLOAD: self._upload,
            OperationKind.DOWNLOAD: self._download,
            OperationKind.EXISTS: self._exists,
            OperationKind.RENAME: self._rename,
            OperationKind.DELETE: self._delete,
        }

    def execute(
        self,
        kind: OperationKind,
        batch: Sequence[FilePair],
        params: ConnectionParameters,
        cancel_check: Callable[[], bool] | None = None,
    ) -> bool:
        """Run one operation over a batch in a single SFTP session."""
        handler = self._handlers[kind]
        ssh = self._connect(params)
        try:
            sftp = ssh.open_sftp()
            try:
                success = True
                for pair in batch:
                    if cancel_check and cancel_check():
                        logger.info(f"{kind.label} cancelled before {pair.remote_path}")
                        raise TaskCancelledError(f"{kind.label} batch cancelled")
                    # Keep going after a failure so the whole batch is attempted
                    if not handler(sftp, pair):
                        success = False
                return success
            finally:
                sftp.close()
        finally:
            ssh.close()

    def _connect(self, params: ConnectionParameters) -> paramiko.SSHClient:
        """Open an authenticated SSH connection.

        Args:
            params: Connection parameters.

        Returns:
            Connected SSH client. The caller must close it.
        """
        ssh = paramiko.SSHClient()
        if params.allow_unknown_hosts:
            ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        else:
            ssh.load_system_host_keys()
            ssh.set_missing_host_key_policy(paramiko.RejectPolicy())

        logger.debug(f"Connecting to {params.address}")
        try:
            ssh.connect(
                hostname=params.host,
                port=params.port,
                username=params.username,
                password=params.password,
                key_filename=params.private_key_path,
                timeout=params.connect_timeout,
                banner_timeout=params.connect_timeout,
                auth_timeout=params.connect_timeout,
                look_for_keys=params.password is None and params.private_key_path is None,
                allow_agent=params.password is None,
            )
        except Exception:
            ssh.close()
            raise
        return ssh

    def _upload(self, sftp: paramiko.SFTPClient, pair: FilePair) -> bool:
        try:
            self._ensure_remote_dir(sftp, posixpath.dirname(pair.remote_path))
            sftp.put(pair.local_path, pair.remote_path)
        except OSError as e:
            logger.warning(f"Upload failed: {pair.local_path} -> {pair.remote_path}: {e}")
            return False
        logger.debug(f"Uploaded {pair.local_path} -> {pair.remote_path}")
        return True

    def _download(self, sftp: paramiko.SFTPClient, pair: FilePair) -> bool:
        try:
            Path(pair.local_path).parent.mkdir(parents=True, exist_ok=True)
            sftp.get(pair.remote_path, pair.local_path)
        except OSError as e:
            logger.warning(f"Download failed: {pair.remote_path} -> {pair.local_path}: {e}")
            return False
        logger.debug(f"Downloaded {pair.remote_path} -> {pair.local_path}")
        return True

    def _exists(self, sftp: paramiko.SFTPClient, pair: FilePair) -> bool:
        try:
            sftp.stat(pair.remote_path)
        except OSError:
            logger.debug(f"Remote file missing: {pair.remote_path}")
            return False
        return True

    def _rename(self, sftp: paramiko.SFTPClient, pair: FilePair) -> bool:
        try:
            sftp.posix_rename(pair.local_path, pair.remote_path)
        except OSError:
            # Server may lack the posix-rename@openssh.com extension
            try:
                sftp.rename(pair.local_path, pair.remote_path)
            except OSError as e:
                logger.warning(f"Rename failed: {pair.local_path} -> {pair.remote_path}: {e}")
                return False
        logger.debug(f"Renamed {pair.local_path} -> {pair.remote_path}")
        return True

    def _delete(self, sftp: paramiko.SFTPClient, pair: FilePair) -> bool:
        try:
            sftp.remove(pair.remote_path)
        except OSError as e:
            logger.warning(f"Delete failed: {pair.remote_path}: {e}")
            return False
        logger.debug(f"Deleted {pair.remote_path}")
        return True

    def _ensure_remote_dir(self, sftp: paramiko.SFTPClient, remote_dir: str) -> None:
        """Create remote_dir and any missing parents."""
        if remote_dir in ("", "/", "."):
            return
        try:
            sftp.stat(remote_dir)
        except OSError:
            self._ensure_remote_dir(sftp, posixpath.dirname(remote_dir))
            logger.debug(f"Creating remote directory {remote_dir}")
            try:
                sftp.mkdir(remote_dir)
            except OSError:
                # Another batch may have created it since the stat
                if not self._remote_dir_exists(sftp, remote_dir):
                    raise

    def _remote_dir_exists(self, sftp: paramiko.SFTPClient, remote_dir: str) -> bool:
        try:
            sftp.stat(remote_dir)
        except OSError:
            return False
        return True
