"""sftpbatch - Batched, deadline-bounded SFTP file operations."""

from sftpbatch.client.client import Client
from sftpbatch.client.types import (
    BatchTimeoutError,
    TaskCancelledError,
    TransferError,
    UploadTimeoutError,
)
from sftpbatch.core import ConnectionParameters, FilePair, OperationKind, TransferConfig

__version__ = "0.1.0"

__all__ = [
    "BatchTimeoutError",
    "Client",
    "ConnectionParameters",
    "FilePair",
    "OperationKind",
    "TaskCancelledError",
    "TransferConfig",
    "TransferError",
    "UploadTimeoutError",
]
