"""Core module - Shared types and configuration."""

from sftpbatch.core.config import (
    DEFAULT_SFTP_PORT,
    ConnectionParameters,
    TransferConfig,
)
from sftpbatch.core.types import FilePair, OperationKind

__all__ = [
    # Config
    "DEFAULT_SFTP_PORT",
    "ConnectionParameters",
    "TransferConfig",
    # Types
    "FilePair",
    "OperationKind",
]
