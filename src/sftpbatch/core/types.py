"""Shared types for sftpbatch.

This module defines the value types passed between the client facade,
the orchestrator and the transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperationKind(str, Enum):
    """Remote operation performed by a task."""

    UPLOAD = "upload"
    DOWNLOAD = "download"
    EXISTS = "exists"
    RENAME = "rename"
    DELETE = "delete"

    @property
    def label(self) -> str:
        """Human-readable name used in log and error messages."""
        return self.value


@dataclass(frozen=True)
class FilePair:
    """A local/remote path pairing identifying one operation target.

    For rename, local_path holds the remote source and remote_path the
    remote target. For existence checks and deletes both fields carry the
    same remote path.

    Attributes:
        local_path: Path on the local machine (or rename source).
        remote_path: Path on the remote endpoint (or rename target).
    """

    local_path: str
    remote_path: str

    @classmethod
    def same(cls, path: str) -> FilePair:
        """Create a degenerate pair where both paths are identical."""
        return cls(local_path=path, remote_path=path)
