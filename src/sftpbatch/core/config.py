"""Shared configuration classes for sftpbatch.

This module defines the connection settings forwarded to the transport and
the defaults used by batched operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_SFTP_PORT = 22


@dataclass
class ConnectionParameters:
    """Configuration for reaching an SFTP endpoint.

    The orchestrator never reads these fields; they are forwarded as-is to
    the transport, which is the only component that connects.

    Attributes:
        host: Hostname or IP address of the server.
        username: Login name.
        port: TCP port (default 22).
        password: Password, if password authentication is used.
        private_key_path: Path to a private key file, if key auth is used.
        connect_timeout: TCP/SSH handshake timeout in seconds.
        allow_unknown_hosts: Accept host keys not present in known_hosts.
    """

    host: str
    username: str
    port: int = DEFAULT_SFTP_PORT
    password: str | None = field(default=None, repr=False)
    private_key_path: str | None = None
    connect_timeout: float = 30.0
    allow_unknown_hosts: bool = True

    def __post_init__(self) -> None:
        """Normalize and validate the host and port."""
        self.host = self.host.strip()
        if not self.host:
            raise ValueError("host must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port out of range: {self.port}")

    @property
    def address(self) -> str:
        """Get a user@host:port string for log messages."""
        return f"{self.username}@{self.host}:{self.port}"


@dataclass
class TransferConfig:
    """Defaults for batched operations.

    Attributes:
        batch_size: Number of file pairs handled by one task.
        timeout: Global deadline in seconds for a whole batched call.
        max_workers: Worker threads in the per-call pool.
    """

    batch_size: int = 50
    timeout: float = 600.0
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Reject a pool without workers."""
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
