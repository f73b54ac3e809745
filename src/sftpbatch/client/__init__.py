"""Client module - Facade, orchestrator, tasks and transport.

Usage:
    from sftpbatch.client import Client
    from sftpbatch.core import ConnectionParameters, FilePair

    client = Client(ConnectionParameters(host="sftp.example.com", username="me"))
    client.upload_files([FilePair("a.txt", "/in/a.txt")], batch_size=10, timeout=60)
"""

from sftpbatch.client.batching import batched
from sftpbatch.client.client import Client
from sftpbatch.client.orchestrator import BatchOrchestrator
from sftpbatch.client.outcomes import (
    OutcomeKind,
    TaskOutcome,
    classify_future,
    reduce_outcomes,
)
from sftpbatch.client.tasks import Task, TransferTask
from sftpbatch.client.transport import SftpTransport, Transport
from sftpbatch.client.types import (
    BatchTimeoutError,
    TaskCancelledError,
    TransferError,
    UploadTimeoutError,
)

__all__ = [
    # Facade
    "Client",
    # Orchestration
    "BatchOrchestrator",
    "batched",
    # Outcomes
    "OutcomeKind",
    "TaskOutcome",
    "classify_future",
    "reduce_outcomes",
    # Tasks
    "Task",
    "TransferTask",
    # Transport
    "SftpTransport",
    "Transport",
    # Errors
    "BatchTimeoutError",
    "TaskCancelledError",
    "TransferError",
    "UploadTimeoutError",
]
