"""Classification and reduction of per-task results.

Each submitted task resolves to exactly one TaskOutcome. The orchestrator
reduces the full set with reduce_outcomes(), which is a logical AND and so
does not depend on completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import CancelledError
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from sftpbatch.client.types import TaskCancelledError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from concurrent.futures import Future

logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    """Closed set of ways a task can end."""

    SUCCESS = auto()
    INTERRUPTED = auto()
    CANCELLED = auto()
    EXECUTION_FAILED = auto()


@dataclass(frozen=True)
class TaskOutcome:
    """Result of one task execution.

    Attributes:
        kind: How the task ended.
        value: The task's verdict, only meaningful for SUCCESS.
        error: The underlying exception for EXECUTION_FAILED.
    """

    kind: OutcomeKind
    value: bool = False
    error: BaseException | None = None

    @classmethod
    def success(cls, value: bool) -> TaskOutcome:
        return cls(OutcomeKind.SUCCESS, value=value)

    @classmethod
    def interrupted(cls) -> TaskOutcome:
        return cls(OutcomeKind.INTERRUPTED)

    @classmethod
    def cancelled(cls) -> TaskOutcome:
        return cls(OutcomeKind.CANCELLED)

    @classmethod
    def execution_failed(cls, error: BaseException) -> TaskOutcome:
        return cls(OutcomeKind.EXECUTION_FAILED, error=error)

    @property
    def succeeded(self) -> bool:
        """Check if this outcome is a vote for overall success."""
        return self.kind == OutcomeKind.SUCCESS and self.value


def classify_future(future: Future[bool]) -> TaskOutcome:
    """Resolve a finished or cancelled future into an outcome.

    Never raises: every failure mode is downgraded to a failure vote.

    Args:
        future: Future of a submitted task.

    Returns:
        The classified outcome.
    """
    try:
        return TaskOutcome.success(bool(future.result(timeout=0)))
    except (CancelledError, TaskCancelledError):
        logger.error("Task was cancelled; likely because of a timeout")
        return TaskOutcome.cancelled()
    except (KeyboardInterrupt, InterruptedError):
        logger.error("Task was interrupted")
        return TaskOutcome.interrupted()
    except BaseException as e:
        logger.error(f"Task raised while executing: {e!r}")
        return TaskOutcome.execution_failed(e)


def reduce_outcomes(outcomes: Iterable[TaskOutcome]) -> bool:
    """Combine outcomes into one verdict.

    Consumes every outcome even after the first failure so that the failure
    count logged is complete.

    Args:
        outcomes: Outcomes of all tasks in a batched call.

    Returns:
        True only if every outcome succeeded.
    """
    total = 0
    failures: dict[OutcomeKind, int] = {}
    for outcome in outcomes:
        total += 1
        if not outcome.succeeded:
            failures[outcome.kind] = failures.get(outcome.kind, 0) + 1

    if failures:
        summary = ", ".join(f"{kind.name.lower()}={count}" for kind, count in failures.items())
        logger.warning(f"{sum(failures.values())} of {total} tasks failed ({summary})")
        return False
    return True
