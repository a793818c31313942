"""In-process audit trail for dispatched requests.

Keeps running totals over every ExecutionResult the dispatching service
reports, completed or failed, similar to a stats read model, plus a bounded
window of the most recent results. Nothing is written to disk.
"""

import threading
from collections import Counter, deque
from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from dispatch.port import ExecutionResult, ExecutionStatus

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AuditSummary:
    total: int = 0
    completed: int = 0
    failed: int = 0
    by_discriminant: dict[str, int] = field(default_factory=dict)
    total_fees: Decimal = Decimal("0.00")
    gross_volume: Decimal = Decimal("0.00")

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "failed": self.failed,
            "by_discriminant": dict(self.by_discriminant),
            "total_fees": str(self.total_fees),
            "gross_volume": str(self.gross_volume),
        }


class AuditTrail:
    """Thread-safe running totals over execution results.

    Totals cover every result ever recorded. Only the most recent
    ``max_results`` results are retained for inspection.
    """

    def __init__(self, max_results: int = 1000) -> None:
        self._lock = threading.Lock()
        self._recent: deque[ExecutionResult] = deque(maxlen=max_results)
        self._statuses: Counter = Counter()
        self._discriminants: Counter = Counter()
        self._total_fees = Decimal("0.00")
        self._gross_volume = Decimal("0.00")

    def record(self, result: ExecutionResult) -> None:
        with self._lock:
            self._recent.append(result)
            self._statuses[result.status] += 1
            self._discriminants[result.discriminant] += 1
            if result.status is ExecutionStatus.COMPLETED:
                self._total_fees += result.fee
                if result.gross_amount is not None:
                    self._gross_volume += result.gross_amount
        logger.debug(
            "Execution recorded",
            identifier=result.identifier,
            discriminant=result.discriminant,
            status=result.status.value,
        )

    @property
    def results(self) -> tuple[ExecutionResult, ...]:
        """The most recently recorded results, oldest first."""
        with self._lock:
            return tuple(self._recent)

    def summary(self) -> AuditSummary:
        with self._lock:
            return AuditSummary(
                total=sum(self._statuses.values()),
                completed=self._statuses[ExecutionStatus.COMPLETED],
                failed=self._statuses[ExecutionStatus.FAILED],
                by_discriminant=dict(self._discriminants),
                total_fees=self._total_fees,
                gross_volume=self._gross_volume,
            )

    def reset(self) -> None:
        with self._lock:
            self._recent.clear()
            self._statuses.clear()
            self._discriminants.clear()
            self._total_fees = Decimal("0.00")
            self._gross_volume = Decimal("0.00")

    def __len__(self) -> int:
        """Number of results recorded since construction or the last reset."""
        with self._lock:
            return sum(self._statuses.values())
