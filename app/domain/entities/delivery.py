"""Value objects describing push delivery and fan-out results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeliveryOutcome:
    """Immediate answer of the push provider for a single message."""

    success: bool
    message_id: str | None = None
    error: str | None = None

    @classmethod
    def delivered(cls, message_id: str | None) -> "DeliveryOutcome":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: str) -> "DeliveryOutcome":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class DeliveryAttemptResult:
    """Outcome of notifying one recipient during a fan-out."""

    recipient_id: str
    recipient_name: str
    fcm_sent: bool
    fcm_error: str | None = None


@dataclass(frozen=True)
class FanOutReport:
    """Aggregated per-recipient results of a fan-out."""

    results: list[DeliveryAttemptResult] = field(default_factory=list)

    @property
    def total_recipients(self) -> int:
        return len(self.results)

    @property
    def delivered_count(self) -> int:
        return sum(1 for result in self.results if result.fcm_sent)


__all__ = ["DeliveryAttemptResult", "DeliveryOutcome", "FanOutReport"]
