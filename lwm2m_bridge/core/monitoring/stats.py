"""Observation statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ObservationStats:
    """Counters for builds, scheduled batches, setups and relayed updates."""

    builds: int = 0
    build_failures: int = 0
    batches_scheduled: int = 0
    batches_cancelled: int = 0
    batches_completed: int = 0
    setups_attempted: int = 0
    setups_succeeded: int = 0
    setups_failed: int = 0
    updates_relayed: int = 0
    relay_failures: int = 0
    started_at: datetime = field(default_factory=_utcnow)

    def __str__(self) -> str:
        return (
            f"Stats: batches={self.batches_scheduled} setups_ok={self.setups_succeeded} "
            f"setups_failed={self.setups_failed} relayed={self.updates_relayed}"
        )

    def to_dict(self) -> dict:
        return {
            "builds": self.builds,
            "build_failures": self.build_failures,
            "batches_scheduled": self.batches_scheduled,
            "batches_cancelled": self.batches_cancelled,
            "batches_completed": self.batches_completed,
            "setups_attempted": self.setups_attempted,
            "setups_succeeded": self.setups_succeeded,
            "setups_failed": self.setups_failed,
            "updates_relayed": self.updates_relayed,
            "relay_failures": self.relay_failures,
            "started_at": self.started_at.isoformat(),
            "setup_success_rate": self._setup_success_rate(),
        }

    def _setup_success_rate(self) -> float:
        total = self.setups_succeeded + self.setups_failed
        if total == 0:
            return 1.0
        return self.setups_succeeded / total

    def reset(self) -> None:
        self.builds = 0
        self.build_failures = 0
        self.batches_scheduled = 0
        self.batches_cancelled = 0
        self.batches_completed = 0
        self.setups_attempted = 0
        self.setups_succeeded = 0
        self.setups_failed = 0
        self.updates_relayed = 0
        self.relay_failures = 0
        self.started_at = _utcnow()
