"""Observation tasks and batch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from ..core.domain.contracts import IResourceObservationService
from ..core.domain.device import Device
from ..core.domain.errors import ObservationSetupFailure
from ..core.domain.resource_address import LogicalAttribute, ResourceAddress

if TYPE_CHECKING:
    from .relay import UpdateRelay


@dataclass(frozen=True, eq=False)
class ObservationTask:
    """Deferred observation of one resource for one active attribute."""
    device: Device
    address: ResourceAddress
    attribute: LogicalAttribute

    async def run(self, service: IResourceObservationService, relay: "UpdateRelay") -> None:
        """Starts the observation and relays the initial value, if any.

        Raises:
            ObservationSetupFailure: When the observation service fails
        """
        on_report = relay.bind(self.device, self.attribute)
        try:
            initial = await service.observe(self.device.internal_id, self.address, on_report)
        except Exception as e:
            raise ObservationSetupFailure(self.attribute.name, self.address, e) from e

        if initial is not None:
            await relay.relay(self.device, self.attribute.name, self.attribute.type, initial)

    def __repr__(self) -> str:
        return (
            f"ObservationTask(device={self.device.internal_id!r}, "
            f"attribute={self.attribute.name!r}, address={self.address})"
        )


@dataclass
class BatchOutcome:
    """Aggregate result of one observation batch."""
    device_internal_id: str
    attempted: int
    failures: List[ObservationSetupFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.attempted - len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        if self.ok:
            return f"{self.attempted} observers created for device {self.device_internal_id}"
        errors = "; ".join(str(f) for f in self.failures)
        return (
            f"{len(self.failures)}/{self.attempted} observers failed for device "
            f"{self.device_internal_id}: {errors}"
        )
