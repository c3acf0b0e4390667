"""Relay of observed values to the context broker."""

from __future__ import annotations

import functools
import logging
from typing import Any, Optional

from ..core.domain.contracts import IAttributeUpdateSink, ReportHandler
from ..core.domain.device import Device
from ..core.domain.resource_address import LogicalAttribute
from ..core.monitoring.metrics import RELAYED_UPDATES
from ..core.monitoring.stats import ObservationStats

logger = logging.getLogger(__name__)


class UpdateRelay:
    """Turns each observed value into a single-attribute entity update.

    One sink call per value, no buffering. Sink errors are logged and
    swallowed: the observation engine calling us cannot recover from them.
    """

    def __init__(
        self,
        sink: IAttributeUpdateSink,
        api_version_marker: str = "",
        stats: Optional[ObservationStats] = None,
    ):
        self._sink = sink
        self._api_version_marker = api_version_marker
        self._stats = stats if stats is not None else ObservationStats()

    async def relay(
        self,
        device: Device,
        attribute_name: str,
        attribute_type: str,
        value: Any,
    ) -> bool:
        """Forwards one value. Returns False when the sink failed."""
        attributes = [
            {
                "name": attribute_name,
                "type": attribute_type,
                "value": value,
            }
        ]

        logger.debug("[RELAY] Handling data from device [%s]", device.internal_id)

        try:
            await self._sink.update(
                device.name,
                device.type,
                self._api_version_marker,
                attributes,
                device,
            )
        except Exception as e:
            logger.error(
                "[RELAY] Unknown error connecting with the Context Broker: device=%s attribute=%s err=%s",
                device.name,
                attribute_name,
                e,
            )
            self._stats.relay_failures += 1
            RELAYED_UPDATES.labels(status="failed").inc()
            return False

        self._stats.updates_relayed += 1
        RELAYED_UPDATES.labels(status="success").inc()
        logger.debug("[RELAY] Data handled successfully")
        return True

    def bind(self, device: Device, attribute: LogicalAttribute) -> ReportHandler:
        """Report callback for one observed attribute."""
        return functools.partial(self.relay, device, attribute.name, attribute.type)
