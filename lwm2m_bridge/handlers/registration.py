"""Registration-flow entry point for active attribute observation.

Called by the registration handler once the device is stored in the registry:

    tasks = observer.observe_active_attributes(payload, device)

Mapping errors surface here, synchronously, and must abort the registration.
Everything after scheduling is best effort and only logged.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from common.config import Settings, get_settings

from ..core.domain.contracts import IAttributeUpdateSink, IResourceObservationService
from ..core.domain.device import Device
from ..core.monitoring.stats import ObservationStats
from ..mapping.default_registry import DefaultMappingRegistry
from ..mapping.resolver import ResourceMappingResolver
from ..mapping.type_config import TypeConfigurationTable
from ..observation.builder import ObservationListBuilder
from ..observation.config import ObservationConfig
from ..observation.relay import UpdateRelay
from ..observation.scheduler import ObservationScheduler
from ..observation.tasks import ObservationTask

logger = logging.getLogger(__name__)


class ActiveAttributeObserver:
    """Builds and schedules the observations of a registering device."""

    def __init__(
        self,
        builder: ObservationListBuilder,
        scheduler: ObservationScheduler,
    ):
        self._builder = builder
        self._scheduler = scheduler

    @property
    def stats(self) -> ObservationStats:
        return self._scheduler.stats

    @property
    def scheduler(self) -> ObservationScheduler:
        return self._scheduler

    def observe_active_attributes(
        self,
        payload: Optional[str],
        device: Device,
        delay: Optional[float] = None,
    ) -> List[ObservationTask]:
        """Creates an observer for each advertised active attribute.

        Returns as soon as the batch is scheduled; the observations start
        after the configured delay.

        Args:
            payload: Object list from the registration request
            device: Registered device
            delay: Optional override of the configured delay (seconds)

        Returns:
            The scheduled work list

        Raises:
            UnresolvedAttributeMapping: When an active attribute cannot be mapped
        """
        tasks = self._builder.build(payload, device)
        self._scheduler.schedule(device, tasks, delay=delay)
        return tasks

    def forget_device(self, device: Device) -> int:
        """Drops observation batches of a device that unregistered before
        they started. Returns the number of dropped batches."""
        dropped = self._scheduler.cancel(device.internal_id)
        if dropped:
            logger.info(
                "[REGISTRATION] device=%s unregistered before observation setup",
                device.internal_id,
            )
        return dropped

    async def shutdown(self) -> None:
        await self._scheduler.shutdown()


def create_active_attribute_observer(
    service: IResourceObservationService,
    sink: IAttributeUpdateSink,
    settings: Optional[Settings] = None,
    type_config: Optional[TypeConfigurationTable] = None,
    default_registry: Optional[DefaultMappingRegistry] = None,
) -> ActiveAttributeObserver:
    """Factory: wires resolver, builder, relay and scheduler from settings.

    The type configuration is read from ``LWM2M_TYPES_FILE`` unless given.
    """
    settings = settings or get_settings()
    config = ObservationConfig.from_settings(settings)

    if type_config is None:
        if settings.types_file:
            type_config = TypeConfigurationTable.from_file(settings.types_file)
        else:
            type_config = TypeConfigurationTable()

    stats = ObservationStats()
    resolver = ResourceMappingResolver(type_config, default_registry)
    builder = ObservationListBuilder(
        resolver,
        decode_names=config.decode_attribute_names,
        stats=stats,
    )
    relay = UpdateRelay(sink, api_version_marker=config.api_version_marker, stats=stats)
    scheduler = ObservationScheduler(service, relay, config=config, stats=stats)

    logger.info(
        "[REGISTRATION] Observer ready: types=%d delay=%.3fs max_concurrent=%d ngsi_v2=%s",
        len(type_config),
        config.delayed_observation_timeout,
        config.max_concurrent_setups,
        config.decode_attribute_names,
    )
    return ActiveAttributeObserver(builder, scheduler)
