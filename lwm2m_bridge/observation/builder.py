"""Builds the observation work list for a registering device."""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import unquote

from ..core.domain.device import Device
from ..core.domain.errors import UnresolvedAttributeMapping
from ..core.domain.resource_address import LogicalAttribute
from ..core.monitoring.stats import ObservationStats
from ..mapping.resolver import ResourceMappingResolver
from .object_list import parse_object_uri_list
from .tasks import ObservationTask

logger = logging.getLogger(__name__)


class ObservationListBuilder:
    """Selects the active attributes a device can currently serve.

    An attribute is kept when its resolved resource lives in an object
    instance the device advertised at registration. Resolution errors abort
    the whole build, so callers never get a partial list.
    """

    def __init__(
        self,
        resolver: ResourceMappingResolver,
        decode_names: bool = False,
        stats: Optional[ObservationStats] = None,
    ):
        self._resolver = resolver
        self._decode_names = decode_names
        self._stats = stats if stats is not None else ObservationStats()

    def active_attributes(self, device: Device) -> List[LogicalAttribute]:
        """Device active attributes, or the type defaults when it has none."""
        if device.active:
            return list(device.active)
        return self._resolver.type_config.attributes_for(device.type)

    def lookup_name(self, attribute: LogicalAttribute) -> str:
        if self._decode_names:
            return unquote(attribute.name)
        return attribute.name

    def build(self, payload: Optional[str], device: Device) -> List[ObservationTask]:
        """Returns one ObservationTask per advertised active attribute.

        Args:
            payload: Object list sent by the device at registration
            device: Registered device

        Raises:
            UnresolvedAttributeMapping: When an active attribute has no mapping
        """
        advertised = set(parse_object_uri_list(payload))
        attributes = self.active_attributes(device)
        self._stats.builds += 1

        tasks: List[ObservationTask] = []
        for attribute in attributes:
            try:
                address = self._resolver.resolve(device, self.lookup_name(attribute))
            except UnresolvedAttributeMapping as e:
                self._stats.build_failures += 1
                logger.error(
                    "[BUILDER] device=%s type=%s: %s",
                    device.internal_id,
                    device.type,
                    e,
                )
                if e.attribute_name != attribute.name:
                    raise UnresolvedAttributeMapping(
                        attribute.name, device_type=e.device_type, tier=e.tier
                    ) from e
                raise

            if address.object_path in advertised:
                tasks.append(ObservationTask(device=device, address=address, attribute=attribute))
            else:
                logger.debug(
                    "[BUILDER] device=%s does not advertise %s for attribute %s",
                    device.internal_id,
                    address,
                    attribute.name,
                )

        logger.debug(
            "[BUILDER] device=%s active=%d observable=%d advertised=%s",
            device.internal_id,
            len(attributes),
            len(tasks),
            sorted(advertised),
        )
        return tasks
