"""Resolution of logical attribute names to LWM2M resources.

Three mapping tiers, checked in a fixed order:

1. device   - the device's own ``lwm2mResourceMapping`` (provisioning)
2. type     - ``lwm2mResourceMapping`` of the device type configuration
3. default  - global OMA registry, only for devices whose type is not configured

Exactly one tier is authoritative for an attribute. When that tier has no
entry the attribute is unresolved; lower tiers are not consulted.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.domain.device import Device
from ..core.domain.errors import UnresolvedAttributeMapping
from ..core.domain.resource_address import ResourceAddress
from .default_registry import DefaultMappingRegistry, load_default_registry
from .type_config import TypeConfigurationTable

logger = logging.getLogger(__name__)

TIER_DEVICE = "device"
TIER_TYPE = "type"
TIER_DEFAULT = "default"


class ResourceMappingResolver:
    """Resolves ``attribute name → ResourceAddress`` for a device.

    Pure lookup over read-only tables. Attribute names must already be in the
    form used as mapping keys (callers decode URI-encoded names).

    Usage:
        resolver = ResourceMappingResolver(TypeConfigurationTable.from_file(path))
        address = resolver.resolve(device, "Battery Level")
    """

    def __init__(
        self,
        type_config: Optional[TypeConfigurationTable] = None,
        default_registry: Optional[DefaultMappingRegistry] = None,
    ):
        self._types = type_config if type_config is not None else TypeConfigurationTable()
        self._defaults = (
            default_registry if default_registry is not None else load_default_registry()
        )

    @property
    def type_config(self) -> TypeConfigurationTable:
        return self._types

    def tier_for(self, device: Device, attribute_name: str) -> Optional[str]:
        """Returns the authoritative tier for an attribute, or None."""
        if attribute_name in device.resource_mapping:
            return TIER_DEVICE
        if device.type in self._types:
            return TIER_TYPE
        if attribute_name in self._defaults:
            return TIER_DEFAULT
        return None

    def resolve(self, device: Device, attribute_name: str) -> ResourceAddress:
        """Resolves the resource producing ``attribute_name`` on ``device``.

        Raises:
            UnresolvedAttributeMapping: When no tier maps the attribute
        """
        tier = self.tier_for(device, attribute_name)

        if tier == TIER_DEVICE:
            address = device.resource_mapping[attribute_name]
        elif tier == TIER_TYPE:
            type_config = self._types.get(device.type)
            address = type_config.resource_mapping.get(attribute_name) if type_config else None
            if address is None:
                logger.warning(
                    "[RESOLVER] Type %s has no mapping for attribute %s",
                    device.type,
                    attribute_name,
                )
                raise UnresolvedAttributeMapping(
                    attribute_name, device_type=device.type, tier=TIER_TYPE
                )
        elif tier == TIER_DEFAULT:
            address = self._defaults.lookup(attribute_name)
        else:
            address = None

        if address is None:
            raise UnresolvedAttributeMapping(attribute_name, device_type=device.type)

        logger.debug(
            "[RESOLVER] device=%s attribute=%s tier=%s address=%s",
            device.internal_id,
            attribute_name,
            tier,
            address,
        )
        return address
