"""Device model as handed over by the device registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .resource_address import LogicalAttribute, ResourceAddress


@dataclass(frozen=True)
class Device:
    """Registered LWM2M device.

    Owned by the device registry. The observation core only reads it.
    """
    name: str
    type: str
    internal_id: str
    id: Optional[str] = None
    active: List[LogicalAttribute] = field(default_factory=list)
    resource_mapping: Dict[str, ResourceAddress] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Device":
        """Builds a Device from a registry document.

        Accepts the registry field names (``internalId``, ``active``,
        ``internalAttributes.lwm2mResourceMapping``).
        """
        from ...schemas import DeviceDocument

        return DeviceDocument.model_validate(dict(document)).to_device()
