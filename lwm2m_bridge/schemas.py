"""Validation schemas for provisioning documents.

Type configuration, device registry documents and mapping registry entries
arrive as JSON written with the agent's camelCase names. These models
validate them and convert them into domain objects.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.domain.device import Device
from .core.domain.resource_address import LogicalAttribute, ResourceAddress


class ResourceMappingEntry(BaseModel):
    """One ``lwm2mResourceMapping`` entry.

    Format:
    {"objectType": 3, "objectInstance": 0, "objectResource": 1}
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    object_type: int = Field(..., alias="objectType", ge=0)
    object_instance: Optional[int] = Field(default=None, alias="objectInstance", ge=0)
    object_resource: int = Field(..., alias="objectResource", ge=0)

    def to_address(self) -> ResourceAddress:
        return ResourceAddress(
            object_id=self.object_type,
            instance_id=self.object_instance,
            resource_id=self.object_resource,
        )


class AttributeEntry(BaseModel):
    """Attribute declaration ({"name": ..., "type": ...})."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = "string"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("attribute name is required")
        return v

    def to_attribute(self) -> LogicalAttribute:
        return LogicalAttribute(name=self.name, type=self.type)


class TypeConfigEntry(BaseModel):
    """Per device type configuration (``ngsi.types[type]``).

    Keys not used by the observation core (service, subservice, lazy,
    commands) are accepted and ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    attributes: List[AttributeEntry] = Field(default_factory=list)
    lwm2m_resource_mapping: Dict[str, ResourceMappingEntry] = Field(
        default_factory=dict, alias="lwm2mResourceMapping"
    )


class InternalAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    lwm2m_resource_mapping: Dict[str, ResourceMappingEntry] = Field(
        default_factory=dict, alias="lwm2mResourceMapping"
    )


class DeviceDocument(BaseModel):
    """Device as stored by the device registry."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: str
    type: str
    internal_id: str = Field(..., alias="internalId")
    active: Optional[List[AttributeEntry]] = None
    internal_attributes: Optional[InternalAttributes] = Field(
        default=None, alias="internalAttributes"
    )

    @field_validator("internal_id", mode="before")
    @classmethod
    def coerce_internal_id(cls, v: Any) -> Any:
        # The LWM2M server hands out numeric registration ids.
        if isinstance(v, int):
            return str(v)
        return v

    def to_device(self) -> Device:
        mapping: Dict[str, ResourceAddress] = {}
        if self.internal_attributes is not None:
            mapping = {
                name: entry.to_address()
                for name, entry in self.internal_attributes.lwm2m_resource_mapping.items()
            }
        return Device(
            id=self.id,
            name=self.name,
            type=self.type,
            internal_id=self.internal_id,
            active=[a.to_attribute() for a in (self.active or [])],
            resource_mapping=mapping,
        )
