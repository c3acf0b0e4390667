"""Exception types raised by the observation core."""

from __future__ import annotations

from typing import Optional

from .resource_address import ResourceAddress


class Lwm2mBridgeError(Exception):
    """Base exception for the LWM2M bridge core."""


class ConfigurationError(Lwm2mBridgeError):
    """Type configuration or mapping registry could not be loaded."""


class UnresolvedAttributeMapping(Lwm2mBridgeError):
    """No mapping tier could resolve an active attribute.

    Attributes:
        attribute_name: Attribute name as declared on the device or type.
        device_type: Type of the device being registered, when known.
        tier: Tier that was authoritative for the lookup, when one was.
    """

    def __init__(
        self,
        attribute_name: str,
        *,
        device_type: Optional[str] = None,
        tier: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Couldn't find any way to map the active attribute: {attribute_name}"
        )
        self.attribute_name = attribute_name
        self.device_type = device_type
        self.tier = tier


class ObservationSetupFailure(Lwm2mBridgeError):
    """Observation of a single resource could not be established."""

    def __init__(
        self,
        attribute_name: str,
        address: ResourceAddress,
        cause: Optional[BaseException] = None,
    ) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Observation of {address} for attribute {attribute_name} failed{detail}"
        )
        self.attribute_name = attribute_name
        self.address = address
        self.cause = cause


class UpdateSinkFailure(Lwm2mBridgeError):
    """Context update was rejected or could not be delivered."""
