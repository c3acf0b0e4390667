"""Domain layer - models, contracts and errors."""

from .contracts import (
    IAttributeUpdateSink,
    IResourceObservationService,
    NullSink,
    ReportHandler,
)
from .device import Device
from .errors import (
    ConfigurationError,
    Lwm2mBridgeError,
    ObservationSetupFailure,
    UnresolvedAttributeMapping,
    UpdateSinkFailure,
)
from .resource_address import LogicalAttribute, ResourceAddress

__all__ = [
    "ConfigurationError",
    "Device",
    "IAttributeUpdateSink",
    "IResourceObservationService",
    "LogicalAttribute",
    "Lwm2mBridgeError",
    "NullSink",
    "ObservationSetupFailure",
    "ReportHandler",
    "ResourceAddress",
    "UnresolvedAttributeMapping",
    "UpdateSinkFailure",
]
