"""LWM2M active attribute observation core.

Resolves which LWM2M resource produces each active attribute of a device,
schedules the observations once the device registers and relays every
observed value to the context broker.

The package provides:
    - Mapping tiers and the resolver (device, type, global OMA registry)
    - Work list builder filtered by the advertised object list
    - Delayed concurrent scheduler with per-task failure isolation
    - Update relay towards the context broker
"""

from __future__ import annotations

from .core.domain import (
    ConfigurationError,
    Device,
    IAttributeUpdateSink,
    IResourceObservationService,
    LogicalAttribute,
    Lwm2mBridgeError,
    NullSink,
    ObservationSetupFailure,
    ResourceAddress,
    UnresolvedAttributeMapping,
    UpdateSinkFailure,
)
from .core.monitoring import ObservationStats
from .handlers import ActiveAttributeObserver, create_active_attribute_observer
from .mapping import (
    DefaultMappingRegistry,
    ResourceMappingResolver,
    TypeConfigurationTable,
    load_default_registry,
)
from .observation import (
    BatchOutcome,
    CallbackObservationAdapter,
    ObservationConfig,
    ObservationListBuilder,
    ObservationScheduler,
    ObservationTask,
    UpdateRelay,
    parse_object_uri_list,
)

__all__ = [
    "ActiveAttributeObserver",
    "BatchOutcome",
    "CallbackObservationAdapter",
    "ConfigurationError",
    "DefaultMappingRegistry",
    "Device",
    "IAttributeUpdateSink",
    "IResourceObservationService",
    "LogicalAttribute",
    "Lwm2mBridgeError",
    "NullSink",
    "ObservationConfig",
    "ObservationListBuilder",
    "ObservationScheduler",
    "ObservationSetupFailure",
    "ObservationStats",
    "ObservationTask",
    "ResourceAddress",
    "ResourceMappingResolver",
    "TypeConfigurationTable",
    "UnresolvedAttributeMapping",
    "UpdateRelay",
    "UpdateSinkFailure",
    "create_active_attribute_observer",
    "load_default_registry",
]
