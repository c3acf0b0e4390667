"""Mapping tiers and the attribute → resource resolver."""

from .default_registry import DefaultMappingRegistry, load_default_registry
from .resolver import (
    TIER_DEFAULT,
    TIER_DEVICE,
    TIER_TYPE,
    ResourceMappingResolver,
)
from .type_config import DeviceTypeConfig, TypeConfigurationTable

__all__ = [
    "DefaultMappingRegistry",
    "DeviceTypeConfig",
    "ResourceMappingResolver",
    "TIER_DEFAULT",
    "TIER_DEVICE",
    "TIER_TYPE",
    "TypeConfigurationTable",
    "load_default_registry",
]
