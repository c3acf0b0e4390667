"""Per device type configuration table.

Read-only view over the ``types`` section of the agent configuration:

    {
        "Robot": {
            "service": "factory",
            "attributes": [{"name": "Battery", "type": "number"}],
            "lwm2mResourceMapping": {
                "Battery": {"objectType": 7392, "objectInstance": 0, "objectResource": 1}
            }
        }
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..core.domain.errors import ConfigurationError
from ..core.domain.resource_address import LogicalAttribute, ResourceAddress
from ..schemas import TypeConfigEntry

logger = logging.getLogger(__name__)

# Keys of a single type entry; a "types" value holding any of them is a type
# named "types", not the wrapper of the whole table.
_TYPE_ENTRY_KEYS = frozenset(
    {"attributes", "lwm2mResourceMapping", "lazy", "commands", "service", "subservice"}
)


def _unwrap_types(document: Any) -> Any:
    """Returns the types map of an agent configuration, or the document
    itself when it already is a types map."""
    if not isinstance(document, dict):
        return document

    ngsi = document.get("ngsi")
    if isinstance(ngsi, dict) and isinstance(ngsi.get("types"), dict):
        return ngsi["types"]

    types = document.get("types")
    if isinstance(types, dict):
        if len(document) == 1 or not _TYPE_ENTRY_KEYS.intersection(types):
            return types
    return document


class DeviceTypeConfig:
    """Validated configuration of a single device type."""

    def __init__(self, device_type: str, entry: TypeConfigEntry):
        self.device_type = device_type
        self.attributes: List[LogicalAttribute] = [a.to_attribute() for a in entry.attributes]
        self.resource_mapping: Mapping[str, ResourceAddress] = MappingProxyType(
            {name: m.to_address() for name, m in entry.lwm2m_resource_mapping.items()}
        )

    def __repr__(self) -> str:
        return (
            f"DeviceTypeConfig(type={self.device_type!r}, "
            f"attributes={len(self.attributes)}, mappings={len(self.resource_mapping)})"
        )


class TypeConfigurationTable:
    """Device type → DeviceTypeConfig lookup."""

    def __init__(self, types: Optional[Mapping[str, DeviceTypeConfig]] = None):
        self._types: Mapping[str, DeviceTypeConfig] = MappingProxyType(dict(types or {}))

    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> "TypeConfigurationTable":
        """Validates a ``types`` document.

        Raises:
            ConfigurationError: When a type entry does not validate
        """
        types: Dict[str, DeviceTypeConfig] = {}
        for device_type, raw in (document or {}).items():
            try:
                entry = TypeConfigEntry.model_validate(raw or {})
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid configuration for device type {device_type}: {e}"
                ) from e
            types[device_type] = DeviceTypeConfig(device_type, entry)

        logger.info("[TYPES] Loaded configuration for %d device types", len(types))
        return cls(types)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TypeConfigurationTable":
        """Loads a JSON file holding either the ``types`` map or a whole
        agent configuration with ``types`` (or ``ngsi.types``) inside."""
        try:
            document = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read type configuration {path}: {e}") from e

        document = _unwrap_types(document)

        if not isinstance(document, dict):
            raise ConfigurationError(f"Type configuration {path} is not a JSON object")
        return cls.from_dict(document)

    def get(self, device_type: str) -> Optional[DeviceTypeConfig]:
        return self._types.get(device_type)

    def __contains__(self, device_type: object) -> bool:
        return device_type in self._types

    def __len__(self) -> int:
        return len(self._types)

    def attributes_for(self, device_type: str) -> List[LogicalAttribute]:
        """Active attributes declared for a type (empty when unknown)."""
        config = self._types.get(device_type)
        if config is None:
            return []
        return list(config.attributes)
