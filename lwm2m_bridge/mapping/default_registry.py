"""Global default mapping: well-known OMA resource name → resource address.

Lowest-specificity mapping tier. Entries are loaded once from the bundled
``oma_inverse_registry.json`` and never modified afterwards.
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from pydantic import ValidationError

from ..core.domain.errors import ConfigurationError
from ..core.domain.resource_address import ResourceAddress
from ..schemas import ResourceMappingEntry

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_FILE = Path(__file__).with_name("oma_inverse_registry.json")


class DefaultMappingRegistry:
    """Read-only attribute name → ResourceAddress table."""

    def __init__(self, entries: Optional[Mapping[str, ResourceAddress]] = None):
        self._entries: Mapping[str, ResourceAddress] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> "DefaultMappingRegistry":
        entries: Dict[str, ResourceAddress] = {}
        for name, raw in document.items():
            try:
                entries[name] = ResourceMappingEntry.model_validate(raw).to_address()
            except ValidationError as e:
                raise ConfigurationError(f"Invalid default mapping for {name}: {e}") from e
        return cls(entries)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DefaultMappingRegistry":
        try:
            document = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read mapping registry {path}: {e}") from e
        registry = cls.from_dict(document)
        logger.debug("[REGISTRY] Loaded %d default mappings from %s", len(registry), path)
        return registry

    def lookup(self, attribute_name: str) -> Optional[ResourceAddress]:
        """Returns the address for a well-known name, instance defaulted to 0."""
        address = self._entries.get(attribute_name)
        if address is None:
            return None
        return address.with_default_instance(0)

    def __contains__(self, attribute_name: object) -> bool:
        return attribute_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


@functools.lru_cache(maxsize=1)
def load_default_registry() -> DefaultMappingRegistry:
    """Bundled OMA registry (cached)."""
    return DefaultMappingRegistry.from_file(DEFAULT_REGISTRY_FILE)
