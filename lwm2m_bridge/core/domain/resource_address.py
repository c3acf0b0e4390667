"""Resource addresses and logical attributes.

A resource address points at one observable LWM2M resource
(object / instance / resource). A logical attribute is the (name, type) pair
the context broker knows about.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ResourceAddress:
    """LWM2M resource triple.

    `instance_id` is None when a provisioning or type mapping did not state it.
    """
    object_id: int
    instance_id: Optional[int]
    resource_id: int

    @property
    def object_path(self) -> Optional[str]:
        """Object instance path as advertised at registration ("/3/0")."""
        if self.instance_id is None:
            return None
        return f"/{self.object_id}/{self.instance_id}"

    def with_default_instance(self, instance_id: int = 0) -> "ResourceAddress":
        """Returns a copy with the instance filled in when it is missing."""
        if self.instance_id is not None:
            return self
        return replace(self, instance_id=instance_id)

    def __str__(self) -> str:
        instance = "?" if self.instance_id is None else self.instance_id
        return f"/{self.object_id}/{instance}/{self.resource_id}"


@dataclass(frozen=True)
class LogicalAttribute:
    """Attribute as understood by the context broker."""
    name: str
    type: str = "string"
