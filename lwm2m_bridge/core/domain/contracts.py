"""Abstract interfaces for the collaborators of the observation core.

The observation engine (LWM2M server side) and the context-update sink are
injected; the core never talks to the wire directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .device import Device
from .resource_address import ResourceAddress

ReportHandler = Callable[[Any], Awaitable[bool]]


class IResourceObservationService(ABC):
    """Starts observations of device resources."""

    @abstractmethod
    async def observe(
        self,
        device_internal_id: str,
        address: ResourceAddress,
        on_report: ReportHandler,
    ) -> Optional[Any]:
        """Begins observing a resource.

        Args:
            device_internal_id: LWM2M endpoint id of the device
            address: Resource to observe
            on_report: Awaited for every value the device reports later

        Returns:
            Initial value returned by the setup, or None

        Raises:
            Exception: When the observation could not be established
        """
        pass


class IAttributeUpdateSink(ABC):
    """Forwards attribute values to the context broker."""

    @abstractmethod
    async def update(
        self,
        device_name: str,
        device_type: str,
        api_version_marker: str,
        attributes: List[Dict[str, Any]],
        device: Device,
    ) -> None:
        """Sends an entity update.

        Raises:
            UpdateSinkFailure: When the broker rejects the update
        """
        pass


class NullSink(IAttributeUpdateSink):
    """No-op sink for testing or when the context broker is disabled."""

    async def update(
        self,
        device_name: str,
        device_type: str,
        api_version_marker: str,
        attributes: List[Dict[str, Any]],
        device: Device,
    ) -> None:
        return None
