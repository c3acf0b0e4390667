"""Shared fixtures and fakes for the observation core tests."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
from prometheus_client import REGISTRY

from lwm2m_bridge.core.domain import (
    Device,
    IAttributeUpdateSink,
    IResourceObservationService,
    LogicalAttribute,
    ResourceAddress,
)
from lwm2m_bridge.core.monitoring import ObservationStats
from lwm2m_bridge.mapping import DefaultMappingRegistry, TypeConfigurationTable
from lwm2m_bridge.observation import ObservationConfig, UpdateRelay


class FakeObservationService(IResourceObservationService):
    """In-memory observation engine.

    - failures: (object, instance, resource) → exception raised by observe()
    - initial_values: (object, instance, resource) → value returned by observe()
    - setup_delay: seconds each observe() takes
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[str, ResourceAddress]] = []
        self.handlers: Dict[Tuple[str, ResourceAddress], Any] = {}
        self.failures: Dict[Tuple[int, Optional[int], int], Exception] = {}
        self.initial_values: Dict[Tuple[int, Optional[int], int], Any] = {}
        self.setup_delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0
        self.completed = asyncio.Event()
        self.expected_calls = 0

    async def observe(self, device_internal_id, address, on_report):
        self.calls.append((device_internal_id, address))
        self.handlers[(device_internal_id, address)] = on_report
        if self.expected_calls and len(self.calls) >= self.expected_calls:
            self.completed.set()

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.setup_delay:
                await asyncio.sleep(self.setup_delay)
        finally:
            self.in_flight -= 1

        key = (address.object_id, address.instance_id, address.resource_id)
        if key in self.failures:
            raise self.failures[key]
        return self.initial_values.get(key)


class RecordingSink(IAttributeUpdateSink):
    """Sink that records every update and optionally fails."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.updates: List[Dict[str, Any]] = []
        self.error = error

    async def update(self, device_name, device_type, api_version_marker, attributes, device):
        self.updates.append(
            {
                "device_name": device_name,
                "device_type": device_type,
                "api_version_marker": api_version_marker,
                "attributes": attributes,
                "device": device,
            }
        )
        if self.error is not None:
            raise self.error


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def types_document() -> Dict[str, Any]:
    """Type configuration as written in the agent config."""
    return {
        "Robot": {
            "service": "factory",
            "subservice": "/robots",
            "attributes": [
                {"name": "Battery", "type": "number"},
                {"name": "Position", "type": "string"},
            ],
            "lazy": [{"name": "Message", "type": "string"}],
            "lwm2mResourceMapping": {
                "Battery": {"objectType": 7392, "objectInstance": 0, "objectResource": 1},
                "Position": {"objectType": 7392, "objectInstance": 0, "objectResource": 2},
                "Message": {"objectType": 7392, "objectInstance": 0, "objectResource": 3},
            },
        },
        "Sensor": {
            "attributes": [],
            "lwm2mResourceMapping": {},
        },
    }


@pytest.fixture
def type_config(types_document) -> TypeConfigurationTable:
    return TypeConfigurationTable.from_dict(types_document)


@pytest.fixture
def default_registry() -> DefaultMappingRegistry:
    """Small global registry: one entry without instance, one with."""
    return DefaultMappingRegistry.from_dict(
        {
            "Battery Level": {"objectType": 3, "objectResource": 9},
            "Latitude": {"objectType": 6, "objectInstance": 2, "objectResource": 0},
            "Radio Signal Strength": {"objectType": 4, "objectResource": 2},
        }
    )


@pytest.fixture
def make_device():
    """Device factory with sensible defaults."""

    def _make(
        device_type: str = "Thermostat",
        active: Optional[List[LogicalAttribute]] = None,
        resource_mapping: Optional[Dict[str, ResourceAddress]] = None,
        internal_id: str = "1",
    ) -> Device:
        return Device(
            id="dev-01",
            name=f"{device_type}:dev-01",
            type=device_type,
            internal_id=internal_id,
            active=active or [],
            resource_mapping=resource_mapping or {},
        )

    return _make


@pytest.fixture
def stats() -> ObservationStats:
    return ObservationStats()


@pytest.fixture
def observation_config() -> ObservationConfig:
    return ObservationConfig(delayed_observation_timeout=0.01)


@pytest.fixture
def observation_service() -> FakeObservationService:
    return FakeObservationService()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def relay(sink, stats) -> UpdateRelay:
    return UpdateRelay(sink, stats=stats)


@pytest.fixture
def make_sink():
    """RecordingSink factory, optionally failing with the given error."""

    def _make(error: Optional[Exception] = None) -> RecordingSink:
        return RecordingSink(error=error)

    return _make


@pytest.fixture
def metric_value():
    """Current value of a labelled counter in the default Prometheus registry."""

    def _value(name: str, status: str) -> float:
        return REGISTRY.get_sample_value(name, {"status": status}) or 0.0

    return _value
