"""Health endpoint tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from lwm2m_bridge.endpoints import create_health_router
from lwm2m_bridge.handlers import ActiveAttributeObserver
from lwm2m_bridge.mapping import ResourceMappingResolver
from lwm2m_bridge.observation import ObservationListBuilder, ObservationScheduler


@pytest.fixture
def client(observation_service, relay, observation_config, stats, type_config, default_registry):
    builder = ObservationListBuilder(ResourceMappingResolver(type_config, default_registry), stats=stats)
    scheduler = ObservationScheduler(observation_service, relay, config=observation_config, stats=stats)
    app = FastAPI()
    app.include_router(create_health_router(ActiveAttributeObserver(builder, scheduler)))
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_observation_stats(client, stats):
    stats.setups_succeeded = 3
    stats.setups_failed = 1

    body = client.get("/health/observations").json()

    assert body["setups_succeeded"] == 3
    assert body["setups_failed"] == 1
    assert body["setup_success_rate"] == pytest.approx(0.75)
    assert body["pending_batches"] == 0
