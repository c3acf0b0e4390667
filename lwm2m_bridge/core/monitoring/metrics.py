"""Prometheus metrics for observation setup and update relay."""

from __future__ import annotations

from prometheus_client import Counter

OBSERVATION_BATCHES = Counter(
    "lwm2m_observation_batches_total",
    "Observation batches handled by the scheduler",
    ["status"],  # scheduled, cancelled, completed, partial
)

OBSERVATION_SETUPS = Counter(
    "lwm2m_observation_setups_total",
    "Resource observation setups attempted",
    ["status"],  # success, failed
)

RELAYED_UPDATES = Counter(
    "lwm2m_relayed_updates_total",
    "Attribute updates forwarded to the context broker",
    ["status"],  # success, failed
)
