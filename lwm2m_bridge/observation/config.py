"""Configuration for observation scheduling and setup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from common.config import Settings, get_settings

DEFAULT_DELAYED_OBSERVATION_TIMEOUT_MS = 50


@dataclass
class ObservationConfig:
    """Observation scheduler settings."""
    delayed_observation_timeout: float = DEFAULT_DELAYED_OBSERVATION_TIMEOUT_MS / 1000.0  # seconds
    max_concurrent_setups: int = 0  # 0 = one slot per task in the batch
    setup_timeout: float = 30.0  # 0 = wait forever
    decode_attribute_names: bool = False
    api_version_marker: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObservationConfig":
        # A zero timeout falls back to the default, as in the agent config.
        delay_ms = settings.delayed_observation_timeout_ms or DEFAULT_DELAYED_OBSERVATION_TIMEOUT_MS
        return cls(
            delayed_observation_timeout=delay_ms / 1000.0,
            max_concurrent_setups=max(0, settings.max_concurrent_setups),
            setup_timeout=max(0.0, settings.observe_setup_timeout_sec),
            decode_attribute_names=settings.ngsi_v2,
            api_version_marker=settings.api_version_marker,
        )

    @classmethod
    def from_env(cls) -> "ObservationConfig":
        return cls.from_settings(get_settings())

    def resolve_delay(self, delay: Optional[float] = None) -> float:
        """Delay in seconds for a batch; non-positive values use the default."""
        if delay is not None and delay > 0:
            return float(delay)
        if self.delayed_observation_timeout > 0:
            return self.delayed_observation_timeout
        return DEFAULT_DELAYED_OBSERVATION_TIMEOUT_MS / 1000.0
