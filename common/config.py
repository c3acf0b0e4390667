from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _default_env_file() -> str:
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    delayed_observation_timeout_ms: int
    max_concurrent_setups: int
    observe_setup_timeout_sec: float

    ngsi_v2: bool
    types_file: Optional[str]
    api_version_marker: str

    log_level: str


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("LWM2M_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    delayed_ms = int(os.getenv("LWM2M_DELAYED_OBSERVATION_TIMEOUT_MS", "50"))
    max_concurrent = int(os.getenv("LWM2M_MAX_CONCURRENT_SETUPS", "0"))
    setup_timeout = float(os.getenv("LWM2M_OBSERVE_SETUP_TIMEOUT_SEC", "30"))

    # NGSIv2 agents receive attribute names URI-encoded from provisioning.
    ngsi_v2 = _env_bool("IOTA_NGSI_V2")
    types_file = os.getenv("LWM2M_TYPES_FILE") or None
    api_version_marker = os.getenv("IOTA_API_VERSION_MARKER", "")

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    return Settings(
        delayed_observation_timeout_ms=delayed_ms,
        max_concurrent_setups=max_concurrent,
        observe_setup_timeout_sec=setup_timeout,
        ngsi_v2=ngsi_v2,
        types_file=types_file,
        api_version_marker=api_version_marker,
        log_level=log_level,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
