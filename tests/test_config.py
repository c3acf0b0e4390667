"""Settings and type configuration loading tests."""

import json

import pytest

from common.config import get_settings
from lwm2m_bridge.core.domain import ConfigurationError, LogicalAttribute, ResourceAddress
from lwm2m_bridge.mapping import TypeConfigurationTable
from lwm2m_bridge.observation import ObservationConfig


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LWM2M_ENV_FILE", str(tmp_path / "missing.env"))
    for name in (
        "LWM2M_DELAYED_OBSERVATION_TIMEOUT_MS",
        "LWM2M_MAX_CONCURRENT_SETUPS",
        "LWM2M_OBSERVE_SETUP_TIMEOUT_SEC",
        "IOTA_NGSI_V2",
        "LWM2M_TYPES_FILE",
        "IOTA_API_VERSION_MARKER",
        "LOG_LEVEL",
    ):
        # teardown also removes values set by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = get_settings()

        assert settings.delayed_observation_timeout_ms == 50
        assert settings.max_concurrent_setups == 0
        assert settings.ngsi_v2 is False
        assert settings.types_file is None
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("LWM2M_DELAYED_OBSERVATION_TIMEOUT_MS", "250")
        clean_env.setenv("IOTA_NGSI_V2", "true")
        clean_env.setenv("LWM2M_MAX_CONCURRENT_SETUPS", "4")

        config = ObservationConfig.from_env()

        assert config.delayed_observation_timeout == pytest.approx(0.25)
        assert config.decode_attribute_names is True
        assert config.max_concurrent_setups == 4

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LWM2M_DELAYED_OBSERVATION_TIMEOUT_MS=500\nIOTA_API_VERSION_MARKER=v2\n")
        clean_env.setenv("LWM2M_ENV_FILE", str(env_file))

        settings = get_settings()

        assert settings.delayed_observation_timeout_ms == 500
        assert settings.api_version_marker == "v2"

    def test_resolve_delay(self):
        config = ObservationConfig(delayed_observation_timeout=0.2)

        assert config.resolve_delay() == pytest.approx(0.2)
        assert config.resolve_delay(1.5) == pytest.approx(1.5)
        assert config.resolve_delay(0) == pytest.approx(0.2)
        assert ObservationConfig(delayed_observation_timeout=0).resolve_delay() == pytest.approx(0.05)


class TestTypeConfiguration:
    def test_from_dict(self, type_config):
        assert "Robot" in type_config
        assert len(type_config) == 2
        assert type_config.attributes_for("Robot") == [
            LogicalAttribute("Battery", "number"),
            LogicalAttribute("Position", "string"),
        ]
        assert type_config.get("Robot").resource_mapping["Message"] == ResourceAddress(7392, 0, 3)
        assert type_config.attributes_for("Unknown") == []

    def test_invalid_mapping(self):
        with pytest.raises(ConfigurationError):
            TypeConfigurationTable.from_dict(
                {"Robot": {"lwm2mResourceMapping": {"Battery": {"objectType": "abc"}}}}
            )

    def test_from_file_plain_types(self, tmp_path, types_document):
        path = tmp_path / "types.json"
        path.write_text(json.dumps(types_document))

        assert "Sensor" in TypeConfigurationTable.from_file(path)

    def test_from_file_wrapped_types(self, tmp_path, types_document):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"types": types_document}))

        assert "Robot" in TypeConfigurationTable.from_file(path)

    def test_from_file_type_named_types(self, tmp_path, types_document):
        document = dict(types_document)
        document["types"] = {
            "attributes": [{"name": "Kind", "type": "string"}],
            "lwm2mResourceMapping": {
                "Kind": {"objectType": 9001, "objectInstance": 0, "objectResource": 1}
            },
        }
        path = tmp_path / "types.json"
        path.write_text(json.dumps(document))

        table = TypeConfigurationTable.from_file(path)

        assert "types" in table
        assert "Robot" in table
        assert table.attributes_for("types") == [LogicalAttribute("Kind", "string")]

    def test_from_file_ngsi_wrapped_types(self, tmp_path, types_document):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"ngsi": {"types": types_document}, "logLevel": "DEBUG"}))

        assert "Sensor" in TypeConfigurationTable.from_file(path)

    def test_from_file_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            TypeConfigurationTable.from_file(path)
