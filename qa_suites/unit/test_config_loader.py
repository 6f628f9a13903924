import pytest
import yaml

from qa_tools.common import ConfigLoader, ConfigurationError


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"api": {"jsonplaceholder": {"base_url": "http://example.com"}, "timeout": 10}}),
        encoding="utf-8",
    )

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.jsonplaceholder.base_url") == "http://example.com"
    assert loader.get("api.retry_count", 3) == 3

    ConfigLoader.reset()
    monkeypatch.setenv("API_JSONPLACEHOLDER_BASE_URL", "http://env.example.com")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.jsonplaceholder.base_url") == "http://env.example.com"


def test_env_value_converted_to_default_type(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"ui": {"headless": True}}), encoding="utf-8")
    monkeypatch.setenv("UI_HEADLESS", "false")
    monkeypatch.setenv("API_TIMEOUT", "12")

    loader = ConfigLoader(config_path=config_path)

    assert loader.get("ui.headless", True) is False
    assert loader.get("api.timeout", 30) == 12


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"api": {"timeout": 5}}), encoding="utf-8")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.timeout") == 5

    config_path.write_text(yaml.dump({"api": {"timeout": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("api.timeout") == 15


def test_config_path_from_environment(monkeypatch, tmp_path):
    config_path = tmp_path / "alt.yaml"
    config_path.write_text(yaml.dump({"logging": {"level": "DEBUG"}}), encoding="utf-8")
    monkeypatch.setenv("QA_CONFIG_PATH", str(config_path))

    loader = ConfigLoader()

    assert loader.config_path == config_path
    assert loader.get_section("logging") == {"level": "DEBUG"}
    assert loader.get_section("missing") == {}


def test_singleton_until_reset(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"a": 1}), encoding="utf-8")

    first = ConfigLoader(config_path=config_path)
    assert ConfigLoader() is first

    ConfigLoader.reset()
    assert ConfigLoader(config_path=config_path) is not first


def test_missing_file_uses_defaults(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "nope.yaml")

    assert loader.get("api.timeout", 30) == 30


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("api: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_non_mapping_root_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(["a", "b"]), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_shipped_config_has_service_urls():
    loader = ConfigLoader()

    assert loader.get("api.jsonplaceholder.base_url").startswith("https://")
    assert loader.get("api.reqres.base_url").endswith("/api")
    assert loader.get("ui.browser") in ("chromium", "firefox", "webkit")
