import pytest
import yaml

from brisk.config import ConfigStore, config_file, flatten, load_config
from brisk.exceptions import ConfigError


def test_missing_file_is_empty(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == {}


def test_load_yaml_flattens(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("port: 8080\nserver:\n  host: example.com\n  tls: true\n")
    assert load_config(path) == {
        "port": 8080,
        "server.host": "example.com",
        "server.tls": True,
    }


def test_load_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('name = "web"\n\n[db]\nport = 5432\n')
    assert load_config(str(path)) == {"name": "web", "db.port": 5432}


def test_empty_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("")
    assert load_config(path) == {}


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[x]\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_document(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("port: [8080\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_flatten_nested():
    assert flatten({"a": {"b": {"c": 1}}, "d": 2}) == {"a.b.c": 1, "d": 2}


def test_config_file_location(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_file("myapp") == tmp_path / "myapp" / "config.yaml"


def test_config_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    store = ConfigStore(path).load()
    assert len(store) == 0
    store.set("port", 8080)
    store.set("name", "web")
    store.save()

    assert yaml.safe_load(path.read_text()) == {"name": "web", "port": 8080}
    assert not (tmp_path / "nested" / "config.yaml.tmp").exists()

    reloaded = ConfigStore(path).load()
    assert reloaded.get("port") == 8080
    assert "name" in reloaded
    assert reloaded.delete("name") is True
    assert reloaded.delete("name") is False
    assert reloaded.values() == {"port": 8080}
