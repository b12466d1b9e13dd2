"""Tests for fridge config loading."""

import pytest

from fridge.config import FridgeConfig, load_config
from fridge.db.inventory import DEFAULT_STORE_PATH


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("FRIDGE_STORE_PATH", raising=False)
    monkeypatch.delenv("FRIDGE_LOG_LEVEL", raising=False)


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, FridgeConfig)
    assert config.store.path == DEFAULT_STORE_PATH
    assert config.freshness.critical_days == 1
    assert config.freshness.soon_days == 3
    assert config.ui.width == 660
    assert config.ui.height == 550
    assert config.ui.max_quantity == 10
    assert config.logging.level == "WARNING"
    assert config.logging.file == ""


def test_load_config_nonexistent_file():
    config = load_config("/nonexistent/path.toml")
    assert config.freshness.soon_days == 3


def test_load_config_from_toml(tmp_path):
    path = tmp_path / "fridge.toml"
    path.write_text(
        """\
[store]
path = "/var/lib/fridge.db"

[freshness]
critical_days = 2
soon_days = 5

[ui]
width = 800
max_quantity = 24

[logging]
level = "debug"
file = "/tmp/fridge.log"
""",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.store.path == "/var/lib/fridge.db"
    assert config.freshness.critical_days == 2
    assert config.freshness.soon_days == 5
    assert config.ui.width == 800
    assert config.ui.height == 550
    assert config.ui.max_quantity == 24
    assert config.logging.level == "DEBUG"
    assert config.logging.file == "/tmp/fridge.log"


def test_load_config_env_override(monkeypatch):
    """Environment variables fill values the file leaves unset."""
    monkeypatch.setenv("FRIDGE_STORE_PATH", "/env/fridge.db")
    monkeypatch.setenv("FRIDGE_LOG_LEVEL", "info")

    config = load_config()
    assert config.store.path == "/env/fridge.db"
    assert config.logging.level == "INFO"


def test_load_config_file_takes_precedence(monkeypatch, tmp_path):
    monkeypatch.setenv("FRIDGE_STORE_PATH", "/env/fridge.db")
    path = tmp_path / "fridge.toml"
    path.write_text('[store]\npath = "/file/fridge.db"\n', encoding="utf-8")

    assert load_config(path).store.path == "/file/fridge.db"


def test_load_config_rejects_inverted_thresholds(tmp_path):
    path = tmp_path / "fridge.toml"
    path.write_text("[freshness]\ncritical_days = 5\nsoon_days = 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="soon_days"):
        load_config(path)


def test_load_config_rejects_negative_critical_days(tmp_path):
    path = tmp_path / "fridge.toml"
    path.write_text("[freshness]\ncritical_days = -1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="critical_days"):
        load_config(path)


def test_load_config_rejects_zero_max_quantity(tmp_path):
    path = tmp_path / "fridge.toml"
    path.write_text("[ui]\nmax_quantity = 0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="max_quantity"):
        load_config(path)


@pytest.mark.parametrize(
    "toml, field",
    [
        ('[freshness]\ncritical_days = "1"\n', "freshness.critical_days"),
        ("[freshness]\nsoon_days = 2.5\n", "freshness.soon_days"),
        ("[ui]\nmax_quantity = true\n", "ui.max_quantity"),
        ("[logging]\nlevel = 10\n", "logging.level"),
        ("[logging]\nfile = 3\n", "logging.file"),
        ("[store]\npath = 5\n", "store.path"),
    ],
)
def test_load_config_rejects_wrong_types(tmp_path, toml, field):
    """Values of the wrong type raise ValueError naming the field."""
    path = tmp_path / "fridge.toml"
    path.write_text(toml, encoding="utf-8")
    with pytest.raises(ValueError, match=field):
        load_config(path)


def test_load_config_rejects_non_table_section(tmp_path):
    path = tmp_path / "fridge.toml"
    path.write_text("freshness = 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match=r"\[freshness\]"):
        load_config(path)
