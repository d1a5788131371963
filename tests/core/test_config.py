import json

import pytest

from databinding.core.config import BinderSettings, ConfigManager


def test_config_read_default():
    config = ConfigManager()
    assert config.data.culture is None
    assert config.data.strict_teardown is True


def test_config_update_event():
    config = ConfigManager()
    received = []

    def on_change(key, val):
        received.append((key, val))

    config.on_changed.connect(on_change)

    config.update("culture", "de_DE")

    assert config.get("culture") == "de_DE"
    assert received[-1] == ("culture", "de_DE")


def test_config_update_validates():
    config = ConfigManager()

    with pytest.raises(ValueError):
        config.update("no_such_key", 1)

    # pydantic coerces "false" to False
    config.update("strict_teardown", "false")
    assert config.data.strict_teardown is False


def test_config_persists_json(tmp_path):
    path = tmp_path / "nested" / "binder.json"

    config = ConfigManager(str(path))
    assert path.exists()

    config.update("culture", "fr_FR")

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["culture"] == "fr_FR"
    assert ConfigManager(str(path)).data.culture == "fr_FR"


def test_config_loads_toml_table(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('[binder]\nculture = "en_GB"\nstrict_teardown = false\n', encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data == BinderSettings(culture="en_GB", strict_teardown=False)


def test_config_invalid_file_keeps_defaults(tmp_path, log_messages):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data == BinderSettings()
    assert any(level == "ERROR" and "Failed to load config" in msg for level, msg in log_messages)
