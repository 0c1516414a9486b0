import json
import uuid

import pytest
from pydantic import ValidationError

from prefab import create_registry
from prefab.config.settings import RegistrySettings, Settings
from prefab.shared.logger import PrefabLogger


def unique_name(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PREFAB_REGISTRY__ORDERING", raising=False)
        settings = Settings(_env_file=None)
        assert settings.app.log_level == "WARNING"
        assert settings.registry.ordering == "hash"
        assert settings.registry.include_optional_libraries is True

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("PREFAB_REGISTRY__ORDERING", "repr")
        monkeypatch.setenv("PREFAB_APP__LOG_JSON", "true")
        settings = Settings(_env_file=None)
        assert settings.registry.ordering == "repr"
        assert settings.app.log_json is True

    def test_invalid_ordering_rejected(self):
        with pytest.raises(ValidationError):
            RegistrySettings(ordering="alphabetical")

    def test_registry_honours_settings(self):
        settings = Settings(_env_file=None, registry=RegistrySettings(ordering="repr", include_optional_libraries=False))
        registry = create_registry(settings)
        assert registry.ordering_key is repr
        assert not registry.contains("sortedcontainers.SortedList")
        assert registry.contains(list)


class TestPrefabLogger:

    def test_console_output_carries_fields(self, capsys):
        logger = PrefabLogger(name=unique_name("console"), level="DEBUG")
        logger.info("Optional library type not available", type="yarl.URL")
        err = capsys.readouterr().err
        assert "Optional library type not available" in err
        assert "type=yarl.URL" in err
        assert "INFO" in err

    def test_level_filters_messages(self, capsys):
        logger = PrefabLogger(name=unique_name("quiet"), level="WARNING")
        logger.debug("hidden")
        logger.warning("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_json_file_sink(self, tmp_path):
        log_file = tmp_path / "prefab.log"
        logger = PrefabLogger(name=unique_name("file"), level="DEBUG", log_file=str(log_file))
        logger.debug("Cycle detected", type="Tree")

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["event"] == "Cycle detected"
        assert record["type"] == "Tree"
        assert record["level"] == "debug"

    def test_loggers_are_cached_per_name(self):
        name = unique_name("cached")
        first = PrefabLogger(name=name, level="DEBUG")
        second = PrefabLogger(name=name, level="ERROR")
        assert second.console_logger is first.console_logger
