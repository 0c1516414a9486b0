# prefab/config/logger.py

from typing import Optional

from prefab.config.settings import Settings
from prefab.shared.logger.prefab_logger import PrefabLogger

# Private singleton settings, loaded on first use
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_logger(name: str = "prefab") -> PrefabLogger:
    """
    Return the PrefabLogger for ``name``.
    Level, file sink and format come from the app settings; loggers are
    cached per name, so repeated calls are cheap.
    """
    app = get_settings().app
    return PrefabLogger(
        name=name,
        level=app.log_level,
        log_file=app.log_file,
        json_format=app.log_json,
    )
