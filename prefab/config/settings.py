from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ----------------------------
# General / App settings
# ----------------------------
class AppSettings(BaseSettings):
    app_name: str = "prefab"

    # Logger
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_json: bool = False


# ----------------------------
# Registry settings
# ----------------------------
class RegistrySettings(BaseSettings):
    # Ordering applied by sorted containers whose elements have no natural order
    ordering: Literal["hash", "repr"] = "hash"

    # Register the lazy entries for optional third-party libraries
    include_optional_libraries: bool = True


# ----------------------------
# Top-level settings
# ----------------------------
class Settings(BaseSettings):
    app: AppSettings = Field(default_factory=AppSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)

    model_config = SettingsConfigDict(
        env_prefix="PREFAB_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
