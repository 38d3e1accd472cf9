from configstore.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    SettingNotFoundError,
    SettingTypeError,
)
from configstore.models import ConfigDocument, ValueKind, kind_of
from configstore.store import ConfigStore

__all__ = [
    "ConfigStore",
    "ConfigDocument",
    "ValueKind",
    "kind_of",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigWriteError",
    "SettingNotFoundError",
    "SettingTypeError",
]
