# configstore/config.py
import os

from pydantic import BaseModel, Field
import structlog
logger = structlog.get_logger(__name__)

class Settings(BaseModel):
    log_level: str = Field("info", description="Log level for configstore's own logging")
    default_path: str = Field("config.json", description="File used by the CLI when --file is not given")
    indent: int = Field(2, ge=0, description="Indentation used when rewriting the config file")

_settings: Settings | None = None

def get_settings() -> Settings:
    if _settings is None:
        return set_settings()
    return _settings

def set_settings() -> Settings:
    """(Re)read configstore's runtime settings from the environment."""
    global _settings
    values = {}
    for field, env in (("log_level", "CONFIGSTORE_LOG_LEVEL"),
                       ("default_path", "CONFIGSTORE_PATH"),
                       ("indent", "CONFIGSTORE_INDENT")):
        if env in os.environ:
            values[field] = os.environ[env]
    _settings = Settings(**values)
    return _settings
