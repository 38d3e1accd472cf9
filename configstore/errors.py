# configstore/errors.py
from os import PathLike
from pydantic import BaseModel

class ErrorDetail(BaseModel):
    code: str
    msg: str

class ErrorEnvelope(BaseModel):
    error: ErrorDetail


class ConfigError(Exception):
    """Base class for every error raised by configstore."""
    code = "CONFIG_ERR"

    def __init__(self, msg: str, path: str | PathLike | None = None,
                 key: str | None = None, sub_key: str | None = None):
        super().__init__(msg)
        self.msg = msg
        self.path = str(path) if path is not None else None
        self.key = key
        self.sub_key = sub_key

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr-quote the message
        return self.msg

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=ErrorDetail(code=self.code, msg=self.msg))


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    code = "FILE_NOT_FOUND"

class ConfigReadError(ConfigError, OSError):
    code = "READ_ERR"

class ConfigParseError(ConfigError, ValueError):
    code = "PARSE_ERR"

class SettingNotFoundError(ConfigError, KeyError):
    code = "KEY_NOT_FOUND"

class SettingTypeError(ConfigError, TypeError):
    code = "TYPE_ERR"

class ConfigWriteError(ConfigError, OSError):
    code = "WRITE_ERR"
