# configstore/store.py
import copy
import json
import os
import shutil
import threading
import uuid
from pathlib import Path
from typing import Any, Iterator

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python
import structlog

from configstore.config import get_settings
from configstore.errors import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    SettingNotFoundError,
    SettingTypeError,
)
from configstore.models import ConfigDocument, kind_of

logger = structlog.get_logger(__name__)


def _check_key(name: str, key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError(f"{name} must be a non-empty string")


class ConfigStore:
    """
    Typed access to a JSON object stored in a file.

    Every read goes to disk, so values written by someone else after
    construction are seen. ``snapshot`` holds the last document read or
    written. Writes from one instance are serialised; separate processes
    writing the same file are not coordinated.
    """

    def __init__(self, path: str | os.PathLike, indent: int | None = None,
                 create: bool = False):
        self.path = Path(path)
        self.indent = get_settings().indent if indent is None else indent
        self._write_lock = threading.Lock()
        # create=True starts from an empty document when the file is missing;
        # the file itself only appears on the first set()
        self._snapshot: ConfigDocument = self._read_document(missing_ok=create)
        logger.debug("Configuration loaded", path=str(self.path), keys=len(self._snapshot))

    # ---- reading ----
    def _read_document(self, missing_ok: bool = False) -> ConfigDocument:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError as e:
            if missing_ok:
                return {}
            raise ConfigFileNotFoundError(
                f"Configuration file not found: {self.path}", path=self.path
            ) from e
        except UnicodeDecodeError as e:
            raise ConfigParseError(
                f"Configuration file is not valid UTF-8: {self.path}", path=self.path
            ) from e
        except OSError as e:
            raise ConfigReadError(
                f"Error reading configuration file {self.path}: {e}", path=self.path
            ) from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(
                f"JSON format error in configuration file {self.path}: {e}", path=self.path
            ) from e
        if not isinstance(document, dict):
            raise ConfigParseError(
                f"Configuration file {self.path} must contain a JSON object, "
                f"found {kind_of(document).value}",
                path=self.path,
            )
        return document

    def reload(self) -> ConfigDocument:
        """Re-read the file into the snapshot and return a copy of it."""
        self._snapshot = self._read_document()
        return self.snapshot

    @property
    def snapshot(self) -> ConfigDocument:
        return copy.deepcopy(self._snapshot)

    def keys(self) -> list[str]:
        return list(self._snapshot)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"ConfigStore(path={str(self.path)!r})"

    def _convert(self, raw: Any, type_: Any, key: str, sub_key: str | None) -> Any:
        if type_ is Any:
            return raw
        try:
            return TypeAdapter(type_).validate_python(raw)
        except ValidationError as e:
            where = f"'{sub_key}' under '{key}'" if sub_key else f"'{key}'"
            raise SettingTypeError(
                f"Setting {where} cannot be read as {getattr(type_, '__name__', type_)}: "
                f"{e.error_count()} validation error(s)",
                path=self.path, key=key, sub_key=sub_key,
            ) from e

    def get(self, key: str, sub_key: str | None = None, type_: Any = Any) -> Any:
        """
        Return the value at ``key`` (or at ``key`` -> ``sub_key`` for one level
        of nesting), converted to ``type_`` with pydantic.
        """
        _check_key("key", key)
        if sub_key is not None:
            _check_key("sub_key", sub_key)

        self._snapshot = self._read_document()
        if key not in self._snapshot:
            raise SettingNotFoundError(
                f"Setting '{key}' not found.", path=self.path, key=key
            )
        value = self._snapshot[key]

        if sub_key is not None:
            if not isinstance(value, dict):
                raise SettingNotFoundError(
                    f"Setting '{sub_key}' under '{key}' not found: "
                    f"'{key}' is {kind_of(value).value}, not object.",
                    path=self.path, key=key, sub_key=sub_key,
                )
            if sub_key not in value:
                raise SettingNotFoundError(
                    f"Setting '{sub_key}' under '{key}' not found.",
                    path=self.path, key=key, sub_key=sub_key,
                )
            value = value[sub_key]

        logger.debug("Setting read", path=str(self.path), key=key, sub_key=sub_key)
        return self._convert(copy.deepcopy(value), type_, key, sub_key)

    # ---- writing ----
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and rewrite the whole file."""
        _check_key("key", key)
        try:
            data = to_jsonable_python(value)
        except PydanticSerializationError as e:
            raise SettingTypeError(
                f"Value for setting '{key}' is not JSON serialisable: {e}",
                path=self.path, key=key,
            ) from e
        try:
            json.dumps(data, allow_nan=False)
        except ValueError as e:
            raise SettingTypeError(
                f"Value for setting '{key}' is not valid JSON: {e}",
                path=self.path, key=key,
            ) from e

        with self._write_lock:
            exists = self.path.exists()
            if not exists:
                logger.warning("No config file found, starting a new one", path=str(self.path))
            document = self._read_document(missing_ok=True)
            document[key] = data
            self._write_document(document, exists)
            self._snapshot = document
        logger.info("Setting written", path=str(self.path), key=key,
                    kind=kind_of(data).value)

    def _write_document(self, document: ConfigDocument, exists: bool) -> None:
        text = json.dumps(document, indent=self.indent, ensure_ascii=False)
        # unique per write, other instances may be writing the same file
        tmp = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp.open("x", encoding="utf-8") as f:
                f.write(text)
                f.write("\n")
            if exists:
                shutil.copymode(self.path, tmp)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("Failed to write configuration", path=str(self.path), error=str(e))
            tmp.unlink(missing_ok=True)
            raise ConfigWriteError(
                f"Error writing configuration file {self.path}: {e}", path=self.path
            ) from e
