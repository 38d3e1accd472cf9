import json
import pytest

from configstore.config import set_settings

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for env in ("CONFIGSTORE_LOG_LEVEL", "CONFIGSTORE_PATH", "CONFIGSTORE_INDENT"):
        monkeypatch.delenv(env, raising=False)
    set_settings()

@pytest.fixture
def write_config(tmp_path):
    def _write(content, name="config.json"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path
    return _write
