# tests/test_engine/conftest.py
import os

import pytest


@pytest.fixture(autouse=True)
def _clean_zxopt_env(monkeypatch):
    """Every test starts without ZXOPT_* variables, including ones a
    previous ``load_dotenv`` call left behind."""
    for key in list(os.environ):
        if key.startswith("ZXOPT_"):
            monkeypatch.delenv(key)
    yield
    for key in list(os.environ):
        if key.startswith("ZXOPT_"):
            del os.environ[key]


@pytest.fixture
def dotenv_file(tmp_path):
    def write(**values):
        path = tmp_path / ".env"
        path.write_text("".join(f"ZXOPT_{k.upper()}={v}\n" for k, v in values.items()))
        return str(path)
    return write
