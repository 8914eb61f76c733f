# tests/test_engine/test_config.py
import dataclasses

import pytest

from zxopt.config import DEFAULT_RULE_ORDER, EngineConfig, SimplifyMode


def test_defaults():
    config = EngineConfig()
    assert config.mode == SimplifyMode.FULL
    assert config.max_rewrites is None
    assert config.rule_order == DEFAULT_RULE_ORDER
    assert config.allow_fallback is False
    assert config.time_limit is None


def test_bounded_constructor():
    config = EngineConfig.bounded(7, search_cap=12)
    assert config.mode == SimplifyMode.BOUNDED
    assert config.max_rewrites == 7
    assert config.search_cap == 12


def test_mode_from_string():
    config = EngineConfig(mode="bounded", max_rewrites=2, rule_order=["spider", "id"])
    assert config.mode is SimplifyMode.BOUNDED
    assert config.rule_order == ("spider", "id")


def test_is_frozen():
    config = EngineConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.search_cap = 3


def test_with_options_validates():
    config = EngineConfig().with_options(rule_order=("lcomp", "spider"))
    assert config.rule_order == ("lcomp", "spider")
    with pytest.raises(ValueError):
        EngineConfig().with_options(rule_order=("spider", "fuse"))


@pytest.mark.parametrize("kwargs", [
    {"rule_order": ("spider", "bialgebra")},
    {"rule_order": ("spider", "spider")},
    {"mode": SimplifyMode.BOUNDED},
    {"max_rewrites": -1},
    {"search_cap": -5},
    {"tolerance": 0.0},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_from_env_without_variables(tmp_path):
    assert EngineConfig.from_env(dotenv_path=str(tmp_path / "missing.env")) == EngineConfig()


def test_from_env_reads_dotenv(dotenv_file):
    path = dotenv_file(mode="bounded", max_rewrites=5, rule_order="spider, id,pivot",
                       search_cap=100, allow_fallback="no", tolerance="1e-6", time_limit="2.5")
    config = EngineConfig.from_env(dotenv_path=path)
    assert config.mode == SimplifyMode.BOUNDED
    assert config.max_rewrites == 5
    assert config.rule_order == ("spider", "id", "pivot")
    assert config.search_cap == 100
    assert config.allow_fallback is False
    assert config.tolerance == pytest.approx(1e-6)
    assert config.time_limit == pytest.approx(2.5)


def test_environment_wins_over_dotenv(monkeypatch, dotenv_file):
    path = dotenv_file(search_cap=20)
    monkeypatch.setenv("ZXOPT_SEARCH_CAP", "10")
    assert EngineConfig.from_env(dotenv_path=path).search_cap == 10


def test_keyword_wins_over_environment(monkeypatch):
    monkeypatch.setenv("ZXOPT_SEARCH_CAP", "10")
    monkeypatch.setenv("ZXOPT_ALLOW_FALLBACK", "true")
    config = EngineConfig.from_env(dotenv_path="/nonexistent/.env", search_cap=3, allow_fallback=False)
    assert config.search_cap == 3
    assert config.allow_fallback is False


def test_from_env_rejects_bad_values(monkeypatch):
    monkeypatch.setenv("ZXOPT_ALLOW_FALLBACK", "maybe")
    with pytest.raises(ValueError):
        EngineConfig.from_env(dotenv_path="/nonexistent/.env")
    monkeypatch.setenv("ZXOPT_ALLOW_FALLBACK", "1")
    monkeypatch.setenv("ZXOPT_MODE", "bounded")
    with pytest.raises(ValueError):
        EngineConfig.from_env(dotenv_path="/nonexistent/.env")
    monkeypatch.setenv("ZXOPT_RULE_ORDER", "spider,unknown")
    monkeypatch.setenv("ZXOPT_MAX_REWRITES", "4")
    with pytest.raises(ValueError):
        EngineConfig.from_env(dotenv_path="/nonexistent/.env")
