import json
import logging

import pytest

from a1s.config import A1sConfig, load_a1s_env, load_config, parse_seconds
from a1s.utils.exceptions import ConfigError
from a1s.utils.logging_utils import setup_logging


def test_env_defaults():
    env = load_a1s_env(environ={})
    assert env.refresh_sec == 5.0
    assert env.api_timeout_sec == 30.0
    assert env.cache_ttl_sec == 5.0
    assert env.cache_max == 1000
    assert env.disable_cache is False
    assert env.explicit == set()
    assert env.deprecated_seen == []


def test_env_parsing_and_clamping():
    env = load_a1s_env(environ={
        "A1S_REFRESH_SEC": "0.1",
        "A1S_API_TIMEOUT_SEC": "oops",
        "A1S_CACHE_MAX": "0",
        "A1S_CACHE_TTL_SEC": "12.5",
        "A1S_DISABLE_CACHE": "yes",
        "A1S_DEFAULT_REGION": " eu-west-1 ",
        "A1S_LOG_LEVEL": "debug",
    })
    assert env.refresh_sec == 0.5
    assert env.api_timeout_sec == 30.0
    assert env.cache_max == 1
    assert env.cache_ttl_sec == 12.5
    assert env.disable_cache is True
    assert env.default_region == "eu-west-1"
    assert env.log_level == "DEBUG"
    assert {"refresh_sec", "cache_max", "default_region"} <= env.explicit


def test_deprecated_refresh_rate():
    env = load_a1s_env(environ={"A1S_REFRESH_RATE": "8"})
    assert env.refresh_sec == 8.0
    assert env.deprecated_seen == ["A1S_REFRESH_RATE"]
    env = load_a1s_env(environ={"A1S_REFRESH_RATE": "8", "A1S_REFRESH_SEC": "3"})
    assert env.refresh_sec == 3.0
    assert env.deprecated_seen == ["A1S_REFRESH_RATE"]


def test_env_cache_and_force_reload(monkeypatch):
    monkeypatch.setenv("A1S_CACHE_MAX", "7")
    env = load_a1s_env(force_reload=True)
    assert env.cache_max == 7
    monkeypatch.setenv("A1S_CACHE_MAX", "9")
    assert load_a1s_env() is env
    assert load_a1s_env(force_reload=True).cache_max == 9


def test_parse_seconds():
    assert parse_seconds(10, "x") == 10.0
    assert parse_seconds("2.5", "x") == 2.5
    assert parse_seconds("30s", "x") == 30.0
    assert parse_seconds("1m30s", "x") == 90.0
    assert parse_seconds("junk", "x") == 0.0
    with pytest.raises(ConfigError):
        parse_seconds(True, "x")


def test_load_config_from_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "refreshRate: 2\n"
        "apiTimeout: 1m\n"
        "readOnly: true\n"
        "defaultView: s3\n"
        "defaultRegion: ap-south-1\n"
        "cache:\n"
        "  ttl: 10\n"
        "  maxEntries: 50\n",
        encoding="utf-8",
    )
    cfg = load_config(str(p), environ={})
    assert cfg.source == str(p)
    assert cfg.refresh_interval == 2.0
    assert cfg.api_timeout == 60.0
    assert cfg.read_only is True
    assert cfg.default_view == "s3"
    assert cfg.default_region == "ap-south-1"
    cc = cfg.cache_config()
    assert cc.default_ttl == 10.0 and cc.max_entries == 50


def test_env_overrides_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("refreshRate: 2\ndefaultRegion: ap-south-1\ncache: {maxEntries: 50}\n", encoding="utf-8")
    cfg = load_config(str(p), environ={"A1S_REFRESH_SEC": "9", "A1S_CACHE_MAX": "3", "A1S_DISABLE_CACHE": "1"})
    assert cfg.refresh_rate == 9.0
    assert cfg.cache_max_entries == 3
    assert cfg.default_region == "ap-south-1"
    assert cfg.disable_cache is True


def test_config_path_from_env(tmp_path):
    p = tmp_path / "alt.yaml"
    p.write_text("defaultView: iam\n", encoding="utf-8")
    cfg = load_config(environ={"A1S_CONFIG": str(p)})
    assert cfg.default_view == "iam"


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "nope.yaml"), environ={})
    assert cfg.source is None
    assert cfg.refresh_rate == 5.0 and cfg.api_timeout == 30.0 and cfg.default_view == "ec2"


def test_validate_restores_defaults(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("refreshRate: 0\napiTimeout: -5\n", encoding="utf-8")
    cfg = load_config(str(p), environ={})
    assert cfg.refresh_rate == 5.0
    assert cfg.api_timeout == 30.0
    assert A1sConfig(cache_ttl=0, cache_max_entries=0).validate().cache_config().max_entries == 1000


@pytest.mark.parametrize("body", ["- a\n- b\n", "refreshRate: [1\n", "cache: 5\n", "cache: {maxEntries: lots}\n"])
def test_bad_config_raises(tmp_path, body):
    p = tmp_path / "config.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(p), environ={})


def test_setup_logging_file_only(tmp_path, monkeypatch):
    monkeypatch.delenv("A1S_LOG_CONSOLE", raising=False)
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    log_file = tmp_path / "logs" / "a1s.log"
    for h in saved[0]:
        root.removeHandler(h)
    try:
        setup_logging("DEBUG", str(log_file))
        assert [type(h) for h in root.handlers] == [logging.FileHandler]
        logging.getLogger("a1s.test").info("hello file")
        root.handlers[0].flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("botocore").level == logging.WARNING

        monkeypatch.setenv("A1S_LOG_CONSOLE", "1")
        setup_logging("INFO", None)
        assert [type(h) for h in root.handlers] == [logging.StreamHandler]
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])


def test_json_console_lines():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    for h in saved[0]:
        root.removeHandler(h)
    try:
        setup_logging("INFO", None, console=True, json_console=True)
        (handler,) = root.handlers
        record = logging.LogRecord("a1s.model", logging.WARNING, __file__, 1, "load of %s failed", ("ec2",), None)
        line = handler.format(record)
        assert "\n" not in line
        payload = json.loads(line)
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "a1s.model"
        assert payload["msg"] == "load of ec2 failed"
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
