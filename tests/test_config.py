from __future__ import annotations

import logging
from pathlib import Path

import pytest

from message_bag import MessageBag, default_format, load_config, reload_config


def test_default_format_without_overrides():
    assert default_format() == ":message"
    assert MessageBag().get_format() == ":message"


def test_env_override_sets_default_format(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MESSAGE_BAG__BAG__FORMAT", "<li>:message</li>")
    bag = MessageBag({"a": ["x"]})
    assert bag.get_format() == "<li>:message</li>"
    assert bag.all() == ["<li>x</li>"]
    # an explicit format still wins
    assert MessageBag(format=":key").get_format() == ":key"


def test_load_shipped_config(config_path: Path):
    cfg = load_config(str(config_path))
    assert default_format(cfg) == ":message"


def test_load_config_from_env_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bag.yaml"
    path.write_text("bag:\n  format: '[:key] :message'\n", encoding="utf-8")
    monkeypatch.setenv("MESSAGE_BAG_CONFIG", str(path))
    assert default_format(load_config()) == "[:key] :message"


def test_env_overrides_coerce_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bag.yaml"
    path.write_text("bag:\n  format: ':message'\n", encoding="utf-8")
    monkeypatch.setenv("MESSAGE_BAG__BAG__STRICT", "true")
    monkeypatch.setenv("MESSAGE_BAG__LIMITS__MAX", "10")
    monkeypatch.setenv("MESSAGE_BAG__BAG__FORMAT", "1.0")
    cfg = load_config(str(path))
    assert cfg["bag"]["strict"] is True
    assert cfg["limits"]["max"] == 10
    assert cfg["bag"]["format"] == "1.0"


def test_missing_config_falls_back(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="message_bag.config"):
        cfg = load_config(str(tmp_path / "nope.yaml"))
    assert cfg == {"bag": {"format": ":message"}}
    assert "config file not found" in caplog.text


def test_invalid_config_raises(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("bag: [unclosed\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(str(bad))

    listy = tmp_path / "list.yaml"
    listy.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(str(listy))


def test_default_format_ignores_empty_value():
    assert default_format({"bag": {"format": ""}}) == ":message"
    assert default_format({"bag": "oops"}) == ":message"


def test_config_file_sets_default_format(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bag.yaml"
    path.write_text("bag:\n  format: '<li>:message</li>'\n", encoding="utf-8")
    monkeypatch.setenv("MESSAGE_BAG_CONFIG", str(path))

    bag = MessageBag({"email": ["required"]})
    assert bag.get_format() == "<li>:message</li>"
    assert bag.first("email") == "<li>required</li>"


def test_config_file_is_cached_until_reload(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bag.yaml"
    path.write_text("bag:\n  format: 'v1 :message'\n", encoding="utf-8")
    monkeypatch.setenv("MESSAGE_BAG_CONFIG", str(path))
    assert MessageBag().get_format() == "v1 :message"

    path.write_text("bag:\n  format: 'v2 :message'\n", encoding="utf-8")
    assert MessageBag().get_format() == "v1 :message"

    reload_config()
    assert MessageBag().get_format() == "v2 :message"


def test_env_override_beats_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "bag.yaml"
    path.write_text("bag:\n  format: 'file :message'\n", encoding="utf-8")
    monkeypatch.setenv("MESSAGE_BAG_CONFIG", str(path))
    assert MessageBag().get_format() == "file :message"

    monkeypatch.setenv("MESSAGE_BAG__BAG__FORMAT", "env :message")
    assert MessageBag().get_format() == "env :message"
