"""Tests for storystate.config."""

from storystate.config import get_config


def test_defaults():
    config = get_config({})
    assert config == {"log_level": "WARNING", "prompt": "> ", "stop_at_ending": True}


def test_env_overrides():
    config = get_config({
        "STORYSTATE_LOG_LEVEL": " debug ",
        "STORYSTATE_PROMPT": "? ",
        "STORYSTATE_STOP_AT_ENDING": "no",
    })
    assert config["log_level"] == "DEBUG"
    assert config["prompt"] == "? "
    assert config["stop_at_ending"] is False


def test_unrecognized_bool_keeps_default():
    assert get_config({"STORYSTATE_STOP_AT_ENDING": "perhaps"})["stop_at_ending"] is True


def test_unrelated_env_ignored():
    assert get_config({"HOME": "/root"}) == get_config({})


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("STORYSTATE_PROMPT", ">> ")
    assert get_config()["prompt"] == ">> "
