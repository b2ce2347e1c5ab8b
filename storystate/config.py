"""Settings for the bundled demo host.

The engine itself takes no configuration. The terminal player reads its
settings from the environment (after load_dotenv()), merged over defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

_CONFIG_DEFAULTS: dict[str, Any] = {
    "log_level": "WARNING",
    "prompt": "> ",
    "stop_at_ending": True,
}

_ENV_KEYS = {
    "log_level": "STORYSTATE_LOG_LEVEL",
    "prompt": "STORYSTATE_PROMPT",
    "stop_at_ending": "STORYSTATE_STOP_AT_ENDING",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(raw: str, default: bool) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def get_config(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read config, returning defaults merged with values found in *env*.

    *env* defaults to os.environ. Unrecognized boolean spellings fall back to
    the default rather than failing.
    """
    if env is None:
        env = os.environ
    config = dict(_CONFIG_DEFAULTS)
    if _ENV_KEYS["log_level"] in env:
        config["log_level"] = env[_ENV_KEYS["log_level"]].strip().upper()
    if _ENV_KEYS["prompt"] in env:
        config["prompt"] = env[_ENV_KEYS["prompt"]]
    if _ENV_KEYS["stop_at_ending"] in env:
        config["stop_at_ending"] = _parse_bool(
            env[_ENV_KEYS["stop_at_ending"]], _CONFIG_DEFAULTS["stop_at_ending"],
        )
    return config
