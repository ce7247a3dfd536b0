"""Configuration loading for message bag defaults.

Layered configuration:
1. Explicit path argument (highest precedence)
2. Environment variable MESSAGE_BAG_CONFIG
3. Fallback to "config/default.yaml"

Optional overrides come from environment variables with prefix
``MESSAGE_BAG__`` (e.g., MESSAGE_BAG__BAG__FORMAT="<li>:message</li>").
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

ENV_PATH = "MESSAGE_BAG_CONFIG"
ENV_PREFIX = "MESSAGE_BAG__"
DEFAULT_PATH = "config/default.yaml"
DEFAULT_FORMAT = ":message"


def _defaults() -> Dict[str, Any]:
    return {"bag": {"format": DEFAULT_FORMAT}}


def _coerce(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides with prefix MESSAGE_BAG__."""
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        # MESSAGE_BAG__BAG__FORMAT -> cfg["bag"]["format"]
        parts = key[len(ENV_PREFIX):].lower().split("__")
        sub = cfg
        for p in parts[:-1]:
            if p not in sub or not isinstance(sub[p], dict):
                sub[p] = {}
            sub = sub[p]
        # Templates are text; don't let "1.0" or "true" turn into numbers.
        sub[parts[-1]] = value if parts[-1] == "format" else _coerce(value)
    return cfg


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML configuration.

    Parameters
    ----------
    path : str | None
        Optional path to a configuration file. If not provided, the
        environment variable ``MESSAGE_BAG_CONFIG`` is consulted. As a
        last resort ``config/default.yaml`` is used.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with environment overrides applied.
    """
    if path is None:
        path = os.environ.get(ENV_PATH, DEFAULT_PATH)

    path_obj = Path(path)
    if not path_obj.exists():
        logger.warning("config file not found at %s, using defaults", path_obj)
        return _apply_env_overrides(_defaults())

    with path_obj.open("r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RuntimeError(f"Failed to parse config file {path_obj}: {e}") from e

    if not isinstance(cfg, dict):
        raise RuntimeError(f"Invalid config format in {path_obj}, expected dict.")

    logger.debug("loaded config from %s", path_obj)
    return _apply_env_overrides(cfg)


@lru_cache(maxsize=8)
def _cached_config(path: str, env_overrides: Tuple[Tuple[str, str], ...]) -> Dict[str, Any]:
    # env_overrides is only part of the cache key; load_config reads os.environ itself.
    return load_config(path)


def reload_config() -> None:
    """Forget cached configuration so the next bag re-reads the YAML file."""
    _cached_config.cache_clear()


def default_format(cfg: Optional[Dict[str, Any]] = None) -> str:
    """Return the render template new bags start with.

    Without ``cfg`` the layered configuration is resolved through
    :func:`load_config` (cached per config path and env overrides; call
    :func:`reload_config` after editing the file).
    """
    if cfg is None:
        path = os.environ.get(ENV_PATH, DEFAULT_PATH)
        overrides = tuple(sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX)))
        cfg = _cached_config(path, overrides)
    bag_cfg = cfg.get("bag")
    fmt = bag_cfg.get("format") if isinstance(bag_cfg, dict) else None
    return str(fmt) if fmt else DEFAULT_FORMAT
