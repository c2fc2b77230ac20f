"""Configuration loading.

Settings come from, lowest precedence first: built-in defaults, the JSON
config file shared with the todoist command line client
(``~/.todoist.config.json``), environment variables (a ``.env`` file in the
working directory is honoured), and finally explicit overrides from the
command line.
"""
import json
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from .client import TODOIST_API_BASE
from .errors import ConfigError
from .logger import DEFAULT_LEVEL, DEFAULT_LOG_FILE, get_logger
from .scheduler import DEFAULT_RATE

DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".todoist.config.json")

# environment variable -> settings field
ENV_VARS = {
    "TODOIST_TOKEN": "token",
    "TODOIST_BASE_URL": "base_url",
    "TODOIST_TIMEOUT": "request_timeout",
    "TODOTUI_FPS": "fps",
    "TODOTUI_LOG_FILE": "log_file",
    "TODOTUI_LOG_LEVEL": "log_level",
}

logger = get_logger(__name__)


@dataclass(frozen=True)
class Settings:
    token: Optional[str] = None
    base_url: str = TODOIST_API_BASE
    # None waits forever on the initial sync
    request_timeout: Optional[float] = None
    fps: float = DEFAULT_RATE
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LEVEL


_CASTS = {"request_timeout": float, "fps": float}


def _coerce(name: str, value: Any) -> Any:
    cast = _CASTS.get(name)
    if cast is None or value is None:
        return value
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {name}: {value!r}") from e


def read_config_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")
    known = {f.name for f in fields(Settings)}
    return {k: v for k, v in data.items() if k in known}


def read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    return {field_name: environ[var] for var, field_name in ENV_VARS.items() if environ.get(var)}


def load_settings(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                  use_dotenv: bool = True, **overrides) -> Settings:
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = os.environ

    values: Dict[str, Any] = {}
    values.update(read_config_file(config_path or DEFAULT_CONFIG_PATH))
    values.update(read_env(environ))
    values.update({k: v for k, v in overrides.items() if v is not None})

    settings = replace(Settings(), **{k: _coerce(k, v) for k, v in values.items()})
    if settings.fps <= 0:
        raise ConfigError(f"fps must be positive, got {settings.fps}")
    logger.debug("settings loaded from %s", config_path or DEFAULT_CONFIG_PATH)
    return settings


def require_token(settings: Settings) -> str:
    if not settings.token:
        raise ConfigError(
            "no API token: pass --token, set TODOIST_TOKEN, "
            f"or add \"token\" to {DEFAULT_CONFIG_PATH}"
        )
    return settings.token
