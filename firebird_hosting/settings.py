from __future__ import annotations

import os
from typing import Dict, Mapping, Optional


_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}

# Environment variables use "__" where configuration keys use ":".
_ENV_SEPARATOR = "__"
_KEY_SEPARATOR = ":"
PARAMETERS_SECTION = "Parameters"


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    lowered = val.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def is_debug() -> bool:
    return _env_bool("FIREBIRD_HOSTING_DEBUG", False)


def parameter_key(name: str) -> str:
    return f"{PARAMETERS_SECTION}{_KEY_SEPARATOR}{name}"


def load_configuration(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Collect parameter values from the environment.

    ``Parameters__firebird-password=secret`` becomes the configuration entry
    ``Parameters:firebird-password``.
    """
    if environ is None:
        environ = os.environ
    prefix = f"{PARAMETERS_SECTION}{_ENV_SEPARATOR}"
    config: Dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith(prefix) and len(key) > len(prefix):
            config[key.replace(_ENV_SEPARATOR, _KEY_SEPARATOR)] = value
    return config
