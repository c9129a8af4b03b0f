"""Environment variable expansion for configuration values.

Supports ``$VAR``, ``${VAR}`` and ``${VAR:default}``. A reference to an unset
variable without a default is left as written.
"""

import os
import re
from typing import Any, Dict

_ENV_PATTERN = re.compile(
    r"\$\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<default>[^}]*))?\}"
    r"|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)"
)


def _replace(match: "re.Match[str]") -> str:
    name = match.group("braced") or match.group("bare")
    value = os.environ.get(name)
    if value is not None:
        return value
    default = match.group("default")
    if default is not None:
        return default
    return match.group(0)


def expand_env_vars(value: Any) -> Any:
    """Expand environment variables in strings, recursing into dicts and lists."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(_replace, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand environment variables throughout a configuration dictionary.

    Values that expand to an empty string, and sections left empty as a
    result, are dropped so that schema defaults apply instead.
    """
    return _drop_empty(expand_env_vars(config))


def _drop_empty(value: Any) -> Any:
    if isinstance(value, dict):
        pruned = {k: _drop_empty(v) for k, v in value.items()}
        return {k: v for k, v in pruned.items() if v != "" and v != {}}
    if isinstance(value, list):
        return [_drop_empty(v) for v in value]
    return value
