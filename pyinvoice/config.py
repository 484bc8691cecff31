"""Configuration management for PyInvoice."""

import json
import os
import re
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

# Regex to find placeholders like ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{(.+?)\}")

CONFIG_ENV_VAR = "PYINVOICE_CONFIG"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "output_file": "output.xlsx",
    "output_dir": "output",
    "sheet": "Data",
    "workers": 1,
    "log_file": "pyinvoice.log",
    "log_level": "INFO",
    "secret_key": "dev-secret-key",
    "layout": {},
}


def _substitute_env_vars(data: Any) -> Any:
    """Recursively substitute environment variables in config data."""
    if isinstance(data, dict):
        return {k: _substitute_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_substitute_env_vars(i) for i in data]
    if isinstance(data, str):

        def replace_match(match: re.Match) -> str:
            var_name = match.group(1)
            value = os.environ.get(var_name)
            if value is None:
                # Keep the placeholder so the missing variable stays visible.
                return match.group(0)
            return value

        return ENV_VAR_PATTERN.sub(replace_match, data)
    return data


def _strip_comments(data: Any) -> Any:
    """Drop dictionary keys starting with ``_`` (used as comments)."""
    if isinstance(data, dict):
        return {
            k: _strip_comments(v)
            for k, v in data.items()
            if not (isinstance(k, str) and k.startswith("_"))
        }
    if isinstance(data, list):
        return [_strip_comments(i) for i in data]
    return data


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from JSON file with environment variable substitution."""
    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw_config = json.load(fh)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(raw_config, dict):
        raise SystemExit(f"Invalid configuration in {path}: expected a JSON object")
    return _substitute_env_vars(_strip_comments(raw_config))


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """Return ``DEFAULT_SETTINGS`` updated with the configuration at ``path``.

    When ``path`` is not given the ``PYINVOICE_CONFIG`` environment variable
    is used; without either the defaults are returned.
    """
    settings = dict(DEFAULT_SETTINGS)
    settings["layout"] = dict(DEFAULT_SETTINGS["layout"])
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return settings
    config = load_config(path)
    for key, value in config.items():
        if key == "layout":
            settings["layout"].update(value or {})
        else:
            settings[key] = value
    settings["workers"] = int(settings["workers"])
    return settings
