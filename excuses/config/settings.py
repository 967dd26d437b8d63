"""
Central configuration for the excuses project.

Values are layered, lowest to highest precedence:
1. Built-in defaults (the dicts below)
2. A YAML config file (``excuses-server.yml`` / ``excuses-client.yml``),
   searched in the current directory, then the home directory
3. ``EXCUSES_*`` environment variables
4. Command-line flags that were explicitly passed

Example:
    ```python
    cfg, used = load_config("excuses-server", SERVER_CONFIG, SERVER_ENV,
                            overrides={"port": 8080})
    print(cfg["base_url"], used)
    ```
"""
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULT_BASE_URL = "https://cyber.excusesecu.fr/"

# Server configuration
SERVER_CONFIG = {
    "port": 1234,
    "debug": False,
    "base_url": DEFAULT_BASE_URL,
    "log_dir": "logs",
    "log_file": "server.log",
    "metrics_interval": 300,
    "fetch_timeout": None,
}

# Client configuration
CLIENT_CONFIG = {
    "server": "localhost:1234",
    "log_dir": "logs",
    "log_file": "client.log",
}

# Environment variable names per config key
SERVER_ENV = {
    "port": "EXCUSES_PORT",
    "debug": "EXCUSES_DEBUG",
    "base_url": "EXCUSES_BASE_URL",
    "metrics_interval": "EXCUSES_METRICS_INTERVAL",
}
CLIENT_ENV = {
    "server": "EXCUSES_SERVER",
}

# YAML keys that map onto a differently-named config key
KEY_ALIASES = {
    "baseURL": "base_url",
    "baseurl": "base_url",
    "metricsInterval": "metrics_interval",
}

# Page references for the jump actions
NAVIGATION_PATHS = {
    "first": "/?0",
    "last": "/?last",
    "random": "/",
}

# Markup contract of the content source
QUOTE_SELECTOR = ".quote"
LINKS_SELECTOR = ".links"
LINK_LABELS = {
    "next": "Excuse suivante",
    "previous": "Excuse précédente",
}

TRUE_STRINGS = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when configuration cannot be located or parsed."""


def config_search_paths() -> list[Path]:
    """Directories searched for a config file: cwd first, then home."""
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError(f"Could not determine home directory: {e}") from e
    return [Path.cwd(), home]


def find_config_file(name: str, search_paths: Optional[list[Path]] = None) -> Optional[Path]:
    for directory in search_paths if search_paths is not None else config_search_paths():
        for ext in (".yml", ".yaml"):
            candidate = directory / f"{name}{ext}"
            if candidate.is_file():
                return candidate
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a mapping at top level")
    return {KEY_ALIASES.get(k, k): v for k, v in data.items()}


def _coerce(value: Any, default: Any) -> Any:
    """Convert a raw env/YAML value to the type of the default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUE_STRINGS
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Expected an integer, got {value!r}") from e
    if default is None or isinstance(value, str):
        return value
    return str(value)


def load_config(
    name: str,
    defaults: Dict[str, Any],
    env: Dict[str, str],
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_paths: Optional[list[Path]] = None,
) -> Tuple[Dict[str, Any], Optional[Path]]:
    """
    Build the effective configuration.

    Args:
        name: Config file base name (without extension)
        defaults: Built-in defaults; only these keys are honoured
        env: Mapping of config key to environment variable name
        config_file: Explicit config file path (skips the search)
        overrides: Flag values; ``None`` entries mean "not passed"
        search_paths: Directories to search instead of cwd/home

    Returns:
        Tuple of (config dict, path of the file that was used or None)

    Raises:
        ConfigError: If an explicit file is missing, or any file is malformed
    """
    cfg = dict(defaults)

    if config_file:
        used: Optional[Path] = Path(config_file)
        if not used.is_file():
            raise ConfigError(f"Config file not found: {config_file}")
    else:
        used = find_config_file(name, search_paths)

    if used is not None:
        for key, value in read_config_file(used).items():
            if key in defaults:
                cfg[key] = _coerce(value, defaults[key])

    for key, var in env.items():
        raw = os.getenv(var)
        if raw is not None and key in defaults:
            cfg[key] = _coerce(raw, defaults[key])

    for key, value in (overrides or {}).items():
        if value is not None:
            cfg[key] = value

    if "base_url" in cfg and not cfg["base_url"]:
        cfg["base_url"] = DEFAULT_BASE_URL

    return cfg, used
