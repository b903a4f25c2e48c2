"""
Configuration — loads settings from .rulefix.yaml, environment variables,
and built-in defaults (in that priority order: env > YAML > defaults).
"""

import logging
import os
from datetime import datetime

import yaml


_DEFAULTS = {
    "max_fix_passes": 10,
    "validate_syntax": True,
    "log_level": "WARNING",
    "log_dir": "",
}

# Config file search locations
_CONFIG_FILENAMES = [".rulefix.yaml", ".rulefix.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Fixer configuration.

    Settings are resolved in priority order:
    1. Environment variables (``RULEFIX_*``)
    2. .rulefix.yaml config file
    3. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() in ("1", "true", "yes")
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.MAX_FIX_PASSES = _get("RULEFIX_MAX_FIX_PASSES", "max_fix_passes",
                                   _DEFAULTS["max_fix_passes"], cast=int)
        self.VALIDATE_SYNTAX = _get_bool("RULEFIX_VALIDATE_SYNTAX", "validate_syntax",
                                         _DEFAULTS["validate_syntax"])
        self.LOG_LEVEL = _get("RULEFIX_LOG_LEVEL", "log_level",
                              _DEFAULTS["log_level"]).upper()
        self.LOG_DIR = _get("RULEFIX_LOG_DIR", "log_dir", _DEFAULTS["log_dir"])

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)

    def configure_logging(self) -> logging.Logger:
        return setup_logger(self.LOG_LEVEL, self.LOG_DIR or None)


def setup_logger(level: str = "WARNING", log_dir: str | None = None) -> logging.Logger:
    """Configure the ``rulefix`` logger; adds a file handler when *log_dir* is set."""
    logger = logging.getLogger("rulefix")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"rulefix_{timestamp}.log")
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
        ))
        logger.addHandler(fh)

    return logger
