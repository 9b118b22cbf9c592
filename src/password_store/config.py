"""
Configuration for the password store client.

Holds the external program name and the fixed subcommands and flags the
transports pass to it.  Persists to JSON at
~/.password_store_client/config.json (overridable via the
PASSWORD_STORE_CLIENT_CONFIG env var).  PASSWORD_STORE_PROGRAM overrides
the program name so tests and scripts can point at a stub executable.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = os.path.expanduser("~/.password_store_client")
DEFAULT_CONFIG_PATH = os.path.join(DEFAULT_CONFIG_DIR, "config.json")

DEFAULT_PROGRAM = "gopass"
DEFAULT_LISTEN_ARGS = ["jsonapi", "listen"]

# Backends for get/insert
BACKEND_JSONAPI = "jsonapi"
BACKEND_CLI = "cli"
BACKENDS = (BACKEND_JSONAPI, BACKEND_CLI)


@dataclass
class StoreConfig:
    program: str = DEFAULT_PROGRAM
    listen_args: List[str] = field(default_factory=lambda: list(DEFAULT_LISTEN_ARGS))
    insert_subcommand: str = "insert"
    multiline_flag: str = "-m"
    remove_subcommand: str = "rm"
    force_flag: str = "-f"
    backend: str = BACKEND_JSONAPI

    def to_dict(self) -> dict:
        return {
            "program": self.program,
            "listen_args": list(self.listen_args),
            "insert_subcommand": self.insert_subcommand,
            "multiline_flag": self.multiline_flag,
            "remove_subcommand": self.remove_subcommand,
            "force_flag": self.force_flag,
            "backend": self.backend,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StoreConfig":
        """Build a config from parsed JSON. Raises ValueError on wrongly typed fields."""
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")
        listen_args = data.get("listen_args", DEFAULT_LISTEN_ARGS)
        if not isinstance(listen_args, list) or not all(isinstance(a, str) for a in listen_args):
            raise ValueError("'listen_args' must be a list of strings")
        return cls(
            program=_string_field(data, "program", DEFAULT_PROGRAM),
            listen_args=list(listen_args),
            insert_subcommand=_string_field(data, "insert_subcommand", "insert"),
            multiline_flag=_string_field(data, "multiline_flag", "-m"),
            remove_subcommand=_string_field(data, "remove_subcommand", "rm"),
            force_flag=_string_field(data, "force_flag", "-f"),
            backend=_string_field(data, "backend", BACKEND_JSONAPI),
        )


def _string_field(data: dict, key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def get_config_path() -> str:
    """Resolve config file path from env var or default."""
    return os.environ.get("PASSWORD_STORE_CLIENT_CONFIG", DEFAULT_CONFIG_PATH)


def _apply_env_overrides(config: StoreConfig) -> StoreConfig:
    program = os.environ.get("PASSWORD_STORE_PROGRAM")
    if program:
        config.program = program
    return config


def load_config(path: Optional[str] = None) -> StoreConfig:
    """
    Load config from JSON file.

    Returns a default StoreConfig if the file doesn't exist or is invalid.
    """
    path = path or get_config_path()
    if not os.path.exists(path):
        logger.debug("No config file at %s, using defaults", path)
        return _apply_env_overrides(StoreConfig())
    try:
        with open(path, "r") as f:
            data = json.load(f)
        logger.info("Loaded config from %s", path)
        return _apply_env_overrides(StoreConfig.from_dict(data))
    except (OSError, ValueError) as e:
        logger.warning("Failed to load config from %s: %s, using defaults", path, e)
        return _apply_env_overrides(StoreConfig())


def save_config(config: StoreConfig, path: Optional[str] = None) -> None:
    """Persist config to JSON file, creating parent directories as needed."""
    path = path or get_config_path()
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info("Config saved to %s", path)
