"""
Configuration — folder rules and runtime settings read once at startup.

Public API:
    FolderConfig — One folder rule as written in conf.yml
    RuntimeSettings — Stability/polling timing knobs
    ShuttleConfig — Root configuration document
    ConfigLoadError — Missing or malformed configuration (fatal)
    load_config — Read and validate a configuration file
    parse_config — Validate a YAML document held in memory
    default_config_path — conf/conf.yml next to the running program
"""

from .errors import ConfigLoadError
from .models import FolderConfig, RuntimeSettings, ShuttleConfig
from .loader import default_config_path, load_config, parse_config

__all__ = [
    "ConfigLoadError",
    "FolderConfig",
    "RuntimeSettings",
    "ShuttleConfig",
    "default_config_path",
    "load_config",
    "parse_config",
]
