"""
Configuration file loading.

The configuration lives at conf/conf.yml next to the running program unless
an explicit path is given. Any failure to read, parse or validate it is
surfaced as ConfigLoadError.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .errors import ConfigLoadError
from .models import ShuttleConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = "conf"
CONFIG_FILENAME = "conf.yml"


def default_config_path(program: Optional[str] = None) -> Path:
    """
    Resolve conf/conf.yml relative to the directory of the running program.

    Args:
        program: Program path to resolve against (default: sys.argv[0])
    """
    program_path = Path(program or sys.argv[0]).resolve()
    return program_path.parent / CONFIG_DIRNAME / CONFIG_FILENAME


def parse_config(text: str, source: str = "<string>") -> ShuttleConfig:
    """
    Parse and validate a YAML configuration document.

    Raises:
        ConfigLoadError: If the YAML is malformed or fails validation
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigLoadError(source, f"invalid YAML: {e}", e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            source, f"expected a mapping at top level, got {type(data).__name__}"
        )

    try:
        return ShuttleConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(source, f"invalid configuration: {e}", e) from e


def load_config(path: Optional[Union[str, Path]] = None) -> ShuttleConfig:
    """
    Read the configuration file from disk.

    Args:
        path: Explicit configuration path (default: default_config_path())

    Raises:
        ConfigLoadError: If the file is missing, unreadable or invalid
    """
    config_path = Path(path) if path is not None else default_config_path()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(str(config_path), f"cannot read file: {e}", e) from e

    config = parse_config(text, source=str(config_path))
    logger.debug(f"Loaded configuration from {config_path}: {config.model_dump()}")
    return config
