from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union
import logging
import os

import yaml

from .data_and_types import SerializerOptions, HclConfigError

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("indent", "quote_style", "quote_keys")

DEFAULT_CONFIG = {
    'indent': 2,
    'quote_style': 'double',
    'quote_keys': False,
}


def config_dir() -> str:
    return os.path.join(os.path.expanduser('~'), '.hclgen')

def default_config_path() -> str:
    return os.path.join(config_dir(), 'config.yaml')

def init_config_dir(force: bool = False) -> str:
    """Create ~/.hclgen/config.yaml with default options if it doesn't exist"""
    os.makedirs(config_dir(), exist_ok=True)

    config_file = default_config_path()
    if force or not os.path.exists(config_file):
        with open(config_file, 'w') as f:
            yaml.dump(DEFAULT_CONFIG, f, sort_keys=False)
        logger.info("Wrote default config to %s", config_file)
    return config_file


def options_from_mapping(data: Any, **overrides) -> SerializerOptions:
    """
    Build SerializerOptions from a config mapping. Keyword overrides that
    are not None win over the mapping.
    """
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise HclConfigError(f"Config must be a mapping, got {type(data).__name__}")

    unknown = set(data) - set(CONFIG_KEYS)
    if unknown:
        raise HclConfigError(f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}")

    values = {key: data[key] for key in CONFIG_KEYS if key in data}
    values.update({key: value for key, value in overrides.items() if value is not None})
    return SerializerOptions(**values)

def load_options(path: Optional[Union[str, Path]] = None, **overrides) -> SerializerOptions:
    """
    Load serializer options from a YAML config file.

    Without `path` the user config (~/.hclgen/config.yaml) is used when it
    exists; otherwise the defaults apply. An explicit path must exist.
    """
    if path is None:
        path = default_config_path()
        if not os.path.exists(path):
            logger.debug("No config at %s, using defaults", path)
            return options_from_mapping({}, **overrides)

    logger.debug("Loading config from %s", path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise HclConfigError(f"Invalid YAML in {path}: {e}") from e
    return options_from_mapping(data, **overrides)
