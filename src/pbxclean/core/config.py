#!/usr/bin/env python3
"""
PBXCLEAN CONFIG
---------------
Optional per-repository settings read from a YAML file (.pbxclean.yaml in
the working directory unless a path is given):

    resolve_version: highest      # or: lowest
    extensionless_files:          # extra names sorted as files, not groups
      - Cartfile
      - Brewfile
    create_backup: false

Author: PbxClean Team
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from ruamel.yaml import YAML, YAMLError

from pbxclean.core.errors import ConfigError
from pbxclean.core.models import ResolvePolicy
from pbxclean.normalizing.comparators import DEFAULT_EXTENSIONLESS_FILES, normalize_names

logger = logging.getLogger("pbxclean.config")

DEFAULT_CONFIG_NAME = ".pbxclean.yaml"


@dataclass
class PbxCleanConfig:
    resolve_version: ResolvePolicy = ResolvePolicy.HIGHEST
    extensionless_files: FrozenSet[str] = field(default_factory=lambda: DEFAULT_EXTENSIONLESS_FILES)
    create_backup: bool = False
    source: Optional[str] = None    # File the values came from, if any


def _from_mapping(data: Dict[str, Any], source: str) -> PbxCleanConfig:
    config = PbxCleanConfig(source=source)
    unknown = set(data) - {"resolve_version", "extensionless_files", "create_backup"}
    if unknown:
        raise ConfigError(f"{source}: unknown setting(s): {', '.join(sorted(unknown))}")

    if "resolve_version" in data:
        try:
            config.resolve_version = ResolvePolicy.parse(data["resolve_version"])
        except ValueError as e:
            raise ConfigError(f"{source}: {e}")

    if "extensionless_files" in data:
        names = data["extensionless_files"]
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigError(f"{source}: 'extensionless_files' must be a list of names")
        config.extensionless_files = DEFAULT_EXTENSIONLESS_FILES | normalize_names(names)

    if "create_backup" in data:
        if not isinstance(data["create_backup"], bool):
            raise ConfigError(f"{source}: 'create_backup' must be true or false")
        config.create_backup = data["create_backup"]

    return config


def load_config(path: Optional[Union[str, Path]] = None) -> PbxCleanConfig:
    """
    Loads settings from path, or from ./.pbxclean.yaml when path is None.
    A missing default file means defaults; a missing explicit file is an error.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else Path.cwd() / DEFAULT_CONFIG_NAME

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return PbxCleanConfig()

    try:
        data = YAML(typ='safe').load(config_path.read_text(encoding='utf-8'))
    except (OSError, YAMLError) as e:
        raise ConfigError(f"Unable to read config {config_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    logger.info(f"Loaded settings from {config_path}")
    return _from_mapping(data, str(config_path))
