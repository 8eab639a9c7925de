"""
Definition of storage levels
"""

from pathlib import Path
from docmodel import USER_PREFIX, config
from docmodel.error import ConfigurationError
from docmodel.cf.storage.local_file import LocalFileStorage

PROJECT_STORAGE = LocalFileStorage(
    'project',
    Path.cwd() / config.CONFIGURATION.storage_path,
    config.CONFIGURATION.storage_filename,
    indent=config.CONFIGURATION.storage_indent)
"""Project-level data storage, under the working directory."""

USER_STORAGE = LocalFileStorage('user',
                                USER_PREFIX,
                                config.CONFIGURATION.storage_filename,
                                indent=config.CONFIGURATION.storage_indent)
"""User-level data storage."""

ORDERED_LEVELS = (PROJECT_STORAGE, USER_STORAGE)
"""All storage levels in their preferred order."""

STORAGE_LEVELS = {level.name: level for level in ORDERED_LEVELS}
"""All storage levels indexed by their names."""


def default_storage():
    """
    Return the storage level selected by the `storage_level` configuration field
    """
    level = config.CONFIGURATION.storage_level
    try:
        return STORAGE_LEVELS[level]
    except KeyError as err:
        raise ConfigurationError(
            f"Invalid value for parameter 'storage_level': {level}",
            f"Available levels: {', '.join(STORAGE_LEVELS)}") from err
