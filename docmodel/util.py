"""Utility functions.

Handles naming conventions and filesystem tasks, e.g. directory creation.
"""

from pathlib import Path
from functools import lru_cache
import inflection
from docmodel import (
    logger,
)

LOGGER = logger.get_logger(__name__)


def mkdirp(path: Path) -> bool:
    """Creates a directory and all its parents.

    Works just like ``mkdir -p``.

    Args:
        path: Path to create.
    """

    if not isinstance(path, Path):
        path = Path(path)

    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as err:
        LOGGER.debug("Failed to create directory %s: %s", path.as_posix(),
                     str(err))
        return False
    except FileExistsError as err:
        LOGGER.debug("File %s exists and is not a directory: %s",
                     path.as_posix(), str(err))
        return False

    return True


def snake_case(name: str) -> str:
    """Convert a CamelCase identifier to snake_case.

    >>> snake_case('UserProfile')
    'user_profile'
    """
    return inflection.underscore(name)


@lru_cache()
def pluralize(word: str) -> str:
    """Return the plural form of an english noun, e.g. a table name.

    >>> pluralize('blog_category')
    'blog_categories'
    """
    return inflection.pluralize(word)
