import os
import sys
try:
    from docmodel.version import __version__
except ModuleNotFoundError:
    __version__ = "0.0.0"

DOCMODEL_VERSION = __version__
"""str: docmodel version"""

EXIT_FAILURE = -100
"""int: Process exit code indicating unrecoverable failure."""

EXIT_SUCCESS = 0
"""int: Process exit code indicating successful operation."""

MIN_PYTHON_VERSION = (3, 8)
"""tuple: Required Python version for docmodel.

A tuple of at least (MAJOR, MINOR) directly comparible to :any:`sys.version_info`
"""

if sys.version_info[0:2] < MIN_PYTHON_VERSION:
    VERSION = '.'.join([str(x) for x in sys.version_info[0:3]])
    EXPECTED = '.'.join([str(x) for x in MIN_PYTHON_VERSION])
    sys.stderr.write(f"""{sys.executable}
{sys.version}
Your Python version is {VERSION} but Python {EXPECTED} is required.
Please install the required Python version or raise an issue on Github for support.
""")
    sys.exit(EXIT_FAILURE)

DOCMODEL_TEST = bool(os.environ.get('__DOCMODEL_TEST__', False))
"""bool: True if the package is run in a test environment"""

USER_PREFIX = os.path.realpath(
    os.path.abspath(
        os.environ.get(
            '__DOCMODEL_USER_PREFIX__',
            os.path.join(os.path.expanduser('~'), '.local', 'docmodel'))))
"""str: User-level docmodel files."""

DEFAULT_STORAGE_PATH = 'storage/db'
"""str: Project storage prefix, relative to the working directory"""

DEFAULT_STORAGE_FILENAME = 'db.json'
"""str: Name of the JSON file holding every table of a storage level"""
