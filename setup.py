#!/usr/bin/env python3

import sys
from setuptools import setup, find_packages
from pathlib import Path
import importlib.util

# Load metadata from the package's version module
spec = importlib.util.spec_from_file_location('version',
                                              Path('docmodel', 'version.py'))
metadata = importlib.util.module_from_spec(spec)
spec.loader.exec_module(metadata)

NAME = "docmodel"

VERSION = metadata.__version__

DEPENDENCIES = []
DEPENDENCY_FILE_PATH = "./requirements/core.txt"

try:
    with open(DEPENDENCY_FILE_PATH, 'r') as dependency_file:
        DEPENDENCIES = [
            line.strip() for line in dependency_file.readlines()
            if line.strip() and not line.startswith('#')
        ]
except Exception as err:
    print(
        f"Failed to lookup dependencies from {DEPENDENCY_FILE_PATH}: {str(err)}",
        file=sys.stderr)

EXTRAS = {'test': ['pytest>=7.0']}

# Package short description
DESCRIPTION = "ActiveRecord-style models over a JSON document store"

# Package long description
LONG_DESCRIPTION = \
"""
Declare record types as Model subclasses, each backed by a table of a JSON
document store. Models offer attribute access with fillable and hidden
policies, dirty tracking, belongs-to / has-one / has-many relations, equality
queries and write-through persistence.
"""

# Package keywords
KEYWORDS = ["ORM", "ODM", "JSON", "ActiveRecord"]

# PyPI classifiers
CLASSIFIERS = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: MIT License',
    'Natural Language :: English',
    'Programming Language :: Python :: 3',
    'Topic :: Database',
]

install_options = dict(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    license="MIT",
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,
    python_requires='>=3.8',
    install_requires=DEPENDENCIES,
    extras_require=EXTRAS,
    packages=find_packages(exclude=['tests', 'tests.*']),
)

setup(**install_options)
