"""
Load and propagate the contents of configuration files in YAML format
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from docmodel import (
    DOCMODEL_TEST,
    DEFAULT_STORAGE_PATH,
    DEFAULT_STORAGE_FILENAME,
)
from docmodel.error import ConfigurationError


def update_configuration(configuration):
    global CONFIGURATION
    CONFIGURATION = configuration


def flatten(data):
    """
    Transform nested dictionaries into key value pairs by prefixing the
    parent's key, under the assumption that all keys are str.
    >>> flatten({'storage': {'path': 'db', 'indent': 2} })

    => dict(storage_path='db', storage_indent=2)
    """
    separator = '_'

    def _pre(prefix, string):
        return str(separator.join(filter(None, [prefix, string])))

    def _intermediate(prefix, data: dict):
        flat = {}

        if not data:
            return flat

        for key, value in data.items():
            if isinstance(value, dict):
                for ckey, cval in _intermediate(str(key), value).items():
                    flat.update({_pre(prefix, ckey): cval})
            else:
                flat.update({_pre(prefix, key): value})

        return flat

    return _intermediate('', data)


@dataclass(frozen=True)
class ConfigurationField:
    key: str
    expected_type: type
    default: callable
    description: str = ""


@dataclass(frozen=True)
class ConfigurationGroup:
    key: str
    fields: frozenset  # [ConfigurationField|ConfigurationGroup]
    description: str = ""

    def __init__(self, key, fields, description=""):
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "fields", frozenset(fields))
        object.__setattr__(self, "description", description)

    def flatten(self):
        for field in self.fields:
            if isinstance(field, ConfigurationGroup):
                for child in field.flatten():
                    yield ConfigurationField(
                        "_".join(filter(None, [self.key, child.key])),
                        child.expected_type, child.default, child.description)
            elif isinstance(field, ConfigurationField):
                yield ConfigurationField(
                    "_".join(filter(None, [self.key, field.key])),
                    field.expected_type, field.default, field.description)


class Configuration:
    """
    Class of objects abstracting configuration values. Can be created using a
    dict or class methods to complete it with defined configuration fields,
    then merged with other Configuration objects using the bitwise or operation.
    """

    @classmethod
    def create_from_string(cls, string, complete=False):
        """
        Create a Configuration object from a YAML string, with type checking.
        Will complete with default values for missing fields if complete is set
        to True.
        """

        config = cls()
        try:
            data = flatten(yaml.safe_load(string)) or {}
        except yaml.YAMLError as err:
            raise ConfigurationError(f"Malformed configuration: {err}") from err

        for parameter in ALLOWED_CONFIG.flatten():
            field = {}
            if parameter.key in data:
                value = data[parameter.key]

                # bool is a subclass of int, do not accept it for int fields
                if isinstance(value, parameter.expected_type) and not (
                        isinstance(value, bool)
                        and parameter.expected_type is not bool):
                    field = {parameter.key: value}
                else:
                    raise ConfigurationError(
                        f"Invalid value for parameter '{parameter.key}': "
                        f"{value} (expected {str(parameter.expected_type)})")

            elif complete:
                field = {parameter.key: parameter.default()}

            config._fields.update(field)

        return config

    @classmethod
    def create_from_file(cls, config_file, complete=False):
        yaml_contents = ''
        if config_file and Path(config_file).exists():
            with open(config_file, encoding='utf-8') as file:
                yaml_contents = file.read()

        return Configuration.create_from_string(yaml_contents,
                                                complete=complete)

    @classmethod
    def create_from_environment(cls):
        """
        The STORAGE_PATH environment variable overrides the storage prefix
        """
        if storage_path := os.environ.get('STORAGE_PATH'):
            return cls({'storage_path': storage_path})
        return cls()

    @classmethod
    def default(cls):
        return cls.create_from_string('', complete=True)

    def __init__(self, defaults=None):
        if isinstance(defaults, dict):
            self._fields = defaults
        else:
            self._fields = {}

    def __getattr__(self, identifier):
        if identifier.startswith('__') or identifier == '_fields':
            raise AttributeError(identifier)
        if identifier in self._fields:
            return self._fields[identifier]
        raise AttributeError(
            f"'{self.__class__.__name__}' object has no attribute '{identifier}'"
        )

    def __eq__(self, rhs):
        if not isinstance(rhs, Configuration):
            return NotImplemented
        return self._fields == rhs._fields

    def __or__(self, rhs):
        """
        Merge configuration objects
        The right hand side has priority, and its keys will take precedence
        """
        if not isinstance(rhs, Configuration):
            raise TypeError(f"unsupported operand type(s) for |: "
                            f"'{type(self)}' and '{type(rhs)}'")

        return Configuration({**self._fields, **rhs._fields})


USER_CONFIG_PATH = Path.home() / ".config/docmodel.yaml"
PROJECT_CONFIG_PATH = Path.cwd() / "docmodel.yaml"

ALLOWED_CONFIG = ConfigurationGroup(
    "", {
        ConfigurationGroup(
            "storage", {
                ConfigurationField(
                    "level",
                    str,
                    lambda: "project",
                    "Storage level used by models that do not declare one",
                ),
                ConfigurationField(
                    "path",
                    str,
                    lambda: DEFAULT_STORAGE_PATH,
                    "Project storage directory, relative to the working directory",
                ),
                ConfigurationField(
                    "filename",
                    str,
                    lambda: DEFAULT_STORAGE_FILENAME,
                    "Name of the JSON file holding the tables",
                ),
                ConfigurationField(
                    "indent",
                    int,
                    lambda: 2,
                    "Indentation of the JSON file",
                ),
            }, "Document store configuration"),
    })

CONFIGURATION = Configuration.default()
if not DOCMODEL_TEST:
    CONFIGURATION = CONFIGURATION \
        | Configuration.create_from_file(USER_CONFIG_PATH) \
        | Configuration.create_from_file(PROJECT_CONFIG_PATH)
CONFIGURATION = CONFIGURATION | Configuration.create_from_environment()
