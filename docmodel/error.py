"""
Errors raised by docmodel.

Policy violations of the model layer (writing a non-fillable attribute,
asking for an unknown relation, missing lookups) are not errors and never
raise; only broken declarations and storage failures do.
"""

import traceback
from docmodel import EXIT_FAILURE
from docmodel import logger

LOGGER = logger.get_logger(__name__)


class Error(Exception):
    """Base class for all errors in docmodel.

    Attributes:
        value: Some value attached to the error, typically a string but could be anything with a __str__ method.
        hints (list): String hints for the user to help resolve the error.
        show_backtrace (bool): Set to True to include a backtrace in the error message.
        message_fmt (str): Format string for the error message.
    """
    show_backtrace = False

    message_fmt = ("An unexpected %(typename)s exception was raised:\n"
                   "\n"
                   "%(value)s\n"
                   "\n"
                   "%(backtrace)s\n"
                   "This is a bug in docmodel.\n"
                   "Please raise an issue on Github with the contents of '%(logfile)s'.")

    def __init__(self, value, *hints):
        """Initialize the Error instance.

        Args:
            value (str): Message describing the error.
            *hints: Hint messages to help the user resolve this error.
        """
        super().__init__(value)
        self.value = value
        self.hints = list(hints)
        self.message_fields = {
            'logfile': logger.LOG_FILE or 'the debug log',
            'typename': type(self).__name__,
            'backtrace': '',
        }

    @property
    def message(self):
        fields = dict(self.message_fields, value=self.value)
        if not self.hints:
            hints_str = ''
        elif len(self.hints) == 1:
            hints_str = f"Hint: {self.hints[0]}\n"
        else:
            hints_str = 'Hints:\n  * %s\n' % ('\n  * '.join(self.hints))
        fields['hints'] = hints_str
        return self.message_fmt % fields

    def __str__(self):
        return str(self.value)

    def handle(self, etype, value, tb):
        if self.show_backtrace:
            self.message_fields['backtrace'] = ''.join(
                traceback.format_exception(etype, value, tb)) + '\n'
        self.message_fields['typename'] = etype.__name__
        LOGGER.critical(self.message)
        return EXIT_FAILURE


class InternalError(Error):
    """Indicates that an internal error has occurred, i.e. a bug.

    These are bad and really shouldn't happen.
    """
    show_backtrace = True


class ConfigurationError(Error):
    """Indicates that docmodel cannot succeed with the given configuration."""
    message_fmt = ("%(value)s\n"
                   "\n"
                   "%(hints)s\n"
                   "Cannot proceed with the given inputs.\n"
                   "Please check the configuration for errors or raise an issue on Github.")

    def __init__(self, value, *hints):
        if not hints:
            hints = ["Check the contents of docmodel.yaml"]
        super().__init__(value, *hints)


class ModelError(InternalError):
    """Indicates an error in model data or the model declaration itself."""

    def __init__(self, model, value):
        """Initialize the error instance.

        Args:
            model (type): Model class.
            value (str): A message describing the error.
        """
        name = getattr(model, 'name', None) or getattr(model, '__name__', str(model))
        super().__init__(f"{name}: {value}")
        self.model = model


class StorageError(Error):
    """Indicates a failure to read or write a document store."""
    message_fmt = ("%(value)s\n"
                   "\n"
                   "%(hints)s\n"
                   "Please check the storage location and its contents.")
