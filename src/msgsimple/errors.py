"""msgsimple exception hierarchy.

Unresolved message keys are never errors: lookup echoes the key. Exceptions
are reserved for broken input (None arguments, malformed templates, bad
source files).

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "IllegalFormatConversionError",
    "IllegalFormatError",
    "IllegalFormatFlagsError",
    "IllegalFormatPrecisionError",
    "InvalidArgumentError",
    "MessageBundleError",
    "MissingFormatArgumentError",
    "MissingFormatWidthError",
    "SourceFormatError",
    "UnknownFormatConversionError",
]


class MessageBundleError(Exception):
    """Base exception for all msgsimple errors."""


class InvalidArgumentError(MessageBundleError, ValueError):
    """A required argument was None or otherwise unusable.

    Raised by lookups given a None key or locale, and by builders and sources
    given None providers, sources, keys or values.
    """


class SourceFormatError(MessageBundleError, ValueError):
    """A message source file has content that cannot become a message table.

    Attributes:
        source_path: Path of the offending file, if known
    """

    def __init__(self, message: str, *, source_path: str | None = None) -> None:
        """Initialize SourceFormatError.

        Args:
            message: Error message
            source_path: Path of the offending file
        """
        super().__init__(message)
        self.source_path = source_path


class IllegalFormatError(MessageBundleError, ValueError):
    """A printf template or its arguments cannot be formatted.

    Every subclass except MissingFormatArgumentError propagates out of
    MessageBundle.format_message() unchanged.

    Attributes:
        specifier: The format specifier text involved (e.g., '%-5d'), or ''
    """

    def __init__(self, message: str, *, specifier: str = "") -> None:
        """Initialize IllegalFormatError.

        Args:
            message: Error message
            specifier: Format specifier text the error refers to
        """
        super().__init__(message)
        self.specifier = specifier


class MissingFormatArgumentError(IllegalFormatError):
    """A format specifier references an argument that was not supplied.

    MessageBundle.format_message() recovers from this one by returning the
    unformatted template.
    """


class UnknownFormatConversionError(IllegalFormatError):
    """Unknown conversion character, or a '%' with nothing after it."""


class IllegalFormatConversionError(IllegalFormatError):
    """Conversion cannot be applied to the supplied argument type.

    Example: '%d' with a str argument.
    """


class IllegalFormatFlagsError(IllegalFormatError):
    """Duplicate flags, or flags that do not apply to the conversion."""


class IllegalFormatPrecisionError(IllegalFormatError):
    """Precision given for a conversion that does not accept one."""


class MissingFormatWidthError(IllegalFormatError):
    """The '-' or '0' flag was given without a width."""
