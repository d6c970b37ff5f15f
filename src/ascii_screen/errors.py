"""
Exceptions raised by the ascii_screen compositor.

Every error derives from AsciiScreenError, and also from the builtin
exception that best describes it, so callers can catch either.
"""


class AsciiScreenError(Exception):
    """Base class for all compositor errors."""


class InvalidDimensions(AsciiScreenError, ValueError):
    """A screen or window was constructed with a negative width or height."""


class InvalidFillCharacter(AsciiScreenError, ValueError):
    """A fill character is not exactly one character long."""


class AlreadyAttached(AsciiScreenError, RuntimeError):
    """The window is already attached to a screen."""


class NotAttached(AsciiScreenError, RuntimeError):
    """The window is not attached to the screen it is being detached from."""


class OutOfRange(AsciiScreenError, IndexError):
    """A content line index is negative or past the last stored line."""


class UnsupportedPlacement(AsciiScreenError, ValueError):
    """A window with a negative origin was found while rendering."""


class CompositorInvariantViolation(AsciiScreenError, AssertionError):
    """Internal state is inconsistent. Always a bug, never caller error."""


class ContentParseError(AsciiScreenError, ValueError):
    """Text content could not be split into lines."""
