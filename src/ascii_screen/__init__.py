"""
ASCII Screen Library

A small character-grid compositor. Windows of text are attached to a Screen,
which overlays them back to front onto a fixed-size grid and writes the
result to standard output or a blessed Terminal.
"""

import logging

from .ascii_screen import (
    CLEAR_LINES,
    DEFAULT_SCREEN_CHARACTER,
    DEFAULT_SCREEN_HEIGHT,
    DEFAULT_SCREEN_WIDTH,
    DEFAULT_WINDOW_CHARACTER,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    Coord,
    Screen,
    TerminalOutput,
    Window,
    print_frame,
)
from .errors import (
    AlreadyAttached,
    AsciiScreenError,
    CompositorInvariantViolation,
    ContentParseError,
    InvalidDimensions,
    InvalidFillCharacter,
    NotAttached,
    OutOfRange,
    UnsupportedPlacement,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Coord',
    'Window',
    'Screen',
    'TerminalOutput',
    'print_frame',
    'CLEAR_LINES',
    'DEFAULT_SCREEN_CHARACTER',
    'DEFAULT_SCREEN_HEIGHT',
    'DEFAULT_SCREEN_WIDTH',
    'DEFAULT_WINDOW_CHARACTER',
    'DEFAULT_WINDOW_HEIGHT',
    'DEFAULT_WINDOW_WIDTH',
    'AsciiScreenError',
    'AlreadyAttached',
    'CompositorInvariantViolation',
    'ContentParseError',
    'InvalidDimensions',
    'InvalidFillCharacter',
    'NotAttached',
    'OutOfRange',
    'UnsupportedPlacement',
]

__version__ = '0.1.0'
