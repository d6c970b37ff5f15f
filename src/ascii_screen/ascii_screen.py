"""
Core compositor classes for character-grid screens.

This module provides the Screen and Window classes. A Window holds lines of
text and a placement. A Screen keeps an ordered stack of attached windows and
overlays them, bottom to top, onto a grid of fill characters, then serializes
the grid as text for an output collaborator such as a blessed Terminal.
"""

import logging
import threading
import weakref
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple, Union

from blessed import Terminal

from .errors import (
    AlreadyAttached,
    CompositorInvariantViolation,
    ContentParseError,
    InvalidDimensions,
    InvalidFillCharacter,
    NotAttached,
    OutOfRange,
    UnsupportedPlacement,
)

logger = logging.getLogger(__name__)

DEFAULT_SCREEN_CHARACTER = ' '
DEFAULT_WINDOW_CHARACTER = ' '
DEFAULT_SCREEN_WIDTH = 30
DEFAULT_SCREEN_HEIGHT = 30
DEFAULT_WINDOW_WIDTH = 20
DEFAULT_WINDOW_HEIGHT = 20

# Number of line breaks emitted by Screen.clear()
CLEAR_LINES = 100


@dataclass(frozen=True)
class Coord:
    """Position of a window's top-left corner on a screen.

    (0, 0) is the top-left cell. Negative values can be stored but are
    rejected when the screen is rendered.
    """
    x: int = 0
    y: int = 0

    def __iter__(self):
        yield self.x
        yield self.y

    @classmethod
    def of(cls, value: Union['Coord', Tuple[int, int]]) -> 'Coord':
        """Build a Coord from a Coord or an (x, y) pair."""
        if isinstance(value, Coord):
            return value
        x, y = value
        return cls(int(x), int(y))


def _check_size(owner, width, height):
    if width < 0 or height < 0:
        raise InvalidDimensions(
            f"{owner}: width and height must be non-negative, got {width}x{height}"
        )


def _check_fill(owner, fill):
    if not isinstance(fill, str) or len(fill) != 1 or fill == '\n':
        raise InvalidFillCharacter(
            f"{owner}: fill must be a single character other than a line break, got {fill!r}"
        )


def _split_lines(text: str) -> List[str]:
    """Split text into rows at '\\n'.

    Empty rows are kept. A final line break ends the last row rather than
    starting a new one.
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


def print_frame(text: str):
    """Default output collaborator: write text to standard output."""
    print(text, end='', flush=True)


class TerminalOutput:
    """Output collaborator that writes frames to a blessed Terminal's stream.

    Attributes:
        term: Blessed Terminal instance
    """

    def __init__(self, term: Optional[Terminal] = None):
        self.term = term or Terminal()

    def __call__(self, text: str):
        stream = self.term.stream
        stream.write(text)
        stream.flush()


class Window:
    """A rectangular block of text lines placed on a screen.

    The size is fixed at construction; build a new window to change it.
    Lines longer than the width, and lines past the height, are cut off when
    the window is drawn. Missing lines and short lines are padded with the
    window's fill character.

    Attachment is managed by Screen.attach() and Screen.detach(). Copies of
    a window never carry the attachment over: a copy starts detached.

    Attributes:
        origin: Coord of the top-left corner on the screen
        fill: Character used to pad short and missing lines
    """

    def __init__(self, origin=None, width: int = DEFAULT_WINDOW_WIDTH,
                 height: int = DEFAULT_WINDOW_HEIGHT, *,
                 fill: str = DEFAULT_WINDOW_CHARACTER):
        _check_size('Window', width, height)
        _check_fill('Window', fill)
        self._origin = Coord() if origin is None else Coord.of(origin)
        self._width = width
        self._height = height
        self.fill = fill
        self._lines = [fill * width for _ in range(height)]
        self._screen_ref = None

    @property
    def origin(self) -> Coord:
        """Top-left corner on the screen."""
        return self._origin

    @origin.setter
    def origin(self, value):
        self._origin = Coord.of(value)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def lines(self) -> List[str]:
        """Copy of the stored content lines, top to bottom."""
        return list(self._lines)

    @property
    def screen(self) -> Optional['Screen']:
        """The screen this window is attached to, or None."""
        if self._screen_ref is None:
            return None
        return self._screen_ref()

    def set_content(self, content: Union[str, Iterable[str]]):
        """Replace the window content.

        Args:
            content: Either a string, split into lines at '\\n', or an
                iterable of strings taken as the lines themselves.

        Raises:
            ContentParseError: The content is not text, or a line in an
                iterable contains a line break. The current content is kept.
        """
        if isinstance(content, str):
            lines = _split_lines(content)
        else:
            try:
                lines = list(content)
            except TypeError as exc:
                raise ContentParseError(
                    f"Window.set_content: expected text or lines, got {type(content).__name__}"
                ) from exc
            for line in lines:
                if not isinstance(line, str):
                    raise ContentParseError(
                        f"Window.set_content: line {line!r} is not a string"
                    )
                if '\n' in line:
                    raise ContentParseError(
                        f"Window.set_content: line {line!r} contains a line break"
                    )
        self._lines = lines

    def line(self, index: int) -> str:
        """Return stored line `index`.

        Raises:
            OutOfRange: index is negative or not below the stored line count.
        """
        if index < 0 or index >= len(self._lines):
            raise OutOfRange(
                f"Window.line: invalid line {index}, window has {len(self._lines)} lines"
            )
        return self._lines[index]

    def close(self):
        """Detach from the screen, if attached."""
        screen = self.screen
        if screen is not None:
            screen.detach(self)

    def copy(self) -> 'Window':
        """Return a detached copy with the same placement, size and content."""
        clone = Window(self._origin, self._width, self._height, fill=self.fill)
        clone._lines = list(self._lines)
        return clone

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # Only Screen.attach() and Screen.detach() call these.

    def _attach(self, screen: 'Screen'):
        if screen is None or self not in screen:
            raise CompositorInvariantViolation(
                "Window.attach: window not in the screen's collection"
            )
        self._screen_ref = weakref.ref(screen)

    def _detach(self):
        screen = self.screen
        if screen is None or self in screen:
            raise CompositorInvariantViolation(
                "Window.detach: no screen attached, or window still in the screen's collection"
            )
        self._screen_ref = None

    def __repr__(self):
        return (
            f"Window(origin=({self._origin.x}, {self._origin.y}), "
            f"width={self._width}, height={self._height}, "
            f"attached={self.screen is not None})"
        )


def _make_forget(screen_ref):
    # Holds the screen weakly; window references must not keep it alive.
    def forget(window_ref):
        screen = screen_ref()
        if screen is not None:
            screen._forget(window_ref)
    return forget


class Screen:
    """A fixed-size character grid that composes attached windows.

    Windows are drawn in attachment order; a window attached later is drawn
    on top. The screen only holds weak references to its windows, and a
    window that is garbage collected drops out of the stack.

    Attributes:
        fill: Character for cells no window covers
        output: Callable that receives each frame written by update()
    """

    def __init__(self, width: int = DEFAULT_SCREEN_WIDTH,
                 height: int = DEFAULT_SCREEN_HEIGHT, *,
                 fill: str = DEFAULT_SCREEN_CHARACTER,
                 output: Optional[Callable[[str], None]] = None):
        _check_size('Screen', width, height)
        _check_fill('Screen', fill)
        self._width = width
        self._height = height
        self.fill = fill
        self.output = output or print_frame
        # Higher index is drawn on top
        self._windows: List[weakref.ref] = []
        self._lock = threading.RLock()
        self._forget_callback = _make_forget(weakref.ref(self))

    @classmethod
    def for_terminal(cls, term: Optional[Terminal] = None, **kwargs) -> 'Screen':
        """Create a screen the size of a blessed Terminal that writes to it."""
        term = term or Terminal()
        kwargs.setdefault('output', TerminalOutput(term))
        return cls(term.width, term.height, **kwargs)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def windows(self) -> Tuple[Window, ...]:
        """Attached windows, bottom to top."""
        with self._lock:
            windows = (ref() for ref in self._windows)
            return tuple(window for window in windows if window is not None)

    def __len__(self):
        return len(self.windows)

    def __contains__(self, window):
        return self._find(window) is not None

    def _find(self, window) -> Optional[int]:
        """Return the stack index of `window`, or None."""
        if window is None:
            return None
        for index, ref in enumerate(self._windows):
            if ref() is window:
                return index
        return None

    def _forget(self, window_ref):
        with self._lock:
            if window_ref in self._windows:
                self._windows.remove(window_ref)
                logger.debug("Dropped collected window from %r", self)

    def attach(self, window: Window):
        """Put `window` on top of this screen's stack.

        Raises:
            AlreadyAttached: The window is attached to this or another screen.
        """
        with self._lock:
            if self._find(window) is not None:
                raise AlreadyAttached("Screen.attach: window already attached")
            if window.screen is not None:
                raise AlreadyAttached(
                    "Screen.attach: window already attached to another screen"
                )
            self._windows.append(weakref.ref(window, self._forget_callback))
            try:
                window._attach(self)
            except CompositorInvariantViolation:
                self._windows.pop()
                raise
        logger.debug("Attached %r to %r", window, self)

    def detach(self, window: Window):
        """Remove `window` from this screen's stack.

        Raises:
            NotAttached: The window is not attached to this screen.
        """
        with self._lock:
            index = self._find(window)
            if index is None:
                raise NotAttached("Screen.detach: window not attached")
            ref = self._windows[index]
            self._windows.remove(ref)
            try:
                window._detach()
            except CompositorInvariantViolation:
                self._windows.insert(min(index, len(self._windows)), ref)
                raise
        logger.debug("Detached %r from %r", window, self)

    def close(self):
        """Detach every attached window."""
        with self._lock:
            for window in self.windows:
                self.detach(window)

    def copy(self) -> 'Screen':
        """Return a screen with the same size and fill and no windows."""
        return Screen(self._width, self._height, fill=self.fill, output=self.output)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def clear(self) -> str:
        """Return CLEAR_LINES line breaks, to push old output off a terminal."""
        return '\n' * CLEAR_LINES

    def render(self) -> List[str]:
        """Compose all attached windows and return the grid rows.

        Raises:
            UnsupportedPlacement: An attached window has a negative origin.
        """
        lines = self._default_screen()
        for window in self.windows:
            lines = self._draw_window(lines, window)
        return lines

    def refresh(self) -> str:
        """Render the screen as text, each row followed by a line break."""
        return ''.join(line + '\n' for line in self.render())

    def update(self):
        """Write clear() followed by refresh() to the output collaborator."""
        frame = self.clear() + self.refresh()
        self.output(frame)

    def _default_screen(self) -> List[str]:
        return [self.fill * self._width for _ in range(self._height)]

    def _is_valid_screen(self, lines: List[str]) -> bool:
        """True if there are `height` rows, each exactly `width` long and free of line breaks."""
        if len(lines) != self._height:
            return False
        return all(len(line) == self._width and '\n' not in line for line in lines)

    def _draw_window(self, lines: List[str], window: Window) -> List[str]:
        """Overlay the visible part of `window` onto `lines`."""
        if not self._is_valid_screen(lines):
            raise CompositorInvariantViolation("Screen.draw_window: invalid screen")

        x, y = window.origin
        if x < 0 or y < 0:
            raise UnsupportedPlacement(
                f"Screen.draw_window: negative window coordinate ({x}, {y}) is not supported"
            )
        shown_width = min(self._width - x, window.width)
        shown_height = min(self._height - y, window.height)
        if shown_width <= 0 or shown_height <= 0:
            logger.debug("%r is outside %r, skipped", window, self)
            return lines

        content = window.lines
        for i in range(shown_height):
            text = content[i] if i < len(content) else ''
            text = text[:shown_width].ljust(shown_width, window.fill)
            row = lines[y + i]
            lines[y + i] = row[:x] + text + row[x + shown_width:]

        if not self._is_valid_screen(lines):
            raise CompositorInvariantViolation(
                "Screen.draw_window: something went wrong while drawing window"
            )
        return lines

    def __repr__(self):
        return f"Screen(width={self._width}, height={self._height}, windows={len(self._windows)})"
