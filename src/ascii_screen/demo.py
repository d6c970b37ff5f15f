"""
Example driver: draws two overlapping windows and waits for a key.

Run with ``ascii-screen-demo`` or ``python -m ascii_screen.demo``.
"""

import argparse
import logging
import sys
from typing import List, Optional

from blessed import Terminal

from .ascii_screen import Coord, Screen, Window

SCREEN_WIDTH = 100
SCREEN_HEIGHT = 40

EXAMPLE_TEXT = (
    "+------------------+\n"
    "01234567890123456789\n"
    "    THIS IS THE\n"
    "   WINDOW EXAMPLE!!\n"
    "see how long string\n"
    "is sliced: \n"
    "he1-he2-he3-he4-he5-he6-he7-he8-he9-he10\n"
    "it was 10 he-s. \n"
    "+------------------+\n"
)

TOP_TEXT = [
    "###############",
    "# This Window #",
    "# is on top   #",
    "# you see.    #",
] + ["#             #"] * 5 + ["###############"]


def build_screen(screen: Screen) -> List[Window]:
    """Attach the example windows to `screen` and return them, bottom first."""
    example = Window(Coord(5, 10), 20, 10)
    screen.attach(example)
    example.set_content(EXAMPLE_TEXT)

    top = Window(Coord(13, 17), 15, 10)
    top.set_content(TOP_TEXT)
    screen.attach(top)
    return [example, top]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='ascii-screen-demo',
        description='Draw overlapping text windows on an ASCII screen.',
    )
    parser.add_argument('--fit', action='store_true',
                        help='size the screen to the terminal instead of 100x40')
    parser.add_argument('--no-wait', action='store_true',
                        help='exit right after drawing instead of waiting for a key')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log attach/detach activity to stderr')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format='%(levelname)s %(name)s: %(message)s')

    term = Terminal()
    if args.fit:
        screen = Screen.for_terminal(term)
    else:
        screen = Screen(SCREEN_WIDTH, SCREEN_HEIGHT)
    windows = build_screen(screen)
    screen.update()

    if not args.no_wait and term.is_a_tty:
        with term.cbreak():
            term.inkey()

    for window in windows:
        window.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
