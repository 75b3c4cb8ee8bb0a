"""
Terminal renderer and keyboard poller for snek.

Frames are composed into a FrameBuffer (numpy arrays of glyphs and
colors) and flushed to the terminal through curses once per frame. A
pygame clock paces the loop to a fixed frame rate.
"""

import curses
import logging
import os
import sys
from typing import Dict, Optional, Set, Tuple

import numpy as np

from snek_config import Color

logger = logging.getLogger(__name__)

ESC = 27

KEY_NAMES = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    ESC: "esc",
}


def key_name(code: int) -> Optional[str]:
    if code in KEY_NAMES:
        return KEY_NAMES[code]
    if 32 <= code < 127:
        return chr(code)
    return None


class TerminalInitError(RuntimeError):
    pass


class FrameBuffer:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.glyphs = np.full((height, width), " ", dtype="<U1")
        self.fg = np.full((height, width), Color.RESET.value, dtype=np.int8)
        self.bg = np.full((height, width), Color.RESET.value, dtype=np.int8)

    def clear(self) -> None:
        self.glyphs[:, :] = " "
        self.fg[:, :] = Color.RESET.value
        self.bg[:, :] = Color.RESET.value

    def fill(self, bg: Color, glyph: str = " ") -> None:
        self.glyphs[:, :] = glyph
        self.fg[:, :] = Color.RESET.value
        self.bg[:, :] = bg.value

    def fill_rect(self, x1: int, y1: int, x2: int, y2: int, bg: Color, glyph: str = " ") -> None:
        """Fill the rectangle between two corners, both included."""
        x1, x2 = sorted((x1, x2))
        y1, y2 = sorted((y1, y2))
        x1, y1 = max(x1, 0), max(y1, 0)
        x2, y2 = min(x2, self.width - 1), min(y2, self.height - 1)
        if x1 > x2 or y1 > y2:
            return
        self.glyphs[y1 : y2 + 1, x1 : x2 + 1] = glyph
        self.fg[y1 : y2 + 1, x1 : x2 + 1] = Color.RESET.value
        self.bg[y1 : y2 + 1, x1 : x2 + 1] = bg.value

    def set_pxl(self, x: int, y: int, glyph: str, fg: Color, bg: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.glyphs[y, x] = glyph[:1] or " "
            self.fg[y, x] = fg.value
            self.bg[y, x] = bg.value

    def print_fbg(self, x: int, y: int, text: str, fg: Color, bg: Color) -> None:
        for i, ch in enumerate(text):
            self.set_pxl(x + i, y, ch, fg, bg)

    def cell(self, x: int, y: int) -> Tuple[str, Color, Color]:
        return (
            str(self.glyphs[y, x]),
            Color(int(self.fg[y, x])),
            Color(int(self.bg[y, x])),
        )

    def row_text(self, y: int) -> str:
        return "".join(self.glyphs[y])


class TerminalEngine:
    """Owns the curses screen, the frame buffer and the frame clock."""

    def __init__(self, stdscr, width: int, height: int, fps: int, clock):
        self.stdscr = stdscr
        self.width = width
        self.height = height
        self.fps = fps
        self.clock = clock
        self.buffer = FrameBuffer(width, height)
        self._pairs: Dict[Tuple[int, int], int] = {}
        self._pressed: Set[str] = set()
        self._closed = False

    @classmethod
    def init(cls, width: int, height: int, fps: int) -> "TerminalEngine":
        os.environ.setdefault("ESCDELAY", "25")
        os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
        import pygame

        try:
            stdscr = curses.initscr()
        except curses.error as exc:
            raise TerminalInitError(f"could not open the terminal: {exc}") from exc

        try:
            curses.noecho()
            curses.cbreak()
            stdscr.keypad(True)
            stdscr.nodelay(True)
            if not curses.has_colors():
                raise TerminalInitError("terminal does not support colors")
            curses.start_color()
            curses.use_default_colors()
            rows, cols = stdscr.getmaxyx()
            if rows < height or cols < width:
                raise TerminalInitError(
                    f"terminal is {cols}x{rows}, need at least {width}x{height}"
                )
            try:
                curses.curs_set(0)
            except curses.error:
                logger.debug("Terminal cannot hide the cursor")
        except TerminalInitError:
            _restore(stdscr)
            raise
        except curses.error as exc:
            _restore(stdscr)
            raise TerminalInitError(f"could not set up the terminal: {exc}") from exc

        logger.debug("Terminal engine started at %dx%d, %d fps", width, height, fps)
        return cls(stdscr, width, height, fps, pygame.time.Clock())

    def __enter__(self) -> "TerminalEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Frame composition, forwarded to the buffer

    def fill(self, bg: Color) -> None:
        self.buffer.fill(bg)

    def fill_rect(self, x1: int, y1: int, x2: int, y2: int, bg: Color) -> None:
        self.buffer.fill_rect(x1, y1, x2, y2, bg)

    def set_pxl(self, x: int, y: int, glyph: str, fg: Color, bg: Color) -> None:
        self.buffer.set_pxl(x, y, glyph, fg, bg)

    def print_fbg(self, x: int, y: int, text: str, fg: Color, bg: Color) -> None:
        self.buffer.print_fbg(x, y, text, fg, bg)

    def clear_screen(self) -> None:
        self.buffer.clear()

    # Terminal I/O

    def _pair(self, fg: int, bg: int) -> int:
        key = (fg, bg)
        if key not in self._pairs:
            number = len(self._pairs) + 1
            curses.init_pair(number, fg, bg)
            self._pairs[key] = number
        return curses.color_pair(self._pairs[key])

    def draw(self) -> None:
        buf = self.buffer
        rows, cols = self.stdscr.getmaxyx()
        for y in range(buf.height):
            x = 0
            while x < buf.width:
                fg, bg = int(buf.fg[y, x]), int(buf.bg[y, x])
                end = x + 1
                while end < buf.width and buf.fg[y, end] == fg and buf.bg[y, end] == bg:
                    end += 1
                text = "".join(buf.glyphs[y, x:end])
                attr = self._pair(fg, bg)
                if y == rows - 1 and end >= cols:
                    # addstr fails on the screen's last cell; insstr leaves the cursor alone.
                    if len(text) > 1:
                        self.stdscr.addstr(y, x, text[:-1], attr)
                    self.stdscr.insstr(y, end - 1, text[-1], attr)
                else:
                    self.stdscr.addstr(y, x, text, attr)
                x = end
        self.stdscr.noutrefresh()
        curses.doupdate()

    def wait_frame(self) -> None:
        self.clock.tick(self.fps)
        self._pressed = set()
        while True:
            code = self.stdscr.getch()
            if code == -1:
                break
            name = key_name(code)
            if name is not None:
                self._pressed.add(name)

    def is_key_pressed(self, key: str) -> bool:
        return key in self._pressed

    def set_title(self, title: str) -> None:
        sys.stdout.write(f"\x1b]0;{title}\x07")
        sys.stdout.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        _restore(self.stdscr)
        logger.debug("Terminal engine stopped")


def _restore(stdscr) -> None:
    stdscr.keypad(False)
    curses.nocbreak()
    curses.echo()
    curses.endwin()
