# screen.py
import curses
import threading
from typing import Dict

# Normalized key names returned by read_key()
KEY_ENTER = "\n"
KEY_BACKSPACE = "\b"

# --- Colors ---
DEFAULT = "default"
WHITE = "white"
CYAN = "cyan"
YELLOW = "yellow"
GREEN = "green"
RED = "red"

_CURSES_COLORS = {
    WHITE: curses.COLOR_WHITE,
    CYAN: curses.COLOR_CYAN,
    YELLOW: curses.COLOR_YELLOW,
    GREEN: curses.COLOR_GREEN,
    RED: curses.COLOR_RED,
}


class CursesScreen:
    """
    Owns the curses window. The spinner thread and the menu loop both draw
    through this object; the lock keeps them from calling curses at once.
    """

    def __init__(self, stdscr):
        self._scr = stdscr
        self._lock = threading.RLock()
        self._attrs: Dict[str, int] = {}

        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
                background = -1
            except curses.error:
                background = curses.COLOR_BLACK
            for pair, (name, fg) in enumerate(_CURSES_COLORS.items(), start=1):
                curses.init_pair(pair, fg, background)
                self._attrs[name] = curses.color_pair(pair)

    def clear(self) -> None:
        with self._lock:
            self._scr.erase()

    def draw_centered(self, y: int, text: str, color: str = DEFAULT) -> None:
        with self._lock:
            height, width = self._scr.getmaxyx()
            x = max(0, (width - len(text)) // 2)
            if y < 0 or y >= height or x >= width:
                return
            try:
                self._scr.addnstr(y, x, text, width - x, self._attrs.get(color, curses.A_NORMAL))
            except curses.error:
                # Writing the bottom-right cell raises after the text is drawn
                pass

    def flush(self) -> None:
        with self._lock:
            self._scr.refresh()

    def read_key(self) -> str:
        """Block until a key is pressed. Special keys other than Enter/Backspace map to ''."""
        key = self._scr.get_wch()
        if key in ("\n", "\r", curses.KEY_ENTER):
            return KEY_ENTER
        if key in ("\x7f", "\b", curses.KEY_BACKSPACE):
            return KEY_BACKSPACE
        if isinstance(key, str):
            return key
        return ""
