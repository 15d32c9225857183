# spinner.py
import threading
from typing import Optional

from screen import CYAN

FRAMES = ("|", "/", "-", "\\")


class Spinner:
    """
    Animated 'Loading' indicator drawn while a save is in progress.

        with Spinner(screen):
            store.add(...)

    Leaving the block sets the stop event once and waits for the thread, so
    nothing is drawn after the caller moves on.
    """

    def __init__(self, screen, interval: float = 0.1):
        self.screen = screen
        self.interval = interval
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.frames_drawn = 0

    def _run(self) -> None:
        i = 0
        # At least one frame is drawn, even for a save that finishes instantly
        while True:
            self.screen.clear()
            self.screen.draw_centered(0, "Loading " + FRAMES[i], CYAN)
            self.screen.flush()
            self.frames_drawn += 1
            i = (i + 1) % len(FRAMES)
            if self._done.wait(self.interval):
                return

    def __enter__(self) -> "Spinner":
        self._thread = threading.Thread(target=self._run, name="spinner", daemon=True)
        self._thread.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._done.set()
        self._thread.join()
