# test/fakes.py
import threading
from typing import Iterable, List, Tuple


class FakeScreen:
    """
    Scripted stand-in for CursesScreen.

    - read_key() replays `keys` in order and fails loudly when they run out
    - every draw_centered call is recorded as (row, text, color)
    """

    def __init__(self, keys: Iterable[str] = ()):
        self.keys: List[str] = list(keys)
        self.drawn: List[Tuple[int, str, str]] = []
        self.clears = 0
        self.flushes = 0
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self.clears += 1

    def draw_centered(self, y: int, text: str, color: str = "default") -> None:
        with self._lock:
            self.drawn.append((y, text, color))

    def flush(self) -> None:
        with self._lock:
            self.flushes += 1

    def read_key(self) -> str:
        if not self.keys:
            raise AssertionError("FakeScreen ran out of scripted keys")
        return self.keys.pop(0)

    @property
    def texts(self) -> List[str]:
        with self._lock:
            return [text for _, text, _ in self.drawn]
