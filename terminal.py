# terminal.py
import curses
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from models import Task, TaskStatus, format_created_at, parse_task_id
from screen import CYAN, GREEN, KEY_BACKSPACE, KEY_ENTER, RED, WHITE, YELLOW, CursesScreen
from spinner import Spinner
from storage import TaskStore

logger = logging.getLogger(__name__)

MENU = (
    "1. Add Task",
    "2. Update Task",
    "3. Show All Tasks",
    "4. Show Completed Tasks",
    "5. Show In Progress Tasks",
    "6. Show Not Completed Tasks",
    "7. Delete Task",
)
EXIT_KEY = "8"

STATUS_CHOICES = {
    "1": TaskStatus.NOT_COMPLETED,
    "2": TaskStatus.IN_PROGRESS,
    "3": TaskStatus.COMPLETED,
}
STATUS_COLORS = {
    TaskStatus.COMPLETED: GREEN,
    TaskStatus.IN_PROGRESS: YELLOW,
    TaskStatus.NOT_COMPLETED: RED,
}


def printable(text: str) -> str:
    """Control characters would move the cursor; show them as spaces instead."""
    return "".join(ch if ch.isprintable() else " " for ch in text)


def format_task(task: Task) -> str:
    return (
        f"ID: {task.id}, Description: {printable(task.description)}, "
        f"Status: {task.status.value}, Created At: {format_created_at(task)}"
    )


class TerminalApp:
    """
    The interactive menu. Each key dispatches to a synchronous sub-flow that
    returns to the menu when done; '8' leaves the loop.
    """

    def __init__(self, store: TaskStore, screen, message_delay: float = 2.0, spinner_interval: float = 0.1):
        self.store = store
        self.screen = screen
        self.message_delay = message_delay
        self.spinner_interval = spinner_interval
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.add_task,
            "2": self.update_task,
            "3": self.show_all_tasks,
            "4": lambda: self.show_tasks_by_status(TaskStatus.COMPLETED),
            "5": lambda: self.show_tasks_by_status(TaskStatus.IN_PROGRESS),
            "6": lambda: self.show_tasks_by_status(TaskStatus.NOT_COMPLETED),
            "7": self.delete_task,
        }

    def run(self) -> None:
        while True:
            self.draw_menu()
            key = self.screen.read_key()
            if key == EXIT_KEY:
                logger.info("Exit selected from the menu.")
                return
            action = self._actions.get(key)
            if action:
                action()

    # --- Drawing ---

    def draw_menu(self) -> None:
        self.screen.clear()
        self.screen.draw_centered(0, "--- Task Manager ---", CYAN)
        for row, item in enumerate(MENU, start=2):
            self.screen.draw_centered(row, item, YELLOW)
        self.screen.draw_centered(len(MENU) + 2, f"{EXIT_KEY}. Exit", RED)
        self.screen.flush()

    def flash(self, message: str, color: str) -> None:
        """Show a one-line message, then pause before returning to the menu."""
        self.screen.clear()
        self.screen.draw_centered(0, message, color)
        self.screen.flush()
        time.sleep(self.message_delay)

    def read_line(self, prompt: str, header: Sequence[str] = ()) -> str:
        """
        Minimal line editor: printable keys append, Backspace deletes,
        Enter submits. `header` lines are drawn under the prompt.
        """
        chars: List[str] = []
        while True:
            self.screen.clear()
            self.screen.draw_centered(0, prompt, WHITE)
            for row, line in enumerate(header, start=1):
                self.screen.draw_centered(row, line, YELLOW)
            self.screen.draw_centered(len(header) + 2, "".join(chars), YELLOW)
            self.screen.flush()

            key = self.screen.read_key()
            if key == KEY_ENTER:
                return "".join(chars)
            if key == KEY_BACKSPACE:
                if chars:
                    chars.pop()
            elif len(key) == 1 and key.isprintable():
                chars.append(key)

    def show_tasks(self, tasks: List[Task]) -> None:
        if not tasks:
            self.flash("No tasks found.", YELLOW)
            return

        self.screen.clear()
        for row, task in enumerate(tasks):
            self.screen.draw_centered(row, format_task(task), STATUS_COLORS[task.status])
        self.screen.flush()
        # Any key returns to the menu
        self.screen.read_key()

    def _read_task_id(self, prompt: str) -> Optional[int]:
        return parse_task_id(self.read_line(prompt).strip())

    # --- Sub-flows ---

    def add_task(self) -> None:
        description = self.read_line("Enter task description: ")
        with Spinner(self.screen, self.spinner_interval):
            self.store.add(description)
        self.flash("Task added successfully.", GREEN)

    def update_task(self) -> None:
        self.show_all_tasks()
        task_id = self._read_task_id("Enter task ID to update: ")
        if task_id is None or self.store.find(task_id) is None:
            self.flash("Task not found.", RED)
            return

        choice = self.read_line(
            "Enter new status (1-3): ",
            header=[f"{key}. {status.value}" for key, status in STATUS_CHOICES.items()],
        )
        status = STATUS_CHOICES.get(choice.strip())
        if status is None:
            self.flash("Invalid choice. Status not updated.", RED)
            return

        with Spinner(self.screen, self.spinner_interval):
            updated = self.store.set_status(task_id, status)
        if updated is None:
            # Removed by the HTTP API while the status menu was open
            self.flash("Task not found.", RED)
            return
        self.flash("Task updated successfully.", GREEN)

    def show_all_tasks(self) -> None:
        self.show_tasks(self.store.load())

    def show_tasks_by_status(self, status: TaskStatus) -> None:
        self.show_tasks(self.store.by_status(status))

    def delete_task(self) -> None:
        self.show_all_tasks()
        task_id = self._read_task_id("Enter task ID to delete: ")

        with Spinner(self.screen, self.spinner_interval):
            removed = None if task_id is None else self.store.delete(task_id)
        if removed is None:
            self.flash("Task not found.", RED)
            return
        self.flash("Task deleted successfully.", GREEN)


def run_terminal(store: TaskStore) -> None:
    """
    Take over the terminal until the user exits.
    Raises curses.error if the terminal cannot be initialized.
    """
    def loop(stdscr):
        TerminalApp(store, CursesScreen(stdscr)).run()

    curses.wrapper(loop)
