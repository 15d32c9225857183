# config.py
import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dotenv import find_dotenv, load_dotenv

DEFAULT_TASKS_FILE = "tasks.json"
DEFAULT_PORT = 9000
DEFAULT_LOG_FILE = "taskmanager.log"


@dataclass(frozen=True)
class Config:
    tasks_file: Path = Path(DEFAULT_TASKS_FILE)
    port: int = DEFAULT_PORT
    log_file: Path = Path(DEFAULT_LOG_FILE)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Reads TASKS_FILE, TASKS_PORT and TASKS_LOG_FILE, after loading a .env
        found from the working directory upwards.
        Empty values and a zero port fall back to the defaults.
        Raises ValueError if TASKS_PORT is not an integer.
        """
        load_dotenv(find_dotenv(usecwd=True))
        port_str = os.getenv("TASKS_PORT", "").strip()
        try:
            port = int(port_str) if port_str else DEFAULT_PORT
        except ValueError:
            raise ValueError(f"TASKS_PORT must be an integer, got {port_str!r}")
        return cls(
            tasks_file=Path(os.getenv("TASKS_FILE") or DEFAULT_TASKS_FILE),
            port=port or DEFAULT_PORT,
            log_file=Path(os.getenv("TASKS_LOG_FILE") or DEFAULT_LOG_FILE),
        )


def load_config(argv: Optional[Sequence[str]] = None) -> Config:
    """Environment first, then command-line flags on top."""
    env = Config.from_env()

    parser = argparse.ArgumentParser(description="Personal task manager with a terminal menu and an HTTP API.")
    parser.add_argument("--file", type=Path, default=env.tasks_file, help="Path to the JSON task file.")
    parser.add_argument("--port", type=int, default=env.port, help="Port for the HTTP API.")
    parser.add_argument("--log-file", type=Path, default=env.log_file, help="Where to write the application log.")
    args = parser.parse_args(argv)

    return Config(tasks_file=args.file, port=args.port, log_file=args.log_file)
