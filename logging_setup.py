# logging_setup.py
import logging
from pathlib import Path


def setup_logging(log_file: Path, level: int = logging.INFO) -> None:
    """
    Send every log record to a file.

    There is no console handler: the terminal menu owns the screen, and any
    stray output would corrupt it. Call this once, before starting the server.
    """
    log_file = Path(log_file)
    if log_file.parent != Path("."):
        log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
