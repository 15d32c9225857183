# main.py
import curses
import logging
import sys
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from config import load_config
from logging_setup import setup_logging
from routers import tasks
from server import BackgroundServer
from storage import TaskStore
from terminal import run_terminal

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


# --- FastAPI App Initialization ---
def create_app(store: TaskStore) -> FastAPI:
    app = FastAPI(
        title="Task Manager",
        description="Minimal HTTP API over the shared task file.",
        version="1.0.0",
    )
    app.state.store = store

    # Errors are plain text rather than FastAPI's JSON envelopes
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return PlainTextResponse(_describe_validation_error(exc), status_code=HTTP_400_BAD_REQUEST)

    app.include_router(tasks.router)
    return app


# --- Main Entry Point ---
def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config(argv)
    except ValueError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_file)
    store = TaskStore(config.tasks_file)

    # Started and never stopped: the daemon thread dies with the process
    web = BackgroundServer(create_app(store), port=config.port)
    try:
        web.start()
    except RuntimeError as e:
        logger.error("HTTP API unavailable, continuing with the terminal only: %s", e)

    try:
        run_terminal(store)
    except curses.error as e:
        logger.critical("Error running task manager: %s", e)
        print(f"Error running task manager: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
