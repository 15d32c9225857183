# server.py
import logging
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI

logger = logging.getLogger(__name__)


class BackgroundServer:
    """
    Runs uvicorn in a daemon thread so the terminal loop can own the main thread.

    The entry point starts it and never stops it; the thread simply dies with
    the process. stop() exists so tests can shut it down deterministically.
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 9000):
        # log_config=None: uvicorn's loggers propagate to our file handler
        config = uvicorn.Config(app, host=host, port=port, log_config=None)
        self.server = uvicorn.Server(config)
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        """The bound port, which differs from the configured one when that was 0."""
        if self.server.started and self.server.servers:
            return self.server.servers[0].sockets[0].getsockname()[1]
        return self.server.config.port

    def start(self, timeout: float = 5.0) -> None:
        self._thread = threading.Thread(target=self.server.run, name="http-server", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + timeout
        while not self.server.started:
            if not self._thread.is_alive():
                raise RuntimeError(f"HTTP server failed to start on port {self.server.config.port}")
            if time.monotonic() > deadline:
                raise RuntimeError("Timed out waiting for the HTTP server to start")
            time.sleep(0.05)
        logger.info("Web server running on http://localhost:%d", self.port)

    def stop(self, timeout: float = 5.0) -> None:
        self.server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Web server stopped.")
