from __future__ import annotations

import logging
import threading
from typing import Callable

from .constants import TOKEN_REFRESH_INTERVAL_S
from .errors import YhtClientError

logger = logging.getLogger(__name__)


class TokenManager:
    """Keeps the shared platform token fresh from a background thread.

    ``fetch`` returns a new token or raises ``YhtClientError``. A failed refresh
    keeps the previous token; the next cycle retries.
    """

    def __init__(self, fetch: Callable[[], str], *, interval_s: float = TOKEN_REFRESH_INTERVAL_S):
        self._fetch = fetch
        self._interval_s = interval_s
        self._token = ""
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._start_lock = threading.Lock()

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def refresh(self) -> bool:
        try:
            token = self._fetch()
        except YhtClientError as e:
            logger.debug("platform token refresh failed: %s", e)
            return False
        if not token:
            logger.debug("platform token refresh returned no token")
            return False
        with self._lock:
            self._token = token
        return True

    def start(self) -> None:
        with self._start_lock:
            if self._thread is not None:
                raise RuntimeError("token refresh loop already started")
            self._thread = threading.Thread(target=self._run, name="yht-token-refresh", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh()
            except Exception:
                # a fetch cut short by close() is not worth reporting
                if self._stop.is_set():
                    break
                logger.exception("unexpected error in platform token refresh")
            if self._stop.wait(self._interval_s):
                break

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
