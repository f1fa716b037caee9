"""Fetches the congratulation message shown after a win."""

from __future__ import annotations

import threading
from typing import Callable, Optional

import requests

from .config import DEFAULT_FORTUNE_URL

FortuneCallback = Callable[[Optional[str], Optional[Exception]], None]


class FortuneError(Exception):
    """The fortune service answered, but not with a usable message."""


class FortuneProvider:
    def __init__(
        self,
        url: str = DEFAULT_FORTUNE_URL,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._http = session if session is not None else requests

    def fetch(self) -> str:
        """Blocking fetch. Expects ``{"slip": {"advice": "..."}}``."""
        response = self._http.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise FortuneError(f"invalid JSON from {self.url}") from e

        try:
            text = payload["slip"]["advice"]
        except (KeyError, TypeError) as e:
            raise FortuneError(f"unexpected payload from {self.url}") from e

        if not isinstance(text, str) or not text.strip():
            raise FortuneError("empty fortune")
        return text.strip()

    def request_fortune(self, callback: FortuneCallback) -> threading.Thread:
        """Fetch on a worker thread and report ``(text, error)`` from it.

        The callback runs on the worker thread; callers that touch the
        scene must hand the result back to the main loop themselves.
        """

        def worker() -> None:
            try:
                text = self.fetch()
            except Exception as e:
                # any failure is reported; the caller falls back to a fixed text
                callback(None, e)
                return
            callback(text, None)

        thread = threading.Thread(target=worker, name="fortune", daemon=True)
        thread.start()
        return thread
