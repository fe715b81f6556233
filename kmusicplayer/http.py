"""Blocking HTTP downloads used for catalogue data, lyrics and covers."""

from __future__ import annotations

import urllib.error
import urllib.request


class HttpError(Exception):
    """A download did not complete successfully."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class HttpClient:
    """Fetches whole resources over HTTP."""

    def __init__(self, timeout: float = 10.0) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout

    def _open(self, url: str):
        if not url:
            raise HttpError(url, "empty URL")
        try:
            return urllib.request.urlopen(url, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            exc.close()
            raise HttpError(url, str(exc.reason), exc.code) from exc
        except urllib.error.URLError as exc:
            raise HttpError(url, str(exc.reason)) from exc
        except (ValueError, OSError) as exc:
            raise HttpError(url, str(exc)) from exc

    def get(self, url: str) -> bytes:
        """Download ``url`` and return its body."""
        response = self._open(url)
        try:
            with response:
                return response.read()
        except OSError as exc:
            raise HttpError(url, str(exc)) from exc

    def get_text(self, url: str) -> str:
        """Download ``url`` and return its body decoded as text."""
        response = self._open(url)
        try:
            with response:
                charset = response.headers.get_content_charset() or "utf-8"
                data = response.read()
        except OSError as exc:
            raise HttpError(url, str(exc)) from exc
        try:
            return data.decode(charset, errors="replace")
        except LookupError:
            return data.decode("utf-8", errors="replace")