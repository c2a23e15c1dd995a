import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Protocol

import requests


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes
    headers: Mapping[str, str]

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    def __call__(self, method: str, url: str, headers: Mapping[str, str]) -> HttpResponse: ...

    def set_cookie(self, name: str, value: str, domain: str) -> None: ...


class RequestsTransport:
    """Transport backed by a ``requests.Session``.

    The session owns the cookie jar, so one instance should not be shared by
    callers that need isolated consent state.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = timeout_seconds

    def __call__(self, method: str, url: str, headers: Mapping[str, str]) -> HttpResponse:
        response = self._session.request(
            method,
            url,
            headers=dict(headers),
            timeout=self._timeout_seconds,
        )
        LOGGER.debug("%s %s -> %s", method, url, response.status_code)
        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers.items()),
        )

    def set_cookie(self, name: str, value: str, domain: str) -> None:
        self._session.cookies.set(name, value, domain=domain)
