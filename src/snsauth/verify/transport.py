"""Outbound GET capability used for certificate fetch and confirmation.

The verifier and the confirmer only ever need "GET this URL, give me
status and body".  That capability is the :class:`Fetcher` interface so
tests (and hosts with their own HTTP stack) can substitute it.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass

import httpx

from snsauth.protocol.errors import FetchError


@dataclass(frozen=True)
class FetchResponse:
    """Status code and raw body of a completed GET."""

    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class Fetcher(abc.ABC):
    """Blocking GET capability."""

    @abc.abstractmethod
    def get(self, url: str) -> FetchResponse:
        """GET *url* and return the response, whatever its status.

        Raises:
            FetchError: If no response could be read.
        """


class HTTPFetcher(Fetcher):
    """:class:`Fetcher` backed by a shared ``httpx.Client``.

    One client (and connection pool) serves every request.  It is safe to
    call ``get()`` from several threads at once.  Redirects are not
    followed: a redirect would leave the host that was validated.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=False)

    def get(self, url: str) -> FetchResponse:
        try:
            resp = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"error fetch {url}: {exc}") from exc
        return FetchResponse(status_code=resp.status_code, content=resp.content)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()
