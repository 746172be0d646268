"""Subscription handshake: visit the ``SubscribeURL`` SNS sent us."""

from __future__ import annotations

from snsauth.protocol.errors import ConfirmSubscriptionError
from snsauth.protocol.message import SubscriptionConfirmation
from snsauth.verify.transport import Fetcher


class SubscriptionConfirmer:
    """Confirms subscriptions through *fetcher*.

    Only call :meth:`confirm` with a request whose signature has already
    been verified.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    def confirm(self, msg: SubscriptionConfirmation) -> str:
        """GET ``msg.subscribe_url`` and return SNS's response body verbatim.

        Raises:
            FetchError: The URL could not be reached.
            ConfirmSubscriptionError: SNS answered with a status other than 200.
        """
        resp = self._fetcher.get(msg.subscribe_url)
        if resp.status_code != 200:
            raise ConfirmSubscriptionError(
                f"error confirm subscription: status {resp.status_code}"
            )
        return resp.text
