"""HTTP client for the payment instructions API.

Sends one POST per test case and normalizes whatever happens into an
Outcome: either the API responded with a decodable JSON body, or the
request could not be completed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://payment-instructions-api.vercel.app/payment-instructions"


@dataclass(frozen=True)
class Responded:
    """The API answered and its body decoded as JSON."""
    http_status: int
    body: Any = field(default=None, hash=False)


@dataclass(frozen=True)
class TransportFailed:
    """The request could not be completed."""
    message: str


Outcome = Union[Responded, TransportFailed]


class PaymentApiClient:
    """HTTP client for the payment instructions endpoint.

    No retries and no caching: every call to execute() is exactly one
    request.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        request_timeout: Optional[float] = None,
    ):
        """Initialize HTTP client.

        Args:
            endpoint: Full URL of the payment instructions endpoint.
            request_timeout: Request timeout in seconds. None keeps the
                transport default (wait indefinitely).
        """
        self.endpoint = endpoint
        self.request_timeout = request_timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def execute(self, payload: dict[str, Any]) -> Outcome:
        """Submit a payment instruction.

        POST <endpoint>

        Args:
            payload: Request body, sent verbatim as JSON.

        Returns:
            Responded for any HTTP response with a JSON body (including
            4xx/5xx), TransportFailed otherwise. Never raises for
            network or decoding problems.
        """
        try:
            response = self._session.post(
                self.endpoint,
                json=payload,
                timeout=self.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", self.endpoint, e)
            return TransportFailed(message=_describe(e))

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(
                "Undecodable response from %s (HTTP %s): %s",
                self.endpoint, response.status_code, e,
            )
            return TransportFailed(
                message=f"Invalid JSON response (HTTP {response.status_code}): {e}"
            )

        logger.debug("HTTP %s from %s", response.status_code, self.endpoint)
        return Responded(http_status=response.status_code, body=body)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _describe(error: requests.RequestException) -> str:
    if isinstance(error, requests.Timeout):
        return f"Request timed out: {error}"
    if isinstance(error, requests.ConnectionError):
        return f"Connection failed: {error}"
    return f"{type(error).__name__}: {error}"
