"""HTTP transport toward the upstream completion service"""

import asyncio
import json
from typing import Any, Dict, Optional

import httpx

from ..models.openai import ErrorResponse
from .errors import NetworkFailureError, RequestTimeoutError, UpstreamRejectedError


DEFAULT_TIMEOUT = 60.0
UNKNOWN_ERROR_MESSAGE = "Unknown error"


def extract_error_message(body: str) -> str:
    """
    Best-effort extraction of the message from an error envelope

    Falls back to the envelope's code, then to a generic message.
    """
    try:
        envelope = ErrorResponse(**json.loads(body))
    except (TypeError, ValueError):
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        return UNKNOWN_ERROR_MESSAGE

    if envelope.error.message:
        return envelope.error.message
    if envelope.error.code:
        return str(envelope.error.code)
    return UNKNOWN_ERROR_MESSAGE


class TransportClient:
    """Issue single requests under a bounded deadline and classify failures"""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize transport client

        Args:
            http_client: Client to use; created lazily when omitted
            timeout: Default deadline in seconds
        """
        self.timeout = timeout
        self.http_client = http_client
        self._owns_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True
            )
            self._owns_client = True
        return self.http_client

    async def close(self):
        """Close HTTP client if this transport created it"""
        if self.http_client is not None and self._owns_client:
            await self.http_client.aclose()
            self.http_client = None

    async def send(
        self,
        url: str,
        payload: Dict[str, Any],
        api_key: str,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Send one request and return the raw successful body

        Args:
            url: Endpoint URL
            payload: JSON payload
            api_key: Bearer credential
            timeout: Deadline in seconds for the whole exchange

        Returns:
            Response body text, unparsed

        Raises:
            RequestTimeoutError: If the deadline expires
            UpstreamRejectedError: On a non-success status code
            NetworkFailureError: On DNS, connection or TLS failure
        """
        deadline = timeout if timeout is not None else self.timeout
        client = await self._get_http_client()
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json"
        }

        try:
            response = await asyncio.wait_for(
                client.post(url, json=payload, headers=headers, timeout=deadline),
                timeout=deadline,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise RequestTimeoutError(deadline, payload.get("model"))
        except httpx.RequestError as e:
            raise NetworkFailureError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise UpstreamRejectedError(
                response.status_code,
                extract_error_message(response.text)
            )

        return response.text
