"""
HTTP client for the external translation service.

One POST per translation: the body is a TranslationMessage, the `Accept`
header carries the configured API version, and the response is another
TranslationMessage holding the translated texts under the same addresses.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from lingograph.config import TranslatorConfig
from lingograph.i18n.message import TranslationMessage

logger = logging.getLogger(__name__)


class TranslationServiceError(Exception):
    """Transport failure or unusable response from the translation service."""
    pass


class TranslationClient:
    """
    Sends translation requests.

    Usage:
        client = TranslationClient(TranslatorConfig(
            base_address="https://translator.internal/api/translate",
            api_version="application/vnd.translator.v1+json",
        ))
        response = await client.send(TranslationMessage.for_language(Language.FR, items))

    Each call opens its own `httpx.AsyncClient` with no timeout, unless one
    is passed in, in which case it is reused and left open.
    """

    def __init__(self, config: TranslatorConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._http_client = http_client

    async def send(self, message: TranslationMessage) -> TranslationMessage | None:
        """
        Send a request and parse the response.

        Returns None when the service answers with an empty body.
        Raises TranslationServiceError for network errors, error statuses
        and bodies that are not a translation message.
        """
        if message.is_empty:
            return None

        if self._http_client is not None:
            response = await self._post(self._http_client, message)
        else:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await self._post(client, message)

        return self._parse(response)

    async def _post(self, client: httpx.AsyncClient, message: TranslationMessage) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(self.config.retry_attempts, 1)),
            wait=wait_exponential(multiplier=self.config.retry_backoff, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await client.post(
                        self.config.base_address,
                        json=message.to_payload(),
                        headers=self.config.headers,
                    )
        except httpx.HTTPError as e:
            logger.error(f"Translation service unreachable at {self.config.base_address}: {e}")
            raise TranslationServiceError(f"Request failed: {e}") from e

    def _parse(self, response: httpx.Response) -> TranslationMessage | None:
        if response.is_error:
            logger.error(f"Translation service failed: {response.status_code} {response.text}")
            raise TranslationServiceError(f"Translation failed: {response.status_code}")

        if not response.content.strip():
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationServiceError(f"Response is not JSON: {e}") from e

        if data is None:
            return None

        try:
            return TranslationMessage.model_validate(data)
        except ValidationError as e:
            raise TranslationServiceError(f"Unexpected response shape: {e}") from e
