"""HTTP client for the AI chat-completion gateway."""

import asyncio
from typing import Any, Dict, List

import httpx
from httpx import HTTPStatusError, TimeoutException

from fra_atlas.core.config import settings
from fra_atlas.core.exceptions import (
    APIClientError,
    APITimeoutError,
    ConfigurationError,
    PaymentRequiredError,
    RateLimitError,
)
from fra_atlas.utils.logging import get_logger

LOGGER = get_logger(__name__)


class AIGatewayClient:
    """Client for an OpenAI-compatible chat completions endpoint.

    Handles authentication, timeouts and retries. Server errors and
    timeouts are retried with exponential backoff; 402 and 429 are
    surfaced immediately so the caller can report them as they are.
    """

    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        timeout: int = 60,
        max_retries: int = 3,
        retry_delay: int = 2,
    ):
        """Initialize the gateway client.

        Args:
            api_key: Gateway API key
            url: Full chat completions URL
            model: Model identifier sent with every request
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts
            retry_delay: Base delay for exponential backoff
        """
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.logger = LOGGER

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def chat_completion(self, messages: List[Dict[str, Any]], **options: Any) -> Dict[str, Any]:
        """Send a chat completion request.

        Args:
            messages: Chat messages in OpenAI format
            **options: Extra request fields (temperature, max_tokens, ...)

        Returns:
            Parsed JSON response

        Raises:
            ConfigurationError: If no API key is configured
            RateLimitError: If the gateway answers 429
            PaymentRequiredError: If the gateway answers 402
            APIClientError: If the call fails after retries
            APITimeoutError: If every attempt timed out
        """
        if not self.is_configured:
            raise ConfigurationError("AI service not configured")

        payload: Dict[str, Any] = {"model": self.model, "messages": messages}
        payload.update(options)
        return await self.call_api(payload)

    async def call_api(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        self.logger.debug(
            f"Calling AI gateway: {self.url}",
            extra={"model": self.model, "timeout": self.timeout},
        )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(self.url, headers=headers, json=payload)
                    response.raise_for_status()
                    return response.json()

                except HTTPStatusError as e:
                    await self._handle_http_error(e, attempt)

                except TimeoutException as e:
                    await self._handle_timeout_error(e, attempt)

                except httpx.HTTPError as e:
                    await self._handle_transport_error(e, attempt)

        raise APIClientError(f"Failed to call AI gateway after {self.max_retries} attempts")

    async def _handle_http_error(self, error: HTTPStatusError, attempt: int) -> None:
        status_code = error.response.status_code
        error_body = error.response.text

        self.logger.warning(
            f"AI gateway HTTP error (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": self.url, "status_code": status_code, "error_body": error_body[:500]},
        )

        if status_code == 429:
            raise RateLimitError("Rate limit exceeded. Please try again later.", original_error=error)
        if status_code == 402:
            raise PaymentRequiredError(
                "Payment required. Please add credits to your AI workspace.", original_error=error
            )
        if 400 <= status_code < 500:
            raise APIClientError(f"AI gateway client error {status_code}", original_error=error)

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"AI gateway error {status_code} after retries", original_error=error)

    async def _handle_timeout_error(self, error: TimeoutException, attempt: int) -> None:
        self.logger.warning(
            f"AI gateway timeout (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": self.url},
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APITimeoutError(
                f"AI gateway timeout after {self.max_retries} attempts", original_error=error
            )

    async def _handle_transport_error(self, error: httpx.HTTPError, attempt: int) -> None:
        self.logger.warning(
            f"AI gateway transport error (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": self.url, "error": str(error)},
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"AI gateway error: {str(error)}", original_error=error)

    async def _wait_before_retry(self, attempt: int) -> None:
        """Exponential backoff wait."""
        await asyncio.sleep(self.retry_delay * (2 ** attempt))


def get_ai_gateway_client() -> AIGatewayClient:
    return AIGatewayClient(
        api_key=settings.ai_gateway.api_key,
        url=settings.ai_gateway.url,
        model=settings.ai_gateway.model,
        timeout=settings.http_timeout,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )
