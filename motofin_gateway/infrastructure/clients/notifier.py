"""Quote webhook client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from motofin_gateway.config import settings
from motofin_gateway.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter

logger = logging.getLogger(__name__)


class QuoteNotifier:
    """Client for pushing issued quotations to the CRM/lead webhook"""

    def __init__(
        self,
        webhook_url: str | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        timeout: float | None = None,
    ):
        self.webhook_url = webhook_url if webhook_url is not None else settings.quote_webhook_url
        self.max_retries = max_retries if max_retries is not None else settings.webhook_max_retries
        self.backoff_base = backoff_base if backoff_base is not None else settings.webhook_backoff_base
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def send_quote_event(self, payload: Dict[str, Any]) -> None:
        """
        Send QUOTE_ISSUED event with retry logic.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ...
        - Retries on 5xx/4xx responses and network failures
        - Tracks latency histogram and failure counter

        No-op when no webhook URL is configured.
        """
        if not self.enabled:
            return

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        logger.error(
                            "Quote webhook delivery failed",
                            extra={"quote_id": payload.get("quote_id"), "attempts": attempt},
                        )
                        raise

                    logger.warning(f"Quote webhook attempt {attempt} failed: {e}")
                    await asyncio.sleep(self.backoff_base * (2 ** (attempt - 1)))
