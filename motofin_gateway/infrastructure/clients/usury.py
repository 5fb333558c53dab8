"""Client for the published usury rate (datos.gov.co Socrata dataset)"""

import asyncio
import logging
import math

import httpx

from motofin_gateway.config import settings
from motofin_gateway.domain.exceptions import RateSourceUnavailable
from motofin_gateway.domain.models import UsuryRate

logger = logging.getLogger(__name__)


class UsuryRateClient:
    """Fetches the latest effective annual usury rate for a credit modality"""

    def __init__(
        self,
        dataset_url: str | None = None,
        modality: str | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        timeout: float | None = None,
    ):
        self.dataset_url = dataset_url or settings.usury_dataset_url
        self.modality = modality or settings.usury_modality
        self.max_retries = max_retries if max_retries is not None else settings.usury_max_retries
        self.backoff_base = backoff_base if backoff_base is not None else settings.usury_backoff_base
        self.timeout = timeout or settings.usury_timeout_seconds

    async def fetch_latest(self) -> UsuryRate:
        """
        Most recent rate for the modality, ordered by `vigencia_desde`.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ...
        - Retries on HTTP error responses and network failures

        Raises:
            RateSourceUnavailable: retries exhausted, empty result or unparseable rate
        """
        params = {
            "$limit": 1,
            "$order": "vigencia_desde DESC",
            "modalidad": self.modality,
        }

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while True:
                try:
                    response = await client.get(self.dataset_url, params=params)
                    response.raise_for_status()
                    break

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1

                    if attempt >= self.max_retries:
                        logger.error("Usury rate fetch failed", extra={"attempts": attempt})
                        raise RateSourceUnavailable(f"Usury rate source unreachable: {e}") from e

                    logger.warning(f"Usury rate fetch attempt {attempt} failed: {e}")
                    await asyncio.sleep(self.backoff_base * (2 ** (attempt - 1)))

        try:
            rows = response.json()
        except ValueError as e:
            raise RateSourceUnavailable("Usury rate source returned malformed JSON") from e
        if not isinstance(rows, list) or not rows:
            raise RateSourceUnavailable(f"No usury rate published for {self.modality!r}")

        latest = rows[0]
        try:
            rate = float(latest["tasa_efectiva_anual"])
        except (KeyError, TypeError, ValueError) as e:
            raise RateSourceUnavailable(f"Invalid usury rate record: {latest!r}") from e
        if not math.isfinite(rate):
            raise RateSourceUnavailable(f"Invalid usury rate format: {latest['tasa_efectiva_anual']!r}")

        logger.info(
            f"Fetched usury rate {rate}% E.A.",
            extra={"valid_from": latest.get("vigencia_desde"), "valid_to": latest.get("vigencia_hasta")},
        )
        return UsuryRate(
            effective_annual_rate=rate,
            valid_from=latest.get("vigencia_desde"),
            valid_to=latest.get("vigencia_hasta"),
        )
