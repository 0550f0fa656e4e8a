from typing import Any

import httpx
from pydantic import ConfigDict

from domain.models.rates import CurrencyPair
from infrastructure.providers.base import RatePayload, RateSourceProvider


class ExchangeRateApiPayload(RatePayload):
    """exchangerate-api.com answer; v4 uses ``rates``, v6 ``conversion_rates``."""

    model_config = ConfigDict(extra='ignore')

    base: str | None = None
    date: str | None = None
    rates: dict[str, Any] | None = None
    conversion_rates: dict[str, Any] | None = None
    result: Any = None

    def rate_candidates(self, quote_currency: str) -> list[Any]:
        return [
            (self.rates or {}).get(quote_currency),
            (self.conversion_rates or {}).get(quote_currency),
            self.result,
        ]

    def published_at(self) -> str | None:
        return self.date


class ExchangeRateApiProvider(RateSourceProvider):
    """General purpose free exchange-rate feed. Used as the fallback EUR->USD source."""

    BASE_URL = 'https://api.exchangerate-api.com/v4'
    payload_model = ExchangeRateApiPayload

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            base_url=base_url,
            name='exchangerate-api',
            pair=CurrencyPair('EUR', 'USD'),
            timeout=timeout,
            client=client,
        )

    def _build_request(self) -> tuple[str, dict[str, str]]:
        return f'latest/{self.pair.base}', {}
