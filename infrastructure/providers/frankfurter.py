from typing import Any

import httpx
from pydantic import ConfigDict

from domain.models.rates import CurrencyPair, RateQuote
from infrastructure.providers.base import RatePayload, RateSourceProvider


def invert_quote(quote: RateQuote) -> RateQuote:
    """Flip a USD->EUR figure into EUR->USD.

    Frankfurter is asked for ``from=USD&to=EUR`` and answers "1 USD = 0.92 EUR";
    callers need "1 EUR = 1/0.92 USD".
    """
    return quote.inverted()


class FrankfurterPayload(RatePayload):
    model_config = ConfigDict(extra='ignore')

    base: str | None = None
    date: str | None = None
    rates: dict[str, Any] = {}

    def rate_candidates(self, quote_currency: str) -> list[Any]:
        return [self.rates.get(quote_currency)]

    def published_at(self) -> str | None:
        return self.date


class FrankfurterProvider(RateSourceProvider):
    """ECB reference rates. Serves EUR->USD by inverting the USD->EUR quote."""

    BASE_URL = 'https://api.frankfurter.app'
    payload_model = FrankfurterPayload

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            base_url=base_url,
            name='frankfurter',
            pair=CurrencyPair('USD', 'EUR'),
            timeout=timeout,
            client=client,
        )

    def _build_request(self) -> tuple[str, dict[str, str]]:
        return 'latest', {'from': self.pair.base, 'to': self.pair.quote}

    async def fetch_quote(self) -> RateQuote:
        quote = await super().fetch_quote()
        return invert_quote(quote)
