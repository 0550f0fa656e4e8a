import logging
from decimal import Decimal
from typing import Any

import httpx

from domain.exceptions.rates import RatesUnavailableError
from domain.models.rates import RateBoard
from infrastructure.providers.parsing import parse_rate_value

logger = logging.getLogger(__name__)


class RatesApiClient:
    """Consumer of this service's own rate endpoints."""

    USD_LOCAL_ENDPOINT = '/api/get-bcv-rate'
    COMPOSITE_ENDPOINT = '/api/get-eur-rate'
    EUR_USD_ENDPOINT = '/api/get-eur-usd'

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: float = 15.0):
        self.base_url = base_url.rstrip('/')
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def _get(self, endpoint: str) -> dict[str, Any]:
        url = f'{self.base_url}{endpoint}'
        try:
            response = await self._client.get(url, headers={'accept': 'application/json'})
        except httpx.RequestError as e:
            logger.warning(f'Rates endpoint {endpoint} unreachable: {e.__class__.__name__}')
            raise RatesUnavailableError(endpoint) from e

        try:
            data = response.json()
        except ValueError as e:
            raise RatesUnavailableError(endpoint, response.status_code) from e

        if response.status_code >= 400 or not isinstance(data, dict) or not data.get('success'):
            logger.warning(f'Rates endpoint {endpoint} answered {response.status_code} without a rate')
            raise RatesUnavailableError(endpoint, response.status_code)

        return data

    @staticmethod
    def _rate(data: dict[str, Any], field: str, endpoint: str) -> Decimal:
        value = parse_rate_value(data.get(field))
        if value is None:
            raise RatesUnavailableError(endpoint)
        return value

    async def get_usd_local(self) -> Decimal:
        data = await self._get(self.USD_LOCAL_ENDPOINT)
        return self._rate(data, 'tasa', self.USD_LOCAL_ENDPOINT)

    async def get_eur_usd(self) -> Decimal:
        data = await self._get(self.EUR_USD_ENDPOINT)
        return self._rate(data, 'tasa', self.EUR_USD_ENDPOINT)

    async def get_composite(self) -> RateBoard:
        endpoint = self.COMPOSITE_ENDPOINT
        data = await self._get(endpoint)
        return RateBoard(
            eur_usd=self._rate(data, 'tasa', endpoint),
            usd_local=self._rate(data, 'tasaUSD_VES', endpoint),
            eur_local=self._rate(data, 'tasaEUR_VES', endpoint),
            published_at=data.get('fecha'),
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
