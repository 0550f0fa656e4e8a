import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
from pydantic import BaseModel, ValidationError

from domain.exceptions.rates import (
    ProviderConnectionError,
    ProviderError,
    ProviderTimeoutError,
    UnparsableResponseError,
    UpstreamHttpError,
)
from domain.models.rates import CurrencyPair, RateQuote, SourceResult, SourceStatus
from infrastructure.providers.parsing import parse_rate_value

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[ProviderError], SourceStatus] = {
    ProviderTimeoutError: SourceStatus.TIMEOUT,
    ProviderConnectionError: SourceStatus.UNREACHABLE,
    UpstreamHttpError: SourceStatus.HTTP_ERROR,
    UnparsableResponseError: SourceStatus.UNPARSABLE,
}


class RatePayload(BaseModel, ABC):
    """Response shape of one provider."""

    @abstractmethod
    def rate_candidates(self, quote_currency: str) -> list[Any]:
        """Raw rate fields in the order they should be tried."""

    def published_at(self) -> str | None:
        return None


class RateSourceProvider(ABC):
    """A base class for rate sources, handling the HTTP call and its time budget.

    Each instance serves exactly one currency pair. ``fetch_quote`` raises a
    ``ProviderError`` subclass; ``fetch`` never raises and reports a ``SourceResult``.
    """

    payload_model: ClassVar[type[RatePayload]]

    def __init__(
        self,
        base_url: str,
        name: str,
        pair: CurrencyPair,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.name = name
        self.pair = pair
        self.timeout = timeout
        self.headers = {'accept': 'application/json', **(headers or {})}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @abstractmethod
    def _build_request(self) -> tuple[str, dict[str, str]]:
        """Endpoint path and query params for the one request this source needs."""

    async def _request(self, endpoint: str, params: dict[str, str] | None = None) -> Any:
        url = f'{self.base_url}/{endpoint.lstrip("/")}'
        start_time = time.perf_counter()
        try:
            # wait_for bounds the whole exchange, httpx's timeout only each phase
            response = await asyncio.wait_for(
                self._client.get(url, params=params, headers=self.headers, timeout=self.timeout),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except (TimeoutError, httpx.TimeoutException) as e:
            raise ProviderTimeoutError(self.name, f'no response within {self.timeout}s') from e
        except httpx.HTTPStatusError as e:
            raise UpstreamHttpError(self.name, e.response.status_code, e.response.text[:200]) from e
        except httpx.RequestError as e:
            raise ProviderConnectionError(self.name, f'request failed: {e.__class__.__name__}') from e
        except Exception as e:
            # e.g. httpx.InvalidURL from a misconfigured base URL, or a stream error
            logger.exception(f'Unexpected error calling {self.name}')
            raise ProviderConnectionError(self.name, f'unexpected error: {e.__class__.__name__}') from e

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug(f'{self.name} answered {endpoint} in {elapsed_ms}ms')

        try:
            return response.json()
        except ValueError as e:
            raise UnparsableResponseError(self.name, 'response is not valid JSON') from e

    def _parse(self, data: Any) -> RateQuote:
        try:
            payload = self.payload_model.model_validate(data)
        except ValidationError as e:
            raise UnparsableResponseError(self.name, f'unexpected response shape: {e.error_count()} errors') from e

        for raw in payload.rate_candidates(self.pair.quote):
            value = parse_rate_value(raw)
            if value is not None:
                return RateQuote(
                    source=self.name,
                    pair=self.pair,
                    value=value,
                    observed_at=payload.published_at(),
                )

        raise UnparsableResponseError(self.name, f'no usable {self.pair} rate in response')

    async def fetch_quote(self) -> RateQuote:
        endpoint, params = self._build_request()
        data = await self._request(endpoint, params)
        return self._parse(data)

    async def fetch(self) -> SourceResult:
        try:
            quote = await self.fetch_quote()
        except ProviderError as e:
            status = _STATUS_BY_ERROR.get(type(e), SourceStatus.UNPARSABLE)
            logger.warning(f'Rate source {self.name} unavailable ({status.value}): {e}')
            return SourceResult(
                source=self.name,
                status=status,
                http_status=getattr(e, 'status_code', None),
                error=str(e),
            )

        logger.info(f'Rate source {self.name}: {quote.pair} = {quote.value}')
        return SourceResult(source=self.name, status=SourceStatus.OK, quote=quote)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
