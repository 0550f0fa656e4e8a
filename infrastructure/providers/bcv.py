from typing import Any, ClassVar

import httpx
from pydantic import ConfigDict, field_validator

from domain.models.rates import CurrencyPair
from infrastructure.providers.base import RatePayload, RateSourceProvider


class BcvPayload(RatePayload):
    """bcvapi.tech answer. The rate has shipped under several field names."""

    model_config = ConfigDict(extra='ignore')

    RATE_FIELDS: ClassVar[tuple[str, ...]] = ('tasa', 'precio', 'precio_dolar', 'valor')

    tasa: Any = None
    precio: Any = None
    precio_dolar: Any = None
    valor: Any = None
    fecha: str | None = None

    @field_validator('fecha', mode='before')
    @classmethod
    def stringify_date(cls, v: Any):
        return None if v is None else str(v)

    def rate_candidates(self, quote_currency: str) -> list[Any]:
        return [getattr(self, field) for field in self.RATE_FIELDS]

    def published_at(self) -> str | None:
        return self.fecha or None


class BcvProvider(RateSourceProvider):
    """Official Banco Central de Venezuela rate for one foreign currency."""

    BASE_URL = 'https://bcvapi.tech/api/v1'
    payload_model = BcvPayload

    def __init__(
        self,
        endpoint: str,
        pair: CurrencyPair,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.endpoint = endpoint
        super().__init__(
            base_url=base_url,
            name=f'bcv-{endpoint}',
            pair=pair,
            timeout=timeout,
            client=client,
            headers={'User-Agent': 'Mozilla/5.0'},
        )

    def _build_request(self) -> tuple[str, dict[str, str]]:
        return self.endpoint, {}
