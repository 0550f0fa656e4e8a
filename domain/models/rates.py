from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

COMPUTED_SOURCE = 'computed'


@dataclass(frozen=True)
class CurrencyPair:
    base: str
    quote: str

    def inverse(self) -> 'CurrencyPair':
        return CurrencyPair(base=self.quote, quote=self.base)

    def __str__(self) -> str:
        return f'{self.base}/{self.quote}'


@dataclass(frozen=True)
class RateQuote:
    """One published rate: 1 unit of ``pair.base`` buys ``value`` of ``pair.quote``."""

    source: str
    pair: CurrencyPair
    value: Decimal
    observed_at: str | None = None  # publication date as reported upstream

    def __post_init__(self):
        if not isinstance(self.value, Decimal):
            raise TypeError(f'Rate value must be a Decimal, got {type(self.value).__name__}')
        if not self.value.is_finite() or self.value <= 0:
            raise ValueError(f'Invalid rate {self.value} for {self.pair}')

    def inverted(self, source: str | None = None) -> 'RateQuote':
        return RateQuote(
            source=source or self.source,
            pair=self.pair.inverse(),
            value=Decimal(1) / self.value,
            observed_at=self.observed_at,
        )


@dataclass(frozen=True)
class CompositeRate:
    primary: RateQuote  # USD -> local
    bridge: RateQuote  # EUR -> USD
    derived: RateQuote  # EUR -> local
    resolved_at: datetime

    @property
    def derived_is_direct(self) -> bool:
        return self.derived.source != COMPUTED_SOURCE


class SourceStatus(Enum):
    OK = 'ok'
    TIMEOUT = 'timeout'
    UNREACHABLE = 'unreachable'
    HTTP_ERROR = 'http_error'
    UNPARSABLE = 'unparsable'


@dataclass(frozen=True)
class SourceResult:
    """Outcome of one adapter call. Only ``OK`` carries a quote."""

    source: str
    status: SourceStatus
    quote: RateQuote | None = None
    http_status: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SourceStatus.OK and self.quote is not None


class FailureReason(Enum):
    PRIMARY_UNAVAILABLE = 'primary_unavailable'
    BRIDGE_UNAVAILABLE = 'bridge_unavailable'
    TIMEOUT = 'timeout'
    UNREACHABLE = 'unreachable'

    @property
    def is_transient(self) -> bool:
        return self in (FailureReason.TIMEOUT, FailureReason.UNREACHABLE)


@dataclass(frozen=True)
class RateResolution:
    """Success/failure envelope returned by the resolver.

    Exactly one of ``composite``/``quote`` is set on success, depending on which
    resolution was asked for; ``failure`` is set otherwise.
    """

    composite: CompositeRate | None = None
    quote: RateQuote | None = None
    failure: FailureReason | None = None
    sources: tuple[SourceResult, ...] = ()

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class RateBoard:
    """Rates as the composite endpoint publishes them to the UI."""

    eur_usd: Decimal
    usd_local: Decimal
    eur_local: Decimal
    published_at: str | None = None
