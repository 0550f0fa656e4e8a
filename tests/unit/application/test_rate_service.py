# nosec B101

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from application.services.rate_service import RateService, derive_rate
from domain.models.rates import (
    COMPUTED_SOURCE,
    CurrencyPair,
    FailureReason,
    RateQuote,
    SourceResult,
    SourceStatus,
)
from infrastructure.providers.base import RateSourceProvider

USD_VES = CurrencyPair('USD', 'VES')
EUR_USD = CurrencyPair('EUR', 'USD')
EUR_VES = CurrencyPair('EUR', 'VES')


def ok(source: str, pair: CurrencyPair, value: str, observed_at: str | None = None) -> SourceResult:
    quote = RateQuote(source=source, pair=pair, value=Decimal(value), observed_at=observed_at)
    return SourceResult(source=source, status=SourceStatus.OK, quote=quote)


def failed(source: str, status: SourceStatus = SourceStatus.UNPARSABLE) -> SourceResult:
    return SourceResult(source=source, status=status, error=f'{source} failed')


def fake_provider(result: SourceResult):
    provider = AsyncMock(spec=RateSourceProvider)
    provider.fetch = AsyncMock(return_value=result)
    return provider


def make_service(usd_local, bridge_primary, bridge_secondary, eur_local=None):
    return RateService(
        usd_local_provider=fake_provider(usd_local),
        bridge_primary=fake_provider(bridge_primary),
        bridge_secondary=fake_provider(bridge_secondary),
        eur_local_provider=fake_provider(eur_local) if eur_local is not None else None,
    )


class TestCompositeHappyPath:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'usd_local, eur_usd',
        [('40.00', '1.0870'), ('36.5', '1.05'), ('0.0001', '1234.5678'), ('1', '1')],
    )
    async def test_derived_rate_is_bridge_times_primary(self, usd_local, eur_usd):
        service = make_service(
            ok('bcv-dolar', USD_VES, usd_local),
            ok('frankfurter', EUR_USD, eur_usd),
            ok('exchangerate-api', EUR_USD, '9.99'),
        )

        resolution = await service.resolve_composite()

        assert resolution.ok
        composite = resolution.composite
        assert composite.derived.pair == EUR_VES
        assert composite.derived.value == Decimal(eur_usd) * Decimal(usd_local)
        assert composite.derived.source == COMPUTED_SOURCE
        assert not composite.derived_is_direct

    @pytest.mark.asyncio
    async def test_direct_quote_wins_over_computed(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40.00'),
            ok('frankfurter', EUR_USD, '1.0870'),
            ok('exchangerate-api', EUR_USD, '1.08'),
            eur_local=ok('bcv-euro', EUR_VES, '44.10'),
        )

        resolution = await service.resolve_composite()

        assert resolution.ok
        assert resolution.composite.derived.value == Decimal('44.10')
        assert resolution.composite.derived.source == 'bcv-euro'
        assert resolution.composite.derived_is_direct

    @pytest.mark.asyncio
    async def test_failed_direct_quote_falls_back_to_computed(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40.00'),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.08'),
            eur_local=failed('bcv-euro', SourceStatus.HTTP_ERROR),
        )

        resolution = await service.resolve_composite()

        assert resolution.ok
        assert resolution.composite.derived.value == Decimal('44.0000')
        assert not resolution.composite.derived_is_direct

    @pytest.mark.asyncio
    async def test_primary_bridge_preferred_over_secondary(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_composite()

        assert resolution.composite.bridge.source == 'frankfurter'
        assert resolution.composite.bridge.value == Decimal('1.10')

    @pytest.mark.asyncio
    async def test_secondary_bridge_used_when_primary_fails(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            failed('frankfurter', SourceStatus.TIMEOUT),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_composite()

        assert resolution.ok
        assert resolution.composite.bridge.source == 'exchangerate-api'
        assert resolution.composite.derived.value == Decimal('48.00')

    @pytest.mark.asyncio
    async def test_every_source_is_queried_once(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
            eur_local=ok('bcv-euro', EUR_VES, '44'),
        )

        resolution = await service.resolve_composite()

        for provider in service.providers:
            provider.fetch.assert_awaited_once()
        assert len(resolution.sources) == 4


class TestCompositeFailures:

    @pytest.mark.asyncio
    async def test_usd_local_timeout_fails_whole_resolution(self):
        service = make_service(
            failed('bcv-dolar', SourceStatus.TIMEOUT),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
            eur_local=ok('bcv-euro', EUR_VES, '44'),
        )

        resolution = await service.resolve_composite()

        assert not resolution.ok
        assert resolution.composite is None
        assert resolution.failure is FailureReason.TIMEOUT

    @pytest.mark.asyncio
    async def test_usd_local_bad_data_is_primary_unavailable(self):
        service = make_service(
            failed('bcv-dolar', SourceStatus.UNPARSABLE),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_composite()

        assert resolution.failure is FailureReason.PRIMARY_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_usd_local_unreachable(self):
        service = make_service(
            failed('bcv-dolar', SourceStatus.UNREACHABLE),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_composite()

        assert resolution.failure is FailureReason.UNREACHABLE
        assert resolution.failure.is_transient

    @pytest.mark.asyncio
    async def test_both_bridges_failing_is_bridge_unavailable(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            failed('frankfurter', SourceStatus.HTTP_ERROR),
            failed('exchangerate-api', SourceStatus.TIMEOUT),
            eur_local=ok('bcv-euro', EUR_VES, '44'),
        )

        resolution = await service.resolve_composite()

        assert not resolution.ok
        assert resolution.composite is None
        assert resolution.failure is FailureReason.BRIDGE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_both_bridges_timing_out_is_timeout(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            failed('frankfurter', SourceStatus.TIMEOUT),
            failed('exchangerate-api', SourceStatus.TIMEOUT),
        )

        resolution = await service.resolve_composite()

        assert resolution.failure is FailureReason.TIMEOUT

    @pytest.mark.asyncio
    async def test_bridges_timing_out_or_unreachable_is_unreachable(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            failed('frankfurter', SourceStatus.TIMEOUT),
            failed('exchangerate-api', SourceStatus.UNREACHABLE),
        )

        resolution = await service.resolve_composite()

        assert resolution.failure is FailureReason.UNREACHABLE

    @pytest.mark.asyncio
    async def test_primary_leg_failure_reported_before_bridge_failure(self):
        service = make_service(
            failed('bcv-dolar', SourceStatus.HTTP_ERROR),
            failed('frankfurter', SourceStatus.HTTP_ERROR),
            failed('exchangerate-api', SourceStatus.HTTP_ERROR),
        )

        resolution = await service.resolve_composite()

        assert resolution.failure is FailureReason.PRIMARY_UNAVAILABLE


class TestSingleLegResolutions:

    @pytest.mark.asyncio
    async def test_resolve_usd_local_success(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '36.50', observed_at='2025-10-01'),
            failed('frankfurter'),
            failed('exchangerate-api'),
        )

        resolution = await service.resolve_usd_local()

        assert resolution.ok
        assert resolution.quote.value == Decimal('36.50')
        assert resolution.quote.observed_at == '2025-10-01'
        service.bridge_primary.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolve_usd_local_failure(self):
        service = make_service(
            failed('bcv-dolar', SourceStatus.TIMEOUT),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_usd_local()

        assert resolution.failure is FailureReason.TIMEOUT
        assert resolution.quote is None

    @pytest.mark.asyncio
    async def test_resolve_eur_usd_prefers_primary(self):
        service = make_service(
            failed('bcv-dolar'),
            ok('frankfurter', EUR_USD, '1.10'),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_eur_usd()

        assert resolution.quote.source == 'frankfurter'
        service.usd_local_provider.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolve_eur_usd_falls_back_to_secondary(self):
        service = make_service(
            failed('bcv-dolar'),
            failed('frankfurter', SourceStatus.HTTP_ERROR),
            ok('exchangerate-api', EUR_USD, '1.20'),
        )

        resolution = await service.resolve_eur_usd()

        assert resolution.quote.value == Decimal('1.20')

    @pytest.mark.asyncio
    async def test_resolve_eur_usd_both_failing(self):
        service = make_service(
            ok('bcv-dolar', USD_VES, '40'),
            failed('frankfurter', SourceStatus.UNPARSABLE),
            failed('exchangerate-api', SourceStatus.HTTP_ERROR),
        )

        resolution = await service.resolve_eur_usd()

        assert resolution.failure is FailureReason.BRIDGE_UNAVAILABLE


def test_derive_rate_rejects_unchainable_pairs():
    bridge = RateQuote(source='x', pair=EUR_USD, value=Decimal('1.1'))
    other = RateQuote(source='y', pair=CurrencyPair('GBP', 'VES'), value=Decimal('50'))

    with pytest.raises(ValueError):
        derive_rate(bridge, other)
