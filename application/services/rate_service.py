import asyncio
import logging
from datetime import UTC, datetime

from domain.models.rates import (
    COMPUTED_SOURCE,
    CompositeRate,
    CurrencyPair,
    FailureReason,
    RateQuote,
    RateResolution,
    SourceResult,
    SourceStatus,
)
from infrastructure.providers.base import RateSourceProvider

logger = logging.getLogger(__name__)


def _failure_for(results: list[SourceResult], fallback: FailureReason) -> FailureReason:
    """Pick the reason for a failed leg from every source that served it."""
    statuses = {r.status for r in results}
    if statuses == {SourceStatus.TIMEOUT}:
        return FailureReason.TIMEOUT
    if statuses and statuses <= {SourceStatus.TIMEOUT, SourceStatus.UNREACHABLE}:
        return FailureReason.UNREACHABLE
    return fallback


def derive_rate(bridge: RateQuote, primary: RateQuote) -> RateQuote:
    """EUR->local as (EUR->USD) x (USD->local)."""
    if bridge.pair.quote != primary.pair.base:
        raise ValueError(f'Cannot chain {bridge.pair} with {primary.pair}')
    return RateQuote(
        source=COMPUTED_SOURCE,
        pair=CurrencyPair(bridge.pair.base, primary.pair.quote),
        value=bridge.value * primary.value,
        observed_at=primary.observed_at,
    )


class RateService:
    """Resolves the EUR/USD/local rates from independent, unreliable sources.

    All sources of one resolution are queried concurrently; each one carries its
    own timeout, so the slowest source bounds the total latency. Nothing is cached
    or retried: a failed leg fails the resolution.
    """

    def __init__(
        self,
        usd_local_provider: RateSourceProvider,
        bridge_primary: RateSourceProvider,
        bridge_secondary: RateSourceProvider,
        eur_local_provider: RateSourceProvider | None = None,
    ):
        self.usd_local_provider = usd_local_provider
        self.bridge_primary = bridge_primary
        self.bridge_secondary = bridge_secondary
        self.eur_local_provider = eur_local_provider

    @property
    def providers(self) -> list[RateSourceProvider]:
        providers = [self.usd_local_provider, self.bridge_primary, self.bridge_secondary]
        if self.eur_local_provider is not None:
            providers.append(self.eur_local_provider)
        return providers

    async def resolve_usd_local(self) -> RateResolution:
        result = await self.usd_local_provider.fetch()
        if not result.ok:
            failure = _failure_for([result], FailureReason.PRIMARY_UNAVAILABLE)
            logger.error(f'USD->local rate unavailable: {failure.value}')
            return RateResolution(failure=failure, sources=(result,))
        return RateResolution(quote=result.quote, sources=(result,))

    async def resolve_eur_usd(self) -> RateResolution:
        primary, secondary = await asyncio.gather(
            self.bridge_primary.fetch(), self.bridge_secondary.fetch()
        )
        bridge = self._pick_bridge(primary, secondary)
        if bridge is None:
            failure = _failure_for([primary, secondary], FailureReason.BRIDGE_UNAVAILABLE)
            logger.error(f'EUR->USD rate unavailable: {failure.value}')
            return RateResolution(failure=failure, sources=(primary, secondary))
        return RateResolution(quote=bridge, sources=(primary, secondary))

    async def resolve_composite(self) -> RateResolution:
        tasks = [
            self.usd_local_provider.fetch(),
            self.bridge_primary.fetch(),
            self.bridge_secondary.fetch(),
        ]
        if self.eur_local_provider is not None:
            tasks.append(self.eur_local_provider.fetch())

        results = await asyncio.gather(*tasks)
        usd_local, bridge_primary, bridge_secondary = results[:3]
        direct = results[3] if len(results) > 3 else None
        sources = tuple(results)

        if not usd_local.ok:
            failure = _failure_for([usd_local], FailureReason.PRIMARY_UNAVAILABLE)
            logger.error(f'Composite rate failed, USD->local leg: {failure.value}')
            return RateResolution(failure=failure, sources=sources)

        bridge = self._pick_bridge(bridge_primary, bridge_secondary)
        if bridge is None:
            failure = _failure_for(
                [bridge_primary, bridge_secondary], FailureReason.BRIDGE_UNAVAILABLE
            )
            logger.error(f'Composite rate failed, EUR->USD leg: {failure.value}')
            return RateResolution(failure=failure, sources=sources)

        expected_pair = CurrencyPair(bridge.pair.base, usd_local.quote.pair.quote)
        if direct is not None and direct.ok and direct.quote.pair == expected_pair:
            derived = direct.quote
        else:
            derived = derive_rate(bridge, usd_local.quote)

        composite = CompositeRate(
            primary=usd_local.quote,
            bridge=bridge,
            derived=derived,
            resolved_at=datetime.now(UTC),
        )
        logger.info(
            f'Composite rate resolved: {bridge.pair}={bridge.value} ({bridge.source}), '
            f'{usd_local.quote.pair}={usd_local.quote.value}, '
            f'{derived.pair}={derived.value} ({derived.source})'
        )
        return RateResolution(composite=composite, sources=sources)

    def _pick_bridge(self, primary: SourceResult, secondary: SourceResult) -> RateQuote | None:
        if primary.ok:
            return primary.quote
        if secondary.ok:
            logger.warning(
                f'Primary EUR->USD source {primary.source} failed, using {secondary.source}'
            )
            return secondary.quote
        return None
