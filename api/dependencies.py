import logging

import httpx

from application.services import CheckoutService, RateService
from config.settings import Settings, get_settings
from domain.models.rates import CurrencyPair
from infrastructure.providers import (
	BcvProvider,
	ExchangeRateApiProvider,
	FrankfurterProvider,
	RateSourceProvider,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	providers: dict[str, RateSourceProvider] | None = None
	rate_service: RateService | None = None
	checkout_service: CheckoutService | None = None


deps = AppDependencies()


def build_providers(settings: Settings, client: httpx.AsyncClient) -> dict[str, RateSourceProvider]:
	local = settings.LOCAL_CURRENCY
	providers: dict[str, RateSourceProvider] = {
		'usd_local': BcvProvider(
			'dolar',
			CurrencyPair('USD', local),
			base_url=settings.BCV_BASE_URL,
			timeout=settings.BCV_TIMEOUT,
			client=client,
		),
		'bridge_primary': FrankfurterProvider(
			base_url=settings.FRANKFURTER_BASE_URL,
			timeout=settings.FRANKFURTER_TIMEOUT,
			client=client,
		),
		'bridge_secondary': ExchangeRateApiProvider(
			base_url=settings.EXCHANGERATE_API_BASE_URL,
			timeout=settings.EXCHANGERATE_API_TIMEOUT,
			client=client,
		),
	}
	if settings.BCV_EURO_ENABLED:
		providers['eur_local'] = BcvProvider(
			'euro',
			CurrencyPair('EUR', local),
			base_url=settings.BCV_BASE_URL,
			timeout=settings.BCV_TIMEOUT,
			client=client,
		)
	return providers


def build_rate_service(providers: dict[str, RateSourceProvider]) -> RateService:
	return RateService(
		usd_local_provider=providers['usd_local'],
		bridge_primary=providers['bridge_primary'],
		bridge_secondary=providers['bridge_secondary'],
		eur_local_provider=providers.get('eur_local'),
	)


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	longest = max(
		settings.BCV_TIMEOUT, settings.FRANKFURTER_TIMEOUT, settings.EXCHANGERATE_API_TIMEOUT
	)
	deps.http_client = httpx.AsyncClient(timeout=httpx.Timeout(longest))
	deps.providers = build_providers(settings, deps.http_client)
	deps.rate_service = build_rate_service(deps.providers)
	deps.checkout_service = CheckoutService()

	logger.info(f'Dependencies initialized with sources: {", ".join(p.name for p in deps.providers.values())}')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.providers:
		for provider in deps.providers.values():
			await provider.close()
	if deps.http_client:
		await deps.http_client.aclose()

	deps.http_client = None
	deps.providers = None
	deps.rate_service = None
	deps.checkout_service = None
	logger.info('Cleanup complete')


def get_providers() -> dict[str, RateSourceProvider]:
	if deps.providers is None:
		raise RuntimeError('Providers not initialized')
	return deps.providers


def get_rate_service() -> RateService:
	if deps.rate_service is None:
		raise RuntimeError('Rate service not initialized')
	return deps.rate_service


def get_checkout_service() -> CheckoutService:
	if deps.checkout_service is None:
		raise RuntimeError('Checkout service not initialized')
	return deps.checkout_service
