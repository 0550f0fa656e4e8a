from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_rate_service
from api.schemas import CompositeRateResponse, EurUsdRateResponse, UsdLocalRateResponse
from application.services import RateService
from domain.exceptions.rates import ResolutionFailedError

router = APIRouter(prefix='/api', tags=['rates'])


@router.get(
	'/get-bcv-rate',
	response_model=UsdLocalRateResponse,
	response_model_exclude_none=True,
	status_code=status.HTTP_200_OK,
	summary='Official USD to local currency rate',
)
async def get_usd_local_rate(
	service: Annotated[RateService, Depends(get_rate_service)],
) -> UsdLocalRateResponse:
	resolution = await service.resolve_usd_local()
	if not resolution.ok:
		raise ResolutionFailedError(resolution.failure)

	quote = resolution.quote
	return UsdLocalRateResponse(
		success=True,
		tasa=float(quote.value),
		price=float(quote.value),
		fuente=quote.source,
		fecha=quote.observed_at,
	)


@router.get(
	'/get-eur-rate',
	response_model=CompositeRateResponse,
	response_model_exclude_none=True,
	status_code=status.HTTP_200_OK,
	summary='EUR/USD, USD/local and EUR/local rates',
)
async def get_composite_rate(
	service: Annotated[RateService, Depends(get_rate_service)],
) -> CompositeRateResponse:
	resolution = await service.resolve_composite()
	if not resolution.ok:
		raise ResolutionFailedError(resolution.failure)

	composite = resolution.composite
	eur_usd = float(composite.bridge.value)
	return CompositeRateResponse(
		success=True,
		tasa=eur_usd,
		rate=eur_usd,
		tasa_eur_ves=float(composite.derived.value),
		tasa_usd_ves=float(composite.primary.value),
		fecha=composite.primary.observed_at,
	)


@router.get(
	'/get-eur-usd',
	response_model=EurUsdRateResponse,
	response_model_exclude_none=True,
	status_code=status.HTTP_200_OK,
	summary='EUR to USD rate only',
)
async def get_eur_usd_rate(
	service: Annotated[RateService, Depends(get_rate_service)],
) -> EurUsdRateResponse:
	resolution = await service.resolve_eur_usd()
	if not resolution.ok:
		raise ResolutionFailedError(resolution.failure)

	quote = resolution.quote
	return EurUsdRateResponse(
		success=True,
		tasa=float(quote.value),
		fuente=quote.source,
		fecha=quote.observed_at,
	)
