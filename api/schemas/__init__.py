from .requests import CheckoutRequest, SeatRequest
from .responses import (
	CheckoutQuoteResponse,
	CompositeRateResponse,
	EurUsdRateResponse,
	HealthResponse,
	UsdLocalRateResponse,
)

__all__ = [
	'CheckoutRequest',
	'SeatRequest',
	'CheckoutQuoteResponse',
	'CompositeRateResponse',
	'EurUsdRateResponse',
	'HealthResponse',
	'UsdLocalRateResponse',
]
