from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class UsdLocalRateResponse(BaseModel):
	success: bool = Field(..., description='Whether a rate could be resolved')
	tasa: float | None = Field(None, description='Local currency per 1 USD')
	price: float | None = Field(None, description='Alias of tasa')
	fuente: str | None = Field(None, description='Source of the rate')
	fecha: str | None = Field(None, description='Publication date reported by the source')
	error: str | None = None

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'success': True,
				'tasa': 36.5,
				'price': 36.5,
				'fuente': 'bcv-dolar',
				'fecha': '2025-10-01',
			}
		}
	)


class CompositeRateResponse(BaseModel):
	success: bool = Field(..., description='Whether every required leg was resolved')
	tasa: float | None = Field(None, description='USD per 1 EUR')
	rate: float | None = Field(None, description='Alias of tasa')
	tasa_eur_ves: float | None = Field(None, alias='tasaEUR_VES', description='Local currency per 1 EUR')
	tasa_usd_ves: float | None = Field(None, alias='tasaUSD_VES', description='Local currency per 1 USD')
	fecha: str | None = None
	error: str | None = None

	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'success': True,
				'tasa': 1.087,
				'rate': 1.087,
				'tasaEUR_VES': 43.48,
				'tasaUSD_VES': 40.0,
				'fecha': '2025-10-01',
			}
		},
	)


class EurUsdRateResponse(BaseModel):
	success: bool
	tasa: float | None = Field(None, description='USD per 1 EUR')
	fuente: str | None = None
	fecha: str | None = None
	error: str | None = None


class CheckoutQuoteResponse(BaseModel):
	seat_count: int
	subtotal: Decimal = Field(..., description='Sum of seat prices in EUR')
	discount: Decimal = Field(..., description='Package discount in EUR')
	total: Decimal = Field(..., description='Amount to pay in EUR')
	package: str | None = Field(None, description='Applied package, if any')


class HealthResponse(BaseModel):
	status: str
	service: str
	sources: list[dict[str, str | float]]
