from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.checkout import SeatCategory


class SeatRequest(BaseModel):
	id: str = Field(..., min_length=1)
	row: str = Field(..., min_length=1, max_length=3)
	number: int = Field(..., ge=1)
	category: SeatCategory = SeatCategory.STANDARD
	price: Decimal = Field(..., ge=0)

	@field_validator('row')
	@classmethod
	def uppercase_row(cls, v: str):
		return v.upper()


class CheckoutRequest(BaseModel):
	seats: list[SeatRequest] = Field(..., min_length=1)

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'seats': [
					{'id': 'A-1', 'row': 'A', 'number': 1, 'category': 'vip', 'price': 12},
					{'id': 'A-2', 'row': 'A', 'number': 2, 'category': 'vip', 'price': 12},
					{'id': 'A-3', 'row': 'A', 'number': 3, 'category': 'vip', 'price': 12},
				]
			}
		}
	)
