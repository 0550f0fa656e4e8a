from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_checkout_service
from api.schemas import CheckoutQuoteResponse, CheckoutRequest
from application.services import CheckoutService
from domain.models.checkout import Seat

router = APIRouter(prefix='/api/checkout', tags=['checkout'])


@router.post(
	'/quote',
	response_model=CheckoutQuoteResponse,
	status_code=status.HTTP_200_OK,
	summary='Price a seat selection',
)
async def quote_checkout(
	request: CheckoutRequest,
	service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> CheckoutQuoteResponse:
	seats = [
		Seat(id=s.id, row=s.row, number=s.number, category=s.category, price=s.price)
		for s in request.seats
	]
	quote = service.quote(seats)
	return CheckoutQuoteResponse(
		seat_count=quote.seat_count,
		subtotal=quote.subtotal,
		discount=quote.discount,
		total=quote.total,
		package=quote.package,
	)
