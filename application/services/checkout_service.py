import logging
from decimal import Decimal

from domain.exceptions.checkout import InvalidSelectionError
from domain.models.checkout import CheckoutQuote, Seat

logger = logging.getLogger(__name__)

MAX_SEATS_PER_PURCHASE = 5

# seat count -> unit price in EUR; the open-ended tier applies from its count up
PACKAGE_PRICES: dict[int, Decimal] = {
    3: Decimal('10'),
    4: Decimal('10'),
    5: Decimal('9'),
}


class CheckoutService:
    def __init__(self, max_seats: int = MAX_SEATS_PER_PURCHASE):
        self.max_seats = max_seats

    def _package_unit_price(self, seat_count: int) -> Decimal | None:
        eligible = [count for count in PACKAGE_PRICES if count <= seat_count]
        if not eligible:
            return None
        return PACKAGE_PRICES[max(eligible)]

    def quote(self, seats: list[Seat]) -> CheckoutQuote:
        if not seats:
            raise InvalidSelectionError('No seats selected')
        if len(seats) > self.max_seats:
            raise InvalidSelectionError(f'At most {self.max_seats} seats per purchase')

        seat_ids = [seat.id for seat in seats]
        if len(set(seat_ids)) != len(seat_ids):
            raise InvalidSelectionError('Seat selected more than once')

        seat_count = len(seats)
        subtotal = sum((seat.price for seat in seats), Decimal('0'))
        total = subtotal
        package = None

        unit_price = self._package_unit_price(seat_count)
        if unit_price is not None and unit_price * seat_count < subtotal:
            total = unit_price * seat_count
            package = f'{seat_count} entradas - €{unit_price} c/u'

        logger.debug(f'Checkout quote for {seat_count} seats: {subtotal} -> {total}')

        return CheckoutQuote(
            seat_count=seat_count,
            subtotal=subtotal,
            discount=subtotal - total,
            total=total,
            package=package,
        )
