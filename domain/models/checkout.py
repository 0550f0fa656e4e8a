from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class SeatCategory(Enum):
    VIP = 'vip'
    PREMIUM = 'premium'
    STANDARD = 'standard'
    BALCONY = 'balcony'


@dataclass(frozen=True)
class Seat:
    id: str
    row: str
    number: int
    category: SeatCategory
    price: Decimal  # EUR


@dataclass(frozen=True)
class CheckoutQuote:
    seat_count: int
    subtotal: Decimal
    discount: Decimal
    total: Decimal
    package: str | None = None
