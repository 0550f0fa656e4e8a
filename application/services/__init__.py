from .checkout_service import CheckoutService
from .rate_service import RateService

__all__ = ['CheckoutService', 'RateService']
