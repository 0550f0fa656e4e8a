from .base import RatePayload, RateSourceProvider
from .bcv import BcvProvider
from .exchangerate_api import ExchangeRateApiProvider
from .frankfurter import FrankfurterProvider, invert_quote
from .parsing import parse_rate_value

__all__ = [
    'RatePayload',
    'RateSourceProvider',
    'BcvProvider',
    'ExchangeRateApiProvider',
    'FrankfurterProvider',
    'invert_quote',
    'parse_rate_value',
]
