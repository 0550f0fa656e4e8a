from .rates_api import RatesApiClient

__all__ = ['RatesApiClient']
