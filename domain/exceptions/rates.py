class RateException(Exception):
    pass


class ProviderError(RateException):
    """Base for a single source failing to produce a usable quote."""

    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        super().__init__(f'{provider_name}: {message}')


class ProviderTimeoutError(ProviderError):
    pass


class ProviderConnectionError(ProviderError):
    pass


class UpstreamHttpError(ProviderError):
    def __init__(self, provider_name: str, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(provider_name, f'HTTP error {status_code}: {message}')


class UnparsableResponseError(ProviderError):
    pass


class RatesUnavailableError(RateException):
    """Raised on the consuming side when an endpoint reports no usable rate."""

    def __init__(self, endpoint: str, status_code: int | None = None):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f'Rates unavailable from {endpoint} (status={status_code})')


class ResolutionFailedError(RateException):
    """A required leg could not be resolved; carries the resolver's reason."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f'Rate resolution failed: {reason.value}')
