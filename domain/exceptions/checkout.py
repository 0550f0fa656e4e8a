class CheckoutException(Exception):
    pass


class InvalidSelectionError(CheckoutException):
    pass
