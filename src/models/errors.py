class GatewayError(Exception):
    """Base class for every error raised by the charges gateway package."""


class InvalidRequestError(GatewayError, ValueError):
    """Request parameters are malformed or incomplete."""


class ValidationError(InvalidRequestError):
    """A mandatory parameter is missing."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"The {field} parameter is required")


class InvalidCurrency(InvalidRequestError):
    """Currency code has no known minor-unit definition."""

    def __init__(self, code: str | None):
        self.code = code
        super().__init__(f"Invalid currency: {code!r}")


class InvalidCreditCardError(InvalidRequestError):
    """Raw card data failed validation (expired, bad checksum)."""


class InvalidResponseError(GatewayError):
    """Gateway answered with a body that is not a JSON object."""
