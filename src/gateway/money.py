from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from src.models.currency import decimal_places
from src.models.errors import InvalidRequestError


def parse_amount(value, name: str = "amount") -> Decimal:
    """Coerce a caller-supplied amount to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1. Negative or non-numeric
    values are rejected.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidRequestError(f"The {name} parameter must be a number") from None

    if not amount.is_finite():
        raise InvalidRequestError(f"The {name} parameter must be a number")
    if amount < 0:
        raise InvalidRequestError(f"A negative {name} is not allowed")
    return amount


def to_minor_units(amount, currency: str) -> int:
    """Convert a decimal amount to integer minor units of ``currency``.

    Rounds half away from zero, never truncates: 10.005 USD -> 1001.
    """
    places = decimal_places(currency)
    scaled = parse_amount(amount) * (Decimal(10) ** places)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def check_precision(amount, currency: str, name: str = "amount") -> None:
    """Reject amounts with more fractional digits than the currency has."""
    places = decimal_places(currency)
    value = parse_amount(amount, name)
    if isinstance(amount, float):
        # Binary noise past eight significant digits does not count
        value = Decimal(format(amount, ".8g"))
    exponent = value.normalize().as_tuple().exponent
    if isinstance(exponent, int) and -exponent > places:
        raise InvalidRequestError(
            f"Amount precision is too high for currency {currency.upper()}"
        )
