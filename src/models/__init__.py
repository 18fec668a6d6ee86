from .errors import (
    GatewayError,
    InvalidCreditCardError,
    InvalidCurrency,
    InvalidRequestError,
    InvalidResponseError,
    ValidationError,
)
from .currency import Currency, decimal_places, find_currency
from .card import CreditCard
from .parameters import TransactionParameters
from .charge import SendAttempt

__all__ = [
    "GatewayError", "InvalidCreditCardError", "InvalidCurrency",
    "InvalidRequestError", "InvalidResponseError", "ValidationError",
    "Currency", "decimal_places", "find_currency",
    "CreditCard",
    "TransactionParameters",
    "SendAttempt",
]
