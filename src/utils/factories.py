import uuid
from datetime import datetime, timezone
from decimal import Decimal

from src.models.card import CreditCard
from src.models.parameters import TransactionParameters


# Passes Luhn; accepted by the fake gateway
VALID_CARD_NUMBER = "4242424242424242"


class CardFactory:
    """Factory for creating CreditCard instances with sensible defaults."""

    @staticmethod
    def create(**overrides) -> CreditCard:
        defaults = {
            "first_name": "Example",
            "last_name": "Customer",
            "number": VALID_CARD_NUMBER,
            "expiry_month": 12,
            "expiry_year": datetime.now(timezone.utc).year + 2,
            "cvv": "123",
            "email": "customer@example.com",
            "address1": "1 Scrubby Creek Road",
            "city": "Scrubby Creek",
            "postcode": "4999",
            "state": "QLD",
            "country": "AU",
        }
        defaults.update(overrides)
        return CreditCard(**defaults)


class ParametersFactory:
    """Factory for creating TransactionParameters with sensible defaults.

    Defaults to a token-funded USD 10.00 charge. Pass ``token=None`` and a
    ``card`` or ``customer_reference`` to switch payment source.
    """

    @staticmethod
    def create(**overrides) -> TransactionParameters:
        defaults = {
            "amount": Decimal("10.00"),
            "currency": "USD",
            "description": "Test authorization",
            "metadata": {"order_id": f"ord_{uuid.uuid4().hex[:8]}"},
            "token": f"tok_{uuid.uuid4().hex[:16]}",
        }
        defaults.update(overrides)
        return TransactionParameters(**defaults)

    @staticmethod
    def with_card(**overrides) -> TransactionParameters:
        card = overrides.pop("card", None) or CardFactory.create()
        overrides.setdefault("token", None)
        return ParametersFactory.create(card=card, **overrides)

    @staticmethod
    def with_customer(**overrides) -> TransactionParameters:
        overrides.setdefault("customer_reference", f"cus_{uuid.uuid4().hex[:14]}")
        overrides.setdefault("token", None)
        return ParametersFactory.create(**overrides)
