from dataclasses import dataclass, fields
from datetime import date, datetime, timezone

from src.models.errors import InvalidCreditCardError, ValidationError


# Card keys as they appear in generic parameter bags
_CARD_ALIASES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "expiryMonth": "expiry_month",
    "expiryYear": "expiry_year",
    "billingAddress1": "address1",
    "billingAddress2": "address2",
    "billingCity": "city",
    "billingPostcode": "postcode",
    "billingState": "state",
    "billingCountry": "country",
}


def luhn_valid(number: str) -> bool:
    """Check a card number against the Luhn mod-10 checksum."""
    digits = [int(d) for d in number if d.isdigit()]
    if not digits:
        return False
    total = 0
    for i, digit in enumerate(reversed(digits)):
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def _as_int(value, message: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidCreditCardError(message) from None


@dataclass(frozen=True)
class CreditCard:
    """Raw card details and billing address supplied by the cardholder."""

    number: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    cvv: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    postcode: str | None = None
    state: str | None = None
    country: str | None = None

    @classmethod
    def from_mapping(cls, data: dict) -> "CreditCard":
        """Build from a card dict using camelCase or snake_case keys.

        ``billingCity`` and friends land on the address fields and a single
        ``name`` is split into first and last name. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _CARD_ALIASES.get(key, key)
            if name in known:
                values[name] = value

        full_name = data.get("name")
        if full_name and "first_name" not in values and "last_name" not in values:
            first, _, last = str(full_name).strip().partition(" ")
            values["first_name"] = first
            values["last_name"] = last.strip() or None
        return cls(**values)

    @property
    def name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()

    @property
    def normalized_number(self) -> str:
        return "".join(d for d in (self.number or "") if d.isdigit())

    @property
    def normalized_expiry_year(self) -> int | None:
        # Two-digit years are taken to be in the current century
        if self.expiry_year is None:
            return None
        year = _as_int(self.expiry_year, "Card expiry year is invalid")
        if year < 100:
            year += 2000
        return year

    def is_expired(self, today: date | None = None) -> bool:
        today = today or datetime.now(timezone.utc).date()
        year = self.normalized_expiry_year
        month = _as_int(self.expiry_month, "Card expiry month is invalid")
        return (year, month) < (today.year, today.month)

    def validate(self, today: date | None = None) -> None:
        """Raise if the card cannot be charged.

        Number, expiry month and expiry year are required. The card must not
        be past the end of its expiry month and the number must pass Luhn.
        """
        for field_name in ("number", "expiry_month", "expiry_year"):
            if not getattr(self, field_name):
                raise ValidationError(field_name)

        month = _as_int(self.expiry_month, "Card expiry month is invalid")
        if not 1 <= month <= 12:
            raise InvalidCreditCardError("Card expiry month is invalid")
        if self.is_expired(today):
            raise InvalidCreditCardError("Card has expired")
        if not luhn_valid(self.normalized_number):
            raise InvalidCreditCardError("Card number is invalid")
