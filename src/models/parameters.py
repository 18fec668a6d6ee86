from dataclasses import dataclass, field, fields
from decimal import Decimal

from src.models.card import CreditCard


# Generic parameter-bag keys that map onto typed fields
_ALIASES = {
    "applicationFee": "application_fee",
    "customerReference": "customer_reference",
    "cardReference": "card_reference",
    "transactionReference": "transaction_reference",
}


@dataclass(frozen=True)
class TransactionParameters:
    """Typed view over the parameters of one gateway operation.

    Callers build this once and hand it to a request; nothing downstream
    mutates it.
    """

    amount: Decimal | str | int | float | None = None
    currency: str | None = None
    description: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    application_fee: Decimal | str | int | float | None = None
    customer_reference: str | None = None
    card_reference: str | None = None
    token: str | None = None
    card: CreditCard | None = None
    transaction_reference: str | None = None

    @classmethod
    def from_mapping(cls, params: dict) -> "TransactionParameters":
        """Build from a key-value parameter bag.

        Accepts both camelCase and snake_case keys; unknown keys are ignored.
        A ``card`` given as a dict goes through CreditCard.from_mapping.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in params.items():
            name = _ALIASES.get(key, key)
            if name in known:
                values[name] = value

        card = values.get("card")
        if isinstance(card, dict):
            values["card"] = CreditCard.from_mapping(card)
        if values.get("metadata") is None:
            values.pop("metadata", None)
        return cls(**values)
