from dataclasses import dataclass

from src.models.card import CreditCard
from src.models.errors import ValidationError
from src.models.parameters import TransactionParameters


def serialize_card(card: CreditCard) -> dict:
    """Nested card fields in the shape the charges API expects."""
    card.validate()

    data = {
        "object": "card",
        "number": card.normalized_number,
        "exp_month": int(card.expiry_month),
        "exp_year": card.normalized_expiry_year,
    }
    if card.cvv:
        data["cvc"] = card.cvv
    data["name"] = card.name
    data["address_line1"] = card.address1
    data["address_line2"] = card.address2
    data["address_city"] = card.city
    data["address_zip"] = card.postcode
    data["address_state"] = card.state
    data["address_country"] = card.country
    data["email"] = card.email
    return data


@dataclass(frozen=True)
class CustomerSource:
    """A stored customer, optionally pinned to one of their saved cards."""

    customer_reference: str
    card_reference: str | None = None

    def fields(self) -> dict:
        data = {"customer": self.customer_reference}
        if self.card_reference:
            data["card"] = self.card_reference
        return data


@dataclass(frozen=True)
class TokenSource:
    token: str

    def fields(self) -> dict:
        return {"card": self.token}


@dataclass(frozen=True)
class CardSource:
    card: CreditCard

    def fields(self) -> dict:
        return {"card": serialize_card(self.card)}


PaymentSource = CustomerSource | TokenSource | CardSource


def resolve_payment_source(params: TransactionParameters) -> PaymentSource:
    """Pick how the charge is funded.

    First match wins: customer reference, then token, then raw card. A card
    reference is only ever used together with its owning customer, so on its
    own it does not count and the request fails on ``card``.
    """
    if params.customer_reference:
        return CustomerSource(params.customer_reference, params.card_reference or None)
    if params.token:
        return TokenSource(params.token)
    if params.card is not None:
        return CardSource(params.card)
    raise ValidationError("card")
