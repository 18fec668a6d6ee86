import logging

from src.gateway.money import check_precision, to_minor_units
from src.gateway.source import resolve_payment_source
from src.models.errors import ValidationError
from src.models.parameters import TransactionParameters

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.stripe.com/v1"


def charges_endpoint(base: str) -> str:
    return base + "/charges"


class ChargeRequest:
    """Common plumbing for requests against the charges resource."""

    operation = ""

    def __init__(self, params: TransactionParameters, endpoint: str = DEFAULT_ENDPOINT):
        self.params = params
        self.endpoint = endpoint

    def validate(self, *names: str) -> None:
        """Raise ValidationError for the first named parameter that is unset."""
        for name in names:
            value = getattr(self.params, name)
            if value is None or value == "":
                raise ValidationError(name)

    def get_amount_integer(self) -> int:
        check_precision(self.params.amount, self.params.currency)
        return to_minor_units(self.params.amount, self.params.currency)

    def get_application_fee_integer(self) -> int:
        return to_minor_units(self.params.application_fee, self.params.currency)

    def has_application_fee(self) -> bool:
        # A zero fee is indistinguishable from no fee
        fee = self.params.application_fee
        if fee is None or fee == "":
            return False
        try:
            return float(fee) != 0
        except (TypeError, ValueError):
            return True

    def get_data(self) -> dict:
        raise NotImplementedError

    def get_endpoint(self) -> str:
        return charges_endpoint(self.endpoint)


class AuthorizeRequest(ChargeRequest):
    """Reserve funds on a payment instrument without capturing them.

    The resulting charge must be captured separately before the provider's
    authorization window closes (seven days), otherwise it expires.

    Either a customer reference or a card is required. A stored card
    reference only works together with the customer that owns it; otherwise
    pass a token or raw card details.
    """

    operation = "authorize"
    capture_flag = "false"

    def get_data(self) -> dict:
        self.validate("amount", "currency")

        data = {}
        data["amount"] = self.get_amount_integer()
        data["currency"] = self.params.currency.lower()
        data["description"] = self.params.description
        data["metadata"] = dict(self.params.metadata or {})
        data["capture"] = self.capture_flag

        if self.has_application_fee():
            data["application_fee"] = self.get_application_fee_integer()

        source = resolve_payment_source(self.params)
        data.update(source.fields())

        logger.debug(
            "Built %s payload: amount=%s currency=%s source=%s",
            self.operation, data["amount"], data["currency"], type(source).__name__,
        )
        return data


class PurchaseRequest(AuthorizeRequest):
    """Authorize and capture in one step."""

    operation = "purchase"
    capture_flag = "true"


class CaptureRequest(ChargeRequest):
    """Capture a previously authorized charge, optionally for less than authorized."""

    operation = "capture"

    def get_data(self) -> dict:
        self.validate("transaction_reference")

        data = {}
        if self.params.amount is not None and self.params.amount != "":
            self.validate("currency")
            data["amount"] = self.get_amount_integer()
        if self.has_application_fee():
            self.validate("currency")
            data["application_fee"] = self.get_application_fee_integer()
        return data

    def get_endpoint(self) -> str:
        return f"{charges_endpoint(self.endpoint)}/{self.params.transaction_reference}/capture"


def build_authorize_payload(params: TransactionParameters, endpoint: str = DEFAULT_ENDPOINT) -> dict:
    return AuthorizeRequest(params, endpoint).get_data()
