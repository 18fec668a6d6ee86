from .client import GatewayClient
from .config import GatewayConfig
from .encoding import encode_form
from .logger import RequestLogger
from .messages import (
    AuthorizeRequest,
    CaptureRequest,
    PurchaseRequest,
    build_authorize_payload,
    charges_endpoint,
)
from .money import to_minor_units
from .response import ChargeResponse
from .retry import RetryManager
from .source import CardSource, CustomerSource, TokenSource, resolve_payment_source, serialize_card

__all__ = [
    "GatewayClient", "GatewayConfig", "RequestLogger", "RetryManager",
    "AuthorizeRequest", "PurchaseRequest", "CaptureRequest", "ChargeResponse",
    "build_authorize_payload", "charges_endpoint", "encode_form", "to_minor_units",
    "CustomerSource", "TokenSource", "CardSource",
    "resolve_payment_source", "serialize_card",
]
