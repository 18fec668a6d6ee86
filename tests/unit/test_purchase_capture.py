import pytest

from src.gateway.messages import AuthorizeRequest, CaptureRequest, PurchaseRequest
from src.models.errors import ValidationError
from src.models.parameters import TransactionParameters
from src.utils.factories import ParametersFactory


class TestPurchaseRequest:
    """Purchase shares the authorize payload but captures immediately."""

    @pytest.mark.unit
    def test_capture_is_true(self):
        assert PurchaseRequest(ParametersFactory.create()).get_data()["capture"] == "true"

    @pytest.mark.unit
    def test_same_fields_as_authorize(self):
        params = ParametersFactory.with_customer(application_fee="0.50")
        authorize = AuthorizeRequest(params).get_data()
        purchase = PurchaseRequest(params).get_data()
        authorize.pop("capture")
        purchase.pop("capture")
        assert authorize == purchase

    @pytest.mark.unit
    def test_endpoint(self):
        assert PurchaseRequest(ParametersFactory.create()).get_endpoint().endswith("/v1/charges")


class TestCaptureRequest:
    """Tests for CaptureRequest."""

    @pytest.mark.unit
    def test_requires_transaction_reference(self):
        with pytest.raises(ValidationError, match="transaction_reference"):
            CaptureRequest(TransactionParameters()).get_data()

    @pytest.mark.unit
    def test_full_capture_sends_no_fields(self):
        params = TransactionParameters(transaction_reference="ch_1")
        assert CaptureRequest(params).get_data() == {}

    @pytest.mark.unit
    def test_partial_capture_amount(self):
        params = TransactionParameters(transaction_reference="ch_1", amount="7.25", currency="USD")
        assert CaptureRequest(params).get_data() == {"amount": 725}

    @pytest.mark.unit
    def test_partial_capture_needs_currency(self):
        params = TransactionParameters(transaction_reference="ch_1", amount="7.25")
        with pytest.raises(ValidationError, match="currency"):
            CaptureRequest(params).get_data()

    @pytest.mark.unit
    def test_application_fee(self):
        params = TransactionParameters(transaction_reference="ch_1", currency="USD", application_fee="0.30")
        assert CaptureRequest(params).get_data() == {"application_fee": 30}

    @pytest.mark.unit
    def test_endpoint(self):
        params = TransactionParameters(transaction_reference="ch_abc")
        request = CaptureRequest(params, endpoint="https://api.example.com/v1")
        assert request.get_endpoint() == "https://api.example.com/v1/charges/ch_abc/capture"
