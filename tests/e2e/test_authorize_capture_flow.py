"""E2E tests for authorize-then-capture against the fake gateway."""

import threading

import pytest

from src.models.parameters import TransactionParameters
from src.utils.factories import ParametersFactory


pytestmark = pytest.mark.e2e


class TestAuthorizeCaptureFlow:
    """Full authorization lifecycle using the real client and fake gateway."""

    def test_authorize_then_capture(self, client, gateway_server):
        auth = client.send(client.authorize(ParametersFactory.create(amount="25.00")))
        assert auth.is_successful()
        charge_id = auth.transaction_reference
        assert gateway_server.get_charge(charge_id)["captured"] is False

        capture = client.send(client.capture(TransactionParameters(transaction_reference=charge_id)))
        assert capture.is_successful()
        assert capture.is_captured is True
        assert gateway_server.get_charge(charge_id)["captured"] is True

        paths = [r["path"] for r in gateway_server.get_received_requests()]
        assert paths == ["/v1/charges", f"/v1/charges/{charge_id}/capture"]

    def test_partial_capture(self, client, gateway_server):
        auth = client.send(client.authorize(ParametersFactory.create(amount="25.00")))
        params = TransactionParameters(transaction_reference=auth.transaction_reference, amount="10.00", currency="USD")

        capture = client.send(client.capture(params))

        assert capture.is_successful()
        assert capture.data["amount_captured"] == 1000

    def test_double_capture_is_rejected(self, client):
        auth = client.send(client.authorize(ParametersFactory.create()))
        params = TransactionParameters(transaction_reference=auth.transaction_reference)
        client.send(client.capture(params))

        again = client.send(client.capture(params))

        assert again.is_successful() is False
        assert again.code == "charge_already_captured"

    def test_capture_unknown_charge(self, client):
        response = client.send(client.capture(TransactionParameters(transaction_reference="ch_missing")))
        assert response.status_code == 404
        assert response.is_successful() is False

    def test_purchase_is_captured_immediately(self, client, gateway_server):
        response = client.send(client.purchase(ParametersFactory.with_customer()))
        assert response.is_captured is True
        assert gateway_server.get_received_requests()[0]["params"]["capture"] == "true"

    def test_attempts_are_logged_per_operation(self, client, logger):
        auth = client.send(client.authorize(ParametersFactory.create()))
        client.send(client.capture(TransactionParameters(transaction_reference=auth.transaction_reference)))

        assert len(logger.get_attempts("authorize")) == 1
        assert len(logger.get_attempts("capture")) == 1
        assert logger.get_failed_attempts() == []

    def test_concurrent_captures_capture_once(self, client, gateway_server):
        auth = client.send(client.authorize(ParametersFactory.create()))
        params = TransactionParameters(transaction_reference=auth.transaction_reference)
        results = []
        results_lock = threading.Lock()

        def capture():
            response = client.send(client.capture(params))
            with results_lock:
                results.append(response)

        threads = [threading.Thread(target=capture) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert len(results) == 5
        assert sum(r.is_successful() for r in results) == 1
        assert all(r.code == "charge_already_captured" for r in results if not r.is_successful())
        assert gateway_server.get_charge(auth.transaction_reference)["captured"] is True
