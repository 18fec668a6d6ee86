import pytest

from src.gateway.client import GatewayClient
from src.gateway.config import GatewayConfig
from src.gateway.logger import RequestLogger
from src.gateway.retry import RetryManager
from src.gateway_simulator.server import FakeGatewayServer
from src.utils.factories import CardFactory, ParametersFactory


API_KEY = "sk_test_fake_gateway_key"


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def retry_manager():
    return RetryManager()


@pytest.fixture
def logger():
    return RequestLogger()


@pytest.fixture
def gateway_server():
    server = FakeGatewayServer(api_key=API_KEY)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def client(gateway_server, retry_manager, logger):
    config = GatewayConfig(api_key=API_KEY, endpoint=gateway_server.base_url, timeout_seconds=5)
    return GatewayClient(config, retry_manager=retry_manager, logger=logger)


@pytest.fixture
def card_factory():
    return CardFactory


@pytest.fixture
def params_factory():
    return ParametersFactory
