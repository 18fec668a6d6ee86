from .server import FakeGatewayServer

__all__ = ["FakeGatewayServer"]
