from dataclasses import dataclass

from src.gateway.messages import DEFAULT_ENDPOINT


@dataclass(frozen=True)
class GatewayConfig:
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = 30
