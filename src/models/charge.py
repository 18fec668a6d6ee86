from dataclasses import dataclass
from datetime import datetime


@dataclass
class SendAttempt:
    attempt_id: str
    endpoint: str
    operation: str  # "authorize", "purchase", "capture"
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    error: str | None = None
