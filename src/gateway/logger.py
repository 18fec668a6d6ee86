import logging
import threading
from collections import Counter, deque

from src.models.charge import SendAttempt

logger = logging.getLogger(__name__)


class RequestLogger:
    """Thread-safe record of gateway send attempts, oldest first.

    Every attempt is also written to the module logger: transport failures
    and error replies at WARNING, everything else at INFO. ``max_entries``
    bounds the in-memory history for long-running clients.
    """

    def __init__(self, max_entries: int | None = None):
        self._attempts: deque[SendAttempt] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(self, attempt: SendAttempt) -> None:
        with self._lock:
            self._attempts.append(attempt)

        if attempt.error is not None:
            logger.warning("%s to %s failed: %s", attempt.operation, attempt.endpoint, attempt.error)
        elif attempt.status_code >= 400:
            logger.warning(
                "%s to %s returned %d in %.1fms",
                attempt.operation, attempt.endpoint, attempt.status_code, attempt.response_time_ms,
            )
        else:
            logger.info(
                "%s to %s returned %d in %.1fms",
                attempt.operation, attempt.endpoint, attempt.status_code, attempt.response_time_ms,
            )

    def get_attempts(self, operation: str | None = None) -> list[SendAttempt]:
        with self._lock:
            return [a for a in self._attempts if operation is None or a.operation == operation]

    def get_failed_attempts(self) -> list[SendAttempt]:
        with self._lock:
            return [a for a in self._attempts if a.status_code is None or a.status_code >= 400]

    def last_attempt(self) -> SendAttempt | None:
        with self._lock:
            return self._attempts[-1] if self._attempts else None

    def status_counts(self) -> dict[int | None, int]:
        """Attempts per HTTP status; None counts transport failures."""
        with self._lock:
            return dict(Counter(a.status_code for a in self._attempts))

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()
