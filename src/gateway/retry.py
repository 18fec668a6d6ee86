from datetime import datetime, timezone
from email.utils import parsedate_to_datetime


class RetryManager:
    """Decides whether a failed charges call is worth repeating, and when.

    Connection failures, timeouts, 429 and 5xx replies are transient. A card
    decline (402) or any other 4xx is the gateway's final answer.
    """

    DEFAULT_SCHEDULE = [1, 2, 4, 8]  # seconds

    # Replies that may carry a Retry-After hint
    RATE_LIMIT_CODES = {429, 503}

    def __init__(
        self,
        schedule: list[float] | None = None,
        max_retries: int | None = None,
        max_delay: float = 60,
    ):
        self.schedule = schedule or self.DEFAULT_SCHEDULE
        self.max_retries = max_retries if max_retries is not None else len(self.schedule)
        self.max_delay = max_delay

    def should_retry(self, status_code: int | None) -> bool:
        if status_code is None:
            return True
        return status_code == 429 or status_code >= 500

    def next_delay(self, attempt: int, retry_after: str | None = None) -> float:
        """Seconds to wait before retry number ``attempt`` (0-indexed).

        A usable ``retry_after`` header value wins over the schedule.
        """
        hinted = self.parse_retry_after(retry_after)
        if hinted is not None:
            return min(hinted, self.max_delay)
        step = min(attempt, len(self.schedule) - 1)
        return min(float(self.schedule[step]), self.max_delay)

    @staticmethod
    def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
        """Read a Retry-After header given as seconds or as an HTTP date."""
        if not value:
            return None
        value = value.strip()
        if value.isdigit():
            return float(value)
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        return max((when - now).total_seconds(), 0.0)

    def has_attempts_remaining(self, attempt: int) -> bool:
        return attempt < self.max_retries
