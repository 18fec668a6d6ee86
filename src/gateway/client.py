import logging
import time
import uuid
from datetime import datetime, timezone

import requests

from src.gateway.config import GatewayConfig
from src.gateway.encoding import encode_form
from src.gateway.logger import RequestLogger
from src.gateway.messages import AuthorizeRequest, CaptureRequest, ChargeRequest, PurchaseRequest
from src.gateway.response import ChargeResponse
from src.gateway.retry import RetryManager
from src.models.charge import SendAttempt
from src.models.errors import GatewayError, InvalidResponseError
from src.models.parameters import TransactionParameters

logger = logging.getLogger(__name__)


class GatewayClient:
    """Sends charge requests to the gateway with retry support."""

    def __init__(
        self,
        config: GatewayConfig,
        retry_manager: RetryManager | None = None,
        logger: RequestLogger | None = None,
    ):
        self.config = config
        self.retry_manager = retry_manager or RetryManager()
        self.logger = logger or RequestLogger()
        self.session = requests.Session()
        self.session.auth = (config.api_key, "")

    def authorize(self, params: TransactionParameters) -> AuthorizeRequest:
        return AuthorizeRequest(params, self.config.endpoint)

    def purchase(self, params: TransactionParameters) -> PurchaseRequest:
        return PurchaseRequest(params, self.config.endpoint)

    def capture(self, params: TransactionParameters) -> CaptureRequest:
        return CaptureRequest(params, self.config.endpoint)

    def _attempt(self, request: ChargeRequest, form: list[tuple[str, str]]):
        url = request.get_endpoint()
        start = time.monotonic()
        resp = None
        error = None

        try:
            resp = self.session.post(url, data=form, timeout=self.config.timeout_seconds)
        except requests.exceptions.Timeout:
            error = "timeout"
        except requests.exceptions.ConnectionError:
            error = "connection_error"
        except requests.exceptions.RequestException as e:
            error = str(e)

        elapsed_ms = (time.monotonic() - start) * 1000

        attempt = SendAttempt(
            attempt_id=f"att_{uuid.uuid4().hex[:16]}",
            endpoint=url,
            operation=request.operation,
            status_code=resp.status_code if resp is not None else None,
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            error=error,
        )
        self.logger.log(attempt)
        return attempt, resp

    @staticmethod
    def _parse(resp: requests.Response) -> ChargeResponse:
        try:
            data = resp.json()
        except ValueError:
            raise InvalidResponseError(
                f"Gateway returned a non-JSON body (HTTP {resp.status_code})"
            ) from None
        if not isinstance(data, dict):
            raise InvalidResponseError(f"Gateway returned {type(data).__name__}, expected an object")
        return ChargeResponse(data, resp.status_code)

    def send(self, request: ChargeRequest) -> ChargeResponse:
        """Send a request once. Parameter errors are raised before any I/O."""
        form = encode_form(request.get_data())
        attempt, resp = self._attempt(request, form)
        if resp is None:
            raise GatewayError(f"{request.operation} request failed: {attempt.error}")
        return self._parse(resp)

    def send_with_retry(
        self,
        request: ChargeRequest,
        delay_factor: float = 1.0,
    ) -> tuple[ChargeResponse | None, list[SendAttempt]]:
        """Send with automatic retries on transient failures.

        Args:
            request: The charge request to send.
            delay_factor: Multiplier for retry delays (use 0 in tests to skip waits).

        Returns:
            The last gateway response (None if the gateway was never reached)
            and every attempt made.
        """
        form = encode_form(request.get_data())
        attempts = []
        retry_count = 0

        while True:
            attempt, resp = self._attempt(request, form)
            attempts.append(attempt)

            if attempt.status_code is not None and 200 <= attempt.status_code < 300:
                break

            if not self.retry_manager.should_retry(attempt.status_code):
                break

            if not self.retry_manager.has_attempts_remaining(retry_count):
                break

            retry_after = None
            if resp is not None and attempt.status_code in self.retry_manager.RATE_LIMIT_CODES:
                retry_after = resp.headers.get("Retry-After")
            delay = self.retry_manager.next_delay(retry_count, retry_after) * delay_factor
            if delay > 0:
                logger.info("Retrying %s in %.1fs", request.operation, delay)
                time.sleep(delay)

            retry_count += 1

        if resp is None:
            return None, attempts
        return self._parse(resp), attempts
