import base64
import json
import re
import threading
import time
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Self
from urllib.parse import parse_qsl

DECLINED_CARD_NUMBER = "4000000000000002"

_CHARGES_PATH = re.compile(r"^/v1/charges/?$")
_CAPTURE_PATH = re.compile(r"^/v1/charges/(?P<charge_id>[^/]+)/capture/?$")
_BRACKET_KEY = re.compile(r"^(?P<root>[^\[]+)\[(?P<child>[^\]]+)\]$")


def _unflatten(pairs: list[tuple[str, str]]) -> dict:
    """Turn ``card[number]=4242`` style form fields back into nested dicts."""
    data: dict = {}
    for key, value in pairs:
        match = _BRACKET_KEY.match(key)
        if match:
            data.setdefault(match["root"], {})[match["child"]] = value
        else:
            data[key] = value
    return data


def _error(error_type: str, message: str, code: str | None = None, param: str | None = None) -> dict:
    error = {"type": error_type, "message": message}
    if code:
        error["code"] = code
    if param:
        error["param"] = param
    return {"error": error}


class _ChargesHandler(BaseHTTPRequestHandler):
    """HTTP request handler emulating the charges resource."""

    def _reply(self, code: int, body: dict, headers: dict | None = None) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(json.dumps(body).encode())

    def _authorized(self, api_key: str) -> bool:
        header = self.headers.get("Authorization", "")
        if not header.startswith("Basic "):
            return False
        try:
            decoded = base64.b64decode(header[6:]).decode("utf-8")
        except ValueError:
            return False
        return decoded.split(":", 1)[0] == api_key

    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length).decode("utf-8")

        server_config = self.server.config  # type: ignore[attr-defined]

        if server_config["response_delay"] > 0:
            time.sleep(server_config["response_delay"])

        if server_config["api_key"] and not self._authorized(server_config["api_key"]):
            self._reply(401, _error("invalid_request_error", "Invalid API Key provided"))
            return

        form = parse_qsl(body, keep_blank_values=True)
        params = _unflatten(form)

        with server_config["lock"]:
            server_config["received_requests"].append({
                "path": self.path,
                "params": params,
                "form": form,
                "headers": dict(self.headers),
            })

        # Forced failure for retry tests
        code = server_config["response_code"]
        if code >= 400:
            headers = {}
            if server_config["retry_after"] is not None:
                headers["Retry-After"] = str(server_config["retry_after"])
            self._reply(code, _error("api_error", f"Simulated HTTP {code}"), headers)
            return

        capture_match = _CAPTURE_PATH.match(self.path)
        if _CHARGES_PATH.match(self.path):
            self._create_charge(server_config, params)
        elif capture_match:
            self._capture_charge(server_config, capture_match["charge_id"], params)
        else:
            self._reply(404, _error("invalid_request_error", f"Unrecognized request URL: {self.path}"))

    def _create_charge(self, server_config: dict, params: dict) -> None:
        for required in ("amount", "currency"):
            if not params.get(required):
                self._reply(400, _error(
                    "invalid_request_error", f"Missing required param: {required}.", param=required,
                ))
                return

        try:
            amount = int(params["amount"])
        except ValueError:
            self._reply(400, _error("invalid_request_error", "Invalid integer: amount", param="amount"))
            return

        if "customer" not in params and "card" not in params:
            self._reply(400, _error(
                "invalid_request_error", "Must provide source or customer.", param="card",
            ))
            return

        card = params.get("card")
        if isinstance(card, dict) and card.get("number") == DECLINED_CARD_NUMBER:
            self._reply(402, _error("card_error", "Your card was declined.", code="card_declined"))
            return

        charge = {
            "id": f"ch_{uuid.uuid4().hex[:16]}",
            "object": "charge",
            "amount": amount,
            "currency": params["currency"],
            "captured": params.get("capture", "true") == "true",
            "description": params.get("description"),
            "metadata": params.get("metadata", {}),
            "customer": params.get("customer"),
            "source": {"id": f"card_{uuid.uuid4().hex[:16]}", "object": "card"},
        }
        if "application_fee" in params:
            charge["application_fee"] = int(params["application_fee"])

        with server_config["lock"]:
            server_config["charges"][charge["id"]] = charge
        self._reply(200, charge)

    def _capture_charge(self, server_config: dict, charge_id: str, params: dict) -> None:
        with server_config["lock"]:
            charge = server_config["charges"].get(charge_id)
            if charge is None:
                code, body = 404, _error(
                    "invalid_request_error", f"No such charge: {charge_id}", param="id",
                )
            elif charge["captured"]:
                code, body = 400, _error(
                    "invalid_request_error",
                    f"Charge {charge_id} has already been captured.",
                    code="charge_already_captured",
                )
            else:
                charge["captured"] = True
                if "amount" in params:
                    charge["amount_captured"] = int(params["amount"])
                code, body = 200, dict(charge)
        self._reply(code, body)

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class FakeGatewayServer:
    """Configurable HTTP server that stands in for the charges API."""

    def __init__(self, host: str = "127.0.0.1", port: int = 0, api_key: str | None = None):
        self._host = host
        self._port = port
        self._config = {
            "response_code": 200,
            "response_delay": 0,
            "retry_after": None,
            "api_key": api_key,
            "received_requests": [],
            "charges": {},
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_response_code(self, code: int) -> Self:
        self._config["response_code"] = code
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def set_retry_after(self, value: str | int | None) -> Self:
        """Retry-After header sent with forced error replies."""
        self._config["retry_after"] = value
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _ChargesHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        # Get the actual port (useful when port=0)
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}/v1"

    @property
    def port(self) -> int:
        return self._port

    def get_received_requests(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received_requests"])

    def get_request_count(self) -> int:
        with self._config["lock"]:
            return len(self._config["received_requests"])

    def get_charge(self, charge_id: str) -> dict | None:
        with self._config["lock"]:
            charge = self._config["charges"].get(charge_id)
            return dict(charge) if charge else None

    def clear(self) -> None:
        with self._config["lock"]:
            self._config["received_requests"].clear()
            self._config["charges"].clear()
