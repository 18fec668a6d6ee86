class ChargeResponse:
    """Gateway reply to a charges request."""

    def __init__(self, data: dict, status_code: int | None = None):
        self.data = data
        self.status_code = status_code

    def is_successful(self) -> bool:
        return "error" not in self.data

    @property
    def transaction_reference(self) -> str | None:
        if self.data.get("object") == "charge":
            return self.data.get("id")
        return None

    @property
    def card_reference(self) -> str | None:
        for key in ("source", "card"):
            card = self.data.get(key)
            if isinstance(card, dict):
                return card.get("id")
        return None

    @property
    def is_captured(self) -> bool:
        return bool(self.data.get("captured"))

    @property
    def message(self) -> str | None:
        error = self.data.get("error")
        if isinstance(error, dict):
            return error.get("message")
        return None

    @property
    def code(self) -> str | None:
        error = self.data.get("error")
        if isinstance(error, dict):
            return error.get("code")
        return None
