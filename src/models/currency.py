from dataclasses import dataclass

from src.models.errors import InvalidCurrency


@dataclass(frozen=True)
class Currency:
    code: str
    numeric: str
    decimals: int


# ISO 4217 codes accepted by the gateway, with their minor-unit exponent.
_CURRENCIES = {
    c.code: c
    for c in [
        Currency("AED", "784", 2),
        Currency("ARS", "032", 2),
        Currency("AUD", "036", 2),
        Currency("BHD", "048", 3),
        Currency("BIF", "108", 0),
        Currency("BRL", "986", 2),
        Currency("CAD", "124", 2),
        Currency("CHF", "756", 2),
        Currency("CLP", "152", 0),
        Currency("CNY", "156", 2),
        Currency("COP", "170", 2),
        Currency("CZK", "203", 2),
        Currency("DKK", "208", 2),
        Currency("DJF", "262", 0),
        Currency("EUR", "978", 2),
        Currency("GBP", "826", 2),
        Currency("GNF", "324", 0),
        Currency("HKD", "344", 2),
        Currency("HUF", "348", 2),
        Currency("IDR", "360", 2),
        Currency("ILS", "376", 2),
        Currency("INR", "356", 2),
        Currency("ISK", "352", 0),
        Currency("JOD", "400", 3),
        Currency("JPY", "392", 0),
        Currency("KMF", "174", 0),
        Currency("KRW", "410", 0),
        Currency("KWD", "414", 3),
        Currency("MGA", "969", 0),
        Currency("MXN", "484", 2),
        Currency("MYR", "458", 2),
        Currency("NOK", "578", 2),
        Currency("NZD", "554", 2),
        Currency("OMR", "512", 3),
        Currency("PHP", "608", 2),
        Currency("PLN", "985", 2),
        Currency("PYG", "600", 0),
        Currency("RUB", "643", 2),
        Currency("RWF", "646", 0),
        Currency("SAR", "682", 2),
        Currency("SEK", "752", 2),
        Currency("SGD", "702", 2),
        Currency("THB", "764", 2),
        Currency("TND", "788", 3),
        Currency("TRY", "949", 2),
        Currency("TWD", "901", 2),
        Currency("UGX", "800", 0),
        Currency("USD", "840", 2),
        Currency("VND", "704", 0),
        Currency("VUV", "548", 0),
        Currency("XAF", "950", 0),
        Currency("XOF", "952", 0),
        Currency("XPF", "953", 0),
        Currency("ZAR", "710", 2),
    ]
}


def find_currency(code: str | None) -> Currency | None:
    """Look up a currency by ISO code, case-insensitively."""
    if not code:
        return None
    return _CURRENCIES.get(code.upper())


def decimal_places(code: str | None) -> int:
    """Number of minor-unit digits for a currency (2 for USD, 0 for JPY)."""
    currency = find_currency(code)
    if currency is None:
        raise InvalidCurrency(code)
    return currency.decimals
