import re
from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "$"


def format_clp(amount: float) -> str:
    """Format an amount as Chilean pesos, e.g. 20000 -> "$20.000"."""
    value = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}{CURRENCY_SYMBOL}{grouped}"


def parse_clp(text: str) -> int:
    cleaned = (text or "").strip()
    digits = re.sub(r"\D", "", cleaned)
    if not digits:
        raise ValueError(f"Invalid CLP amount: {text!r}")
    value = int(digits)
    return -value if cleaned.startswith("-") else value
