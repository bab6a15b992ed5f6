import re

from unidecode import unidecode

_WHITESPACE = re.compile(r"\s+")


def normalize_comuna(text: str | None, upper: bool = False) -> str:
    """Canonical lookup key for a comuna name.

    Trims, collapses internal whitespace, drops diacritics ("Ñuñoa" -> "nunoa")
    and lower-cases, or upper-cases when ``upper`` is set. Never raises.
    """
    value = _WHITESPACE.sub(" ", str(text or "").strip())
    value = unidecode(value)
    return value.upper() if upper else value.lower()
