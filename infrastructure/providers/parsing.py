import re
from decimal import Decimal, InvalidOperation
from typing import Any

_WHITESPACE = re.compile(r'\s+')


def _normalize_separators(text: str) -> str:
    """Turn '1.234,56', '1,234.56', '36,50' into a plain dotted decimal string."""
    has_comma = ',' in text
    has_dot = '.' in text

    if has_comma and has_dot:
        # Whichever separator comes last is the decimal one
        if text.rfind(',') > text.rfind('.'):
            return text.replace('.', '').replace(',', '.')
        return text.replace(',', '')

    if has_comma:
        if text.count(',') == 1:
            return text.replace(',', '.')
        return text.replace(',', '')

    # A lone separator is decimal; repeated ones group thousands
    if text.count('.') > 1:
        return text.replace('.', '')

    return text


def parse_rate_value(raw: Any) -> Decimal | None:
    """Parse an upstream rate field into a positive finite Decimal.

    Returns None for anything that is not a usable rate.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = _WHITESPACE.sub('', raw)
        if not text:
            return None
        try:
            value = Decimal(_normalize_separators(text))
        except InvalidOperation:
            return None
    else:
        return None

    if not value.is_finite() or value <= 0:
        return None
    return value
