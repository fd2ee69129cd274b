"""
Parsing helpers for provider dates and locale-formatted numerals
"""
import logging
import math
import re
from typing import Optional, Union

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import NormalizedRate, RawQuote

logger = logging.getLogger(__name__)

_DAY_MONTH_YEAR = re.compile(r"(\d{2})/(\d{2})/(\d{4})")
_GROUPED_THOUSANDS = re.compile(r"\d{1,3}(?:,\d{3})+(?:\.\d+)?")


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Convert a ``DD/MM/YYYY`` date to ISO format

    Args:
        raw: Date string as reported by the provider, or None

    Returns:
        str: ``YYYY-MM-DD`` when ``raw`` is exactly ``DD/MM/YYYY``, otherwise
        ``raw`` unchanged (ISO dates, timestamps and None pass through)
    """
    if raw is None:
        return None

    match = _DAY_MONTH_YEAR.fullmatch(raw)
    if not match:
        return raw

    day, month, year = match.groups()
    return f"{year}-{month}-{day}"


def sanitize_numeral(value: Union[str, float]) -> str:
    """
    Strip locale formatting from a numeral

    Args:
        value: String like "17.4567", "1,234.50" or "17,456700"

    Returns:
        str: Plain numeral using "." as the decimal mark
    """
    text = str(value).strip().replace(" ", "")

    if "," not in text:
        return text
    # "1,234.50" and "1,234" use the comma as a thousands separator
    if "." in text or _GROUPED_THOUSANDS.fullmatch(text):
        return text.replace(",", "")
    # A lone comma that does not group thousands is a decimal mark
    if text.count(",") == 1:
        return text.replace(",", ".")
    return text


def parse_rate_value(value: Union[str, float, None], field_name: str = "rate") -> float:
    """Parse a provider value into a finite, positive float or raise ParseFailure."""
    if value is None or isinstance(value, bool):
        raise ParseFailure(f"missing '{field_name}' field")

    try:
        if isinstance(value, (int, float)):
            parsed = float(value)
        else:
            parsed = float(sanitize_numeral(value))
    except (TypeError, ValueError) as exc:
        raise ParseFailure(f"'{field_name}' value {value!r} is not numeric") from exc

    if not math.isfinite(parsed) or parsed <= 0:
        raise ParseFailure(f"'{field_name}' value {value!r} is not a positive rate")

    return parsed


def normalize_quote(quote: RawQuote) -> NormalizedRate:
    """Turn a raw provider quote into a validated rate with an ISO date."""
    field_name = quote.series_id or quote.kind.value
    rate = NormalizedRate(
        value=parse_rate_value(quote.value, field_name),
        date=normalize_date(quote.raw_date),
    )
    logger.debug("Normalized %s quote %r -> %s", quote.kind.value, quote.value, rate.value)
    return rate
