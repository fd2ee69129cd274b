import pytest

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import QuoteKind, RawQuote
from mxn_usd.parser import normalize_date, normalize_quote, parse_rate_value, sanitize_numeral


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("15/03/2024", "2024-03-15"),
        ("01/12/1999", "1999-12-01"),
        ("31/02/2024", "2024-02-31"),
        ("99/99/2024", "2024-99-99"),
    ],
)
def test_normalize_date_reorders_day_month_year(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "2024-03-15",
        "2024-03-15T12:00:00+0000",
        "1/3/2024",
        "15/03/24",
        " 15/03/2024",
        "15/03/2024 ",
        "",
        "N/E",
    ],
)
def test_normalize_date_leaves_other_strings_unchanged(raw):
    assert normalize_date(raw) == raw


def test_normalize_date_passes_none_through():
    assert normalize_date(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("17.4567", "17.4567"),
        ("1,234.50", "1234.50"),
        ("1,234", "1234"),
        ("12,345,678", "12345678"),
        ("17,456700", "17.456700"),
        (" 17.10 ", "17.10"),
        (0.0542, "0.0542"),
    ],
)
def test_sanitize_numeral(raw, expected):
    assert sanitize_numeral(raw) == expected


def test_parse_rate_value_accepts_numbers_and_strings():
    assert parse_rate_value(17.23) == 17.23
    assert parse_rate_value("17,456700") == pytest.approx(17.4567)
    assert parse_rate_value("1,017.50") == 1017.5


@pytest.mark.parametrize("value", [None, "", "N/E", "abc", "0", "-1.5", 0, -2.0, "nan", "inf", True])
def test_parse_rate_value_rejects_invalid_values(value):
    with pytest.raises(ParseFailure):
        parse_rate_value(value)


def test_parse_failure_names_the_field():
    with pytest.raises(ParseFailure, match="SF43718"):
        parse_rate_value("N/E", "SF43718")


def test_normalize_quote_parses_value_and_date():
    quote = RawQuote(value="17,456700", raw_date="15/03/2024", kind=QuoteKind.FIX, series_id="SF43718")

    normalized = normalize_quote(quote)

    assert normalized.value == pytest.approx(17.4567)
    assert normalized.date == "2024-03-15"
