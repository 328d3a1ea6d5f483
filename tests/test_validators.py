import pytest

from services.validators import (
    is_valid_email,
    normalize_email,
    normalize_number,
    parse_rate,
)


def test_normalize_number():
    assert normalize_number("12 345,67") == "12345.67"
    assert normalize_number(" 1 234 ") == "1234"
    assert normalize_number("1 234,5") == "1234.5"
    assert normalize_number(None) is None
    assert normalize_number(1234) == "1234"
    assert normalize_number("$45.50") == "45.5"
    assert normalize_number("10*10") == "100"


def test_parse_rate():
    assert parse_rate("") is None
    assert parse_rate(None) is None
    assert parse_rate("45") == 45.0
    assert parse_rate("45,5 $") == 45.5
    assert parse_rate("1 200,5") == 1200.5
    assert parse_rate("10*10") == 100.0
    with pytest.raises(ValueError):
        parse_rate("1..2")


@pytest.mark.parametrize(
    "text, expected",
    [("1e3", 1000.0), ("1e-3", 0.001), ("2.5E2", 250.0), ("€ 1e3", 1000.0)],
)
def test_parse_rate_reads_exponent_notation(text, expected):
    assert parse_rate(text) == expected


@pytest.mark.parametrize("text", ["abc", "12abc", "10 usd", "1x2", "nan", "inf", "$"])
def test_parse_rate_rejects_letters(text):
    with pytest.raises(ValueError, match="Некорректная ставка"):
        parse_rate(text)


def test_email_helpers():
    assert normalize_email("  Ann@Example.COM ") == "Ann@Example.COM"
    assert normalize_email("no-at-sign") == "no-at-sign"
    assert is_valid_email("a@x.com")
    assert is_valid_email("a@localhost")
    assert not is_valid_email("not-an-email")
    assert not is_valid_email("a b@x.com")
    assert not is_valid_email("")
