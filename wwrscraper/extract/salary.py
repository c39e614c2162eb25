"""
Salary text parsing.

Turns free-form compensation strings as they appear on postings
("$80,000 - $100,000 per year", "€50k", "USD 40 - 55 / hour") into a
SalaryInfo with currency, bounds and pay interval.
"""
import re

from wwrscraper.items import SalaryInfo

CURRENCY_CODES = re.compile(r"\b(USD|EUR|GBP|CAD|AUD|CHF|JPY)\b", re.IGNORECASE)
CURRENCY_SYMBOLS = {"$": "USD", "€": "EUR", "£": "GBP", "¥": "JPY"}

# Checked in this order, first hit wins
INTERVALS = (
    ("year", re.compile(r"(?:\bper\s+|\ban?\s+|/\s*)(?:year|yr|annum)\b|\b(?:yearly|annual(?:ly)?|p\.?a\.?)\b", re.IGNORECASE)),
    ("month", re.compile(r"(?:\bper\s+|\ban?\s+|/\s*)(?:month|mo)\b|\bmonthly\b", re.IGNORECASE)),
    ("week", re.compile(r"(?:\bper\s+|\ban?\s+|/\s*)(?:week|wk)\b|\bweekly\b", re.IGNORECASE)),
    ("day", re.compile(r"(?:\bper\s+|\ban?\s+|/\s*)day\b|\bdaily\b", re.IGNORECASE)),
    ("hour", re.compile(r"(?:\bper\s+|\ban?\s+|/\s*)(?:hour|hr)\b|\bhourly\b", re.IGNORECASE)),
)

NUMBER = re.compile(r"(\d+(?:[.,]\d+)*)(?:\s?([kK])(?![a-zA-Z]))?")

# Amounts above this with no interval cue are taken to be annual
ANNUAL_THRESHOLD = 1000


def parse_salary(text):
    if not text or not str(text).strip():
        return SalaryInfo()

    text = str(text).strip()
    low, high = _bounds(text)
    interval = _interval(text)
    if interval is None and low is not None and low > ANNUAL_THRESHOLD:
        interval = "year"

    return SalaryInfo(
        text=text,
        min=low,
        max=high,
        currency=_currency(text),
        interval=interval,
    )


def _currency(text):
    code = CURRENCY_CODES.search(text)
    if code:
        return code.group(1).upper()
    for symbol, currency in CURRENCY_SYMBOLS.items():
        if symbol in text:
            return currency
    return None


def _interval(text):
    for name, pattern in INTERVALS:
        if pattern.search(text):
            return name
    return None


def _bounds(text):
    values = [_to_number(digits, suffix) for digits, suffix in NUMBER.findall(text)]
    if not values:
        return None, None
    if len(values) == 1:
        return values[0], values[0]
    first, second = values[:2]
    return min(first, second), max(first, second)


def _to_number(digits, suffix):
    digits = digits.replace(",", "")
    if "." in digits:
        head, _, tail = digits.rpartition(".")
        # "50.000" is a European thousands separator, "1.5k" is a decimal
        if len(tail) == 3 and not suffix:
            digits = digits.replace(".", "")
        else:
            digits = head.replace(".", "") + "." + tail
    value = float(digits)
    if suffix:
        value *= 1000
    return int(value) if value.is_integer() else value
