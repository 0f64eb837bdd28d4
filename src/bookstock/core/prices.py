# ABOUTME: Free-text quantity and price parsing for book import lines.
# ABOUTME: Tolerates currency marks and both comma/dot thousands and decimal conventions.

import re

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_NON_PRICE_RE = re.compile(r"[^\d.,]")

# Longest numeric prefix, e.g. "16000.." -> "16000."
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_quantity(raw: str) -> int:
    """Parse a quantity, keeping only its digits.

    Never fails: anything that does not yield a positive integer becomes 1.
    """
    digits = _NON_DIGIT_RE.sub("", raw)
    quantity = int(digits) if digits else 0
    return quantity if quantity > 0 else 1


def normalize_separators(text: str) -> str:
    """Rewrite a digits/commas/dots string so that '.' is the only decimal mark.

    When both separators appear, whichever occurs last is the decimal mark.
    Repeated separators of a single kind are thousands separators. A lone
    comma is a decimal mark only when at most two characters follow it.
    """
    commas = text.count(",")
    dots = text.count(".")

    if commas and dots:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if commas > 1:
        return text.replace(",", "")
    if dots > 1:
        return text.replace(".", "")
    if commas == 1:
        if len(text) - text.find(",") <= 3:
            return text.replace(",", ".")
        return text.replace(",", "")
    return text


def _leading_float(text: str) -> float:
    match = _LEADING_NUMBER_RE.match(text)
    return float(match.group(0)) if match else 0.0


def parse_price(raw: str) -> float:
    """Parse a price such as "$16.50", "16,000 IQD" or "1.000,50".

    Currency symbols and words are discarded. Strings without digits parse
    to 0.0 and the result is never negative.
    """
    cleaned = _NON_PRICE_RE.sub("", raw)
    price = _leading_float(normalize_separators(cleaned))
    return max(price, 0.0)
