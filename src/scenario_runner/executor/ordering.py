"""
Canonical ordering used as the oracle for UI-triggered sorts.

The storefront sorts on the server; the expected order is computed here
from the values read off the page before the sort was applied, so the
check never relies on the sort it is verifying.
"""

import re
import unicodedata
from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Sequence, Tuple

# Currency marks are symbols or upper-case codes before the amount,
# anything short after it ("€12.00", "USD 12", "12,00 zł")
_PRICE = re.compile(
    r"^\s*(?P<pre>[^\d\s\-a-z]{0,3})\s*"
    r"(?P<num>-?\d[\d\s.,']*)"
    r"\s*(?P<post>[^\d\s]{0,3})\s*$"
)
_GROUPING = re.compile(r"[\s']")


def parse_price(text: str) -> Optional[Decimal]:
    """
    Parse a displayed price or number

    Accepts currency symbols and codes around the amount, thousands
    separators, and a comma as decimal mark ("€1,234.50", "23,90 €",
    "$ 7", "1 234,00 zł"). Returns None when the text is not an amount.
    """
    if text is None:
        return None

    match = _PRICE.match(str(text))
    if not match:
        return None

    number = _GROUPING.sub("", match.group("num")).rstrip(".,")
    negative = number.startswith("-")
    number = number.lstrip("-")

    last_dot = number.rfind(".")
    last_comma = number.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        # The separator appearing last is the decimal mark
        decimal_mark = "." if last_dot > last_comma else ","
        thousands = "," if decimal_mark == "." else "."
        number = number.replace(thousands, "").replace(decimal_mark, ".")
    elif last_comma >= 0:
        number = _single_separator(number, ",")
    elif last_dot >= 0:
        number = _single_separator(number, ".")

    try:
        amount = Decimal(number)
    except InvalidOperation:
        return None


def _single_separator(number: str, mark: str) -> str:
    # One mark followed by exactly three digits groups thousands ("1,234",
    # "1.234"), unless the integer part is zero ("0.125"); more than one
    # occurrence always groups thousands
    groups = number.split(mark)
    if len(groups) > 2 or (len(groups[-1]) == 3 and groups[0] != "0"):
        return "".join(groups)
    return ".".join(groups)


def text_key(value: str) -> Tuple[str, str]:
    """Case-insensitive, accent-folded sort key with the raw text as tiebreak"""
    raw = (value or "").strip()
    folded = unicodedata.normalize("NFKD", raw)
    folded = "".join(c for c in folded if not unicodedata.combining(c))
    return folded.casefold(), raw


def sort_keys(values: Sequence[str]) -> List[Any]:
    """Amounts when every value parses as one, text keys otherwise"""
    amounts = [parse_price(v) for v in values]
    if values and all(a is not None for a in amounts):
        return amounts
    return [text_key(v) for v in values]


def sort_values(values: Iterable[str]) -> List[str]:
    """
    Return a new list with the values in canonical ascending order

    Prices and numbers are ordered by amount when every value parses as
    one; any other list is ordered as text.
    """
    items = list(values)
    keys = sort_keys(items)
    order = sorted(range(len(items)), key=lambda i: keys[i])
    return [items[i] for i in order]


def same_order(actual: Sequence[str], expected: Sequence[str]) -> bool:
    """
    Compare a displayed sequence with the expected one

    Values with equal sort keys ("€12.00" twice, or two products at the
    same price) may appear in any order within their run, since the
    server gives no order among ties.
    """
    actual, expected = list(actual), list(expected)
    if len(actual) != len(expected):
        return False

    keys = sort_keys(expected)
    start = 0
    for end in range(1, len(expected) + 1):
        if end == len(expected) or keys[end] != keys[start]:
            if Counter(actual[start:end]) != Counter(expected[start:end]):
                return False
            start = end
    return True
