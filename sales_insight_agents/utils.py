"""
Utility functions for sales-insight-agents.
"""

import math
import re
from typing import Dict, Iterable, List

_LEADING_NUMBER = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_amount(text) -> float:
    """
    Parse a textual sales amount like "1,234.50".

    Thousands separators are stripped, then the leading decimal number is
    read (trailing junk is ignored). Anything without a leading number,
    including None and "", is 0.
    """
    if text is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(text).replace(',', ''))
    if not match:
        return 0.0
    value = float(match.group(0))
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    floor = math.floor(value)
    return int(floor + 1 if value - floor >= 0.5 else floor)


def format_money(value: float) -> str:
    """Rounded dollar figure with thousands separators: 1234.5 -> '1,235'."""
    return f"{round_half_up(value):,}"


def distinct_values(entities: Iterable[Dict], key: str) -> List[str]:
    """
    Return the non-empty values of `key` in first-seen order, each once.

    Example:
        distinct_values(map_data, key='state')  # ['Texas', 'California']
    """
    seen = {}
    for entity in entities:
        v = entity.get(key)
        if v and v not in seen:
            seen[v] = True
    return list(seen)
