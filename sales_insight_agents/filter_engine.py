"""
Filters - narrow a sequence of sales records by case-insensitive substring
constraints on their text fields.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from .data_store import CATEGORY, CITY, PRODUCT_NAME, REGION, STATE, get_field

logger = logging.getLogger(__name__)


def match_substring(items: Sequence[Mapping], field: str, needle: str) -> List[Mapping]:
    """Keep items whose `field` contains `needle`, ignoring case."""
    needle = needle.lower()
    return [item for item in items if needle in get_field(item, field).lower()]


@dataclass(frozen=True)
class SalesFilter:
    """
    Optional constraints on state, city, region and category. Each present
    field narrows the working set (AND across dimensions); an absent field
    places no constraint on that dimension.

    date_range is carried through to result summaries but is not applied
    to the records.

    Usage:
        f = SalesFilter(state='Texas', category='furn')
        rows = f.apply(store.records)
    """

    state: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    category: Optional[str] = None
    date_range: Optional[str] = None

    _FIELDS = (
        ('state', STATE),
        ('city', CITY),
        ('region', REGION),
        ('category', CATEGORY),
    )

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'SalesFilter':
        """Build from a camelCase or snake_case mapping; empty values are dropped."""
        data = data or {}
        return cls(
            state=data.get('state') or None,
            city=data.get('city') or None,
            region=data.get('region') or None,
            category=data.get('category') or None,
            date_range=data.get('dateRange') or data.get('date_range') or None,
        )

    @property
    def location(self) -> Optional[str]:
        return self.state or self.city or self.region

    def as_dict(self) -> Dict[str, str]:
        """Present fields only, in the camelCase form used in API payloads."""
        result = {}
        for attr, _ in self._FIELDS:
            value = getattr(self, attr)
            if value:
                result[attr] = value
        if self.date_range:
            result['dateRange'] = self.date_range
        return result

    def apply(self, records: Sequence[Mapping]) -> List[Mapping]:
        """Apply state -> city -> region -> category in that order."""
        items = list(records)
        for attr, column in self._FIELDS:
            value = getattr(self, attr)
            if not value:
                continue
            before = len(items)
            items = match_substring(items, column, value)
            logger.debug("%s filter '%s': %d -> %d records", attr, value, before, len(items))
        return items


@dataclass(frozen=True)
class ProductFilter:
    """Product-name and category substring constraints for product insights."""

    product_name: Optional[str] = None
    category: Optional[str] = None

    def apply(self, records: Sequence[Mapping]) -> List[Mapping]:
        items = list(records)
        if self.product_name:
            items = match_substring(items, PRODUCT_NAME, self.product_name)
        if self.category:
            items = match_substring(items, CATEGORY, self.category)
        return items
