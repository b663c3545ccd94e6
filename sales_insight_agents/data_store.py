"""
SalesDataStore - the load-once, read-only sales dataset.

The CSV is read a single time when the service starts. Every row becomes a
read-only mapping of header -> text value, and the whole sequence is held in a
tuple so request handlers can share it without locking.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# Columns the aggregation code reads. Absent columns just yield "".
STATE = 'State'
CITY = 'City'
REGION = 'Region'
CATEGORY = 'Category'
PRODUCT_NAME = 'Product Name'
SALES = 'Sales'
ORDER_DATE = 'Order Date'


class DataLoadError(Exception):
    pass


def parse_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into trimmed values.

    A double quote toggles the in-quotes state and is dropped; a comma only
    separates values outside quotes. There is no lookahead, so an escaped
    quote ("") simply toggles twice.

        parse_csv_line('a, "1,234.50" ,b')  # ['a', '1,234.50', 'b']
    """
    result = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            result.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

    result.append(''.join(current).strip())
    return result


def _clean(value: str) -> str:
    return value.replace('"', '').strip()


class SalesDataStore:
    """
    Immutable in-memory sales records.

    Build one at startup with SalesDataStore.load(path) and hand it to the
    engines that need it. A store that failed to load is simply empty.

    Usage:
        store = SalesDataStore.load("data/train.csv")
        len(store), store.headers, store.records[0]['City']
    """

    def __init__(self, records: Iterable[Mapping[str, str]] = (), headers: Sequence[str] = ()):
        self._records: Tuple[Mapping[str, str], ...] = tuple(
            MappingProxyType(dict(r)) for r in records
        )
        self._headers: Tuple[str, ...] = tuple(headers)

    @property
    def records(self) -> Tuple[Mapping[str, str], ...]:
        return self._records

    @property
    def headers(self) -> Tuple[str, ...]:
        return self._headers

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, str]]) -> 'SalesDataStore':
        """Build a store from ready-made row dicts. Headers come from the first row."""
        records = list(records)
        headers = list(records[0].keys()) if records else []
        return cls(records, headers)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'SalesDataStore':
        """
        Read and parse the CSV at `path`.

        Never raises: an unreadable or empty file is logged and gives an empty
        store, and a line that fails to parse is logged and skipped.
        """
        try:
            lines = cls._read_lines(Path(path))
        except DataLoadError as e:
            logger.error("Error loading CSV %s: %s", path, e)
            return cls()

        if not lines:
            logger.error("CSV file is empty: %s", path)
            return cls()

        headers = [_clean(h) for h in parse_csv_line(lines[0])]
        logger.info("CSV headers: %s", headers)

        records = []
        for line_number, line in enumerate(lines[1:], start=2):
            try:
                records.append(cls._parse_row(line, headers))
            except Exception as e:
                logger.error("Error parsing line %d: %s", line_number, e)

        store = cls(records, headers)
        logger.info("Loaded %d sales records from %s", len(store), path)
        if records:
            logger.debug("Sample record: %s", records[0])
        return store

    @staticmethod
    def _read_lines(path: Path) -> List[str]:
        # undecodable bytes become U+FFFD so one bad row can't empty the dataset
        try:
            text = path.read_text(encoding='utf-8-sig', errors='replace')
        except OSError as e:
            raise DataLoadError(str(e)) from e
        return [line for line in text.split('\n') if line.strip()]

    @staticmethod
    def _parse_row(line: str, headers: Sequence[str]) -> dict:
        values = parse_csv_line(line)
        row = {}
        for index, header in enumerate(headers):
            value = values[index] if index < len(values) else ''
            row[header] = _clean(value)
        return row


def get_field(record: Optional[Mapping[str, str]], field: str) -> str:
    """Field value of a record, "" when the column is missing."""
    if not record:
        return ''
    return record.get(field) or ''
