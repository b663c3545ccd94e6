"""
Tests for CSV parsing and the load-once data store.
"""

import logging

import pytest

from sales_insight_agents.data_store import SalesDataStore, parse_csv_line


def test_parse_plain_line():
    assert parse_csv_line('a,b,c') == ['a', 'b', 'c']


def test_parse_quoted_comma_is_not_split():
    assert parse_csv_line('Austin,"1,234.50", Texas ') == ['Austin', '1,234.50', 'Texas']


def test_parse_keeps_empty_fields():
    assert parse_csv_line('a,,b,') == ['a', '', 'b', '']


def test_parse_doubled_quote_toggles_twice():
    assert parse_csv_line('"72""H, x",z') == ['72H, x', 'z']


def test_load_sample(store):
    assert len(store) == 6
    assert store.headers == ('Order Date', 'State', 'City', 'Region', 'Category', 'Product Name', 'Sales')
    first = store.records[0]
    assert first['City'] == 'Austin'
    assert first['Product Name'] == 'Chair, Black'
    assert first['Sales'] == '1,000.00'


def test_records_are_read_only(store):
    with pytest.raises(TypeError):
        store.records[0]['City'] = 'Dallas'


def test_missing_trailing_values_default_to_empty(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text('"State","City","Sales"\nTexas,Austin\n', encoding="utf-8")
    store = SalesDataStore.load(path)
    assert store.headers == ('State', 'City', 'Sales')
    assert dict(store.records[0]) == {'State': 'Texas', 'City': 'Austin', 'Sales': ''}


def test_missing_file_gives_empty_store(tmp_path):
    store = SalesDataStore.load(tmp_path / "nope.csv")
    assert store.is_empty
    assert len(store) == 0


def test_empty_file_gives_empty_store(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("\n\n", encoding="utf-8")
    assert SalesDataStore.load(path).is_empty


def test_crlf_line_endings(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"State,Sales\r\nTexas,10\r\n")
    store = SalesDataStore.load(path)
    assert dict(store.records[0]) == {'State': 'Texas', 'Sales': '10'}


def test_from_records():
    store = SalesDataStore.from_records([{'State': 'Texas', 'Sales': '1'}])
    assert store.headers == ('State', 'Sales')
    assert not store.is_empty


def test_undecodable_byte_keeps_other_rows(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"State,City,Sales\nTexas,Austin,10\nTexas,Caf\xe9 Town,20\nOhio,Akron,30\n")
    store = SalesDataStore.load(path)
    assert len(store) == 3
    assert store.records[1]['City'] == 'Caf\ufffd Town'
    assert store.records[2]['City'] == 'Akron'


def test_line_that_fails_to_parse_is_dropped(sample_csv, monkeypatch, caplog):
    parse_row = SalesDataStore._parse_row

    def fail_on_houston(line, headers):
        if 'Houston' in line:
            raise ValueError('bad row')
        return parse_row(line, headers)

    monkeypatch.setattr(SalesDataStore, '_parse_row', staticmethod(fail_on_houston))
    with caplog.at_level(logging.ERROR, logger='sales_insight_agents.data_store'):
        store = SalesDataStore.load(sample_csv)

    assert len(store) == 5
    assert 'Houston' not in [r['City'] for r in store.records]
    assert 'Error parsing line 3: bad row' in caplog.text
