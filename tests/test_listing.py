# tests/test_listing.py
from types import SimpleNamespace

import pytest

from app.core.listing import filter_items, matches, paginate


def _row(**kw):
    return SimpleNamespace(**kw)


def test_blank_term_matches_everything():
    row = _row(name="Anker PowerCore")
    assert matches(row, None, ["name"])
    assert matches(row, "   ", ["name"])


def test_match_is_case_insensitive_substring():
    row = _row(name="Anker PowerCore 10000")
    assert matches(row, "powercore", ["name"])
    assert matches(row, "  ANKER ", ["name"])
    assert not matches(row, "baseus", ["name"])


def test_match_any_of_several_fields_and_skips_none():
    row = _row(email="nimal@example.com", phone_number="0771234567", address=None)
    fields = ["email", "phone_number", "address"]
    assert matches(row, "1234", fields)
    assert matches(row, "EXAMPLE", fields)
    assert not matches(row, "colombo", fields)


def test_match_reads_nested_fields():
    row = _row(id="abc", customer=_row(email="Kamal@Mail.com"), track_id=None)
    assert matches(row, "kamal", ["id", "customer.email", "track_id"])
    missing = _row(id="abc", customer=None, track_id=None)
    assert not matches(missing, "kamal", ["customer.email"])


def test_filter_items_keeps_order():
    rows = [_row(name=n) for n in ["Red case", "Blue case", "Cable", "red strap"]]
    assert [r.name for r in filter_items(rows, "red", ["name"])] == ["Red case", "red strap"]


@pytest.mark.parametrize("total,size", [(0, 4), (1, 4), (4, 4), (9, 4), (23, 10)])
def test_pages_partition_the_list(total, size):
    items = list(range(total))
    first = paginate(items, 1, size)
    seen = []
    for page in range(1, first.total_pages + 1):
        chunk = paginate(items, page, size)
        assert len(chunk.items) <= size
        seen.extend(chunk.items)
    assert seen == items
    assert first.total == total
    assert first.total_pages == -(-total // size)


def test_page_past_the_end_is_empty():
    res = paginate(list(range(5)), 3, 4)
    assert res.items == []
    assert res.total == 5
    assert res.total_pages == 2


def test_page_must_be_positive():
    with pytest.raises(ValueError):
        paginate([1, 2], 0, 4)
