import pytest

from api.asset_events.db_manager import build_so_changes
from api.assets.db_manager import to_roman
from api.assets.queries import normalize_asset_number
from api.reconciliation.db_manager import percentage
from core.schemas import build_pagination


@pytest.mark.parametrize(
    "typed,expected",
    [
        ("FA001", "FA001"),
        ("fa001", "FA001"),
        ("FA.001", "FA001"),
        (" fa-00_1/ ", "FA001"),
        ("FA 2023 001", "FA2023001"),
    ],
)
def test_normalize_asset_number(typed, expected):
    assert normalize_asset_number(typed) == expected


@pytest.mark.parametrize(
    "part,whole,expected",
    [
        (0, 0, 0),
        (5, 0, 0),
        (3, 10, 30),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (10, 10, 100),
    ],
)
def test_percentage(part, whole, expected):
    assert percentage(part, whole) == expected


def test_build_so_changes_lists_tracked_differences():
    before = {"temp_name": "Desk 2", "temp_brand": "Informa", "temp_cost": 2000.0, "is_identified": True}
    after = {"temp_name": "Desk 2", "temp_brand": "IKEA", "temp_cost": 2500.0, "is_identified": False}

    changes = build_so_changes(before, after)

    assert changes == [
        {"field": "tempBrand", "before": "Informa", "after": "IKEA"},
        {"field": "tempCost", "before": 2000.0, "after": 2500.0},
        {"field": "isIdentified", "before": True, "after": False},
    ]


def test_build_so_changes_ignores_untracked_fields():
    before = {"temp_name": "Laptop 1", "crucial_notes": None}
    after = {"temp_name": "Laptop 1", "crucial_notes": "Battery swollen"}

    assert build_so_changes(before, after) == []


def test_build_pagination():
    page = build_pagination(page=2, limit=20, total=45)
    assert page.total_pages == 3
    assert page.has_next is True
    assert page.has_prev is True

    empty = build_pagination(page=1, limit=20, total=0)
    assert empty.total_pages == 0
    assert empty.has_next is False
    assert empty.has_prev is False


@pytest.mark.parametrize(
    "position,expected",
    [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (40, "XL"), (1994, "MCMXCIV"), (0, "I")],
)
def test_to_roman(position, expected):
    assert to_roman(position) == expected
