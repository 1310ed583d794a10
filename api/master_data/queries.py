# api/master_data/queries.py
"""
SQLAlchemy query builders shared by the site, category and department tables.

Each builder takes the mapped class so one set of queries serves all three.
"""
from sqlalchemy import select, func

from db_models.asset import Asset
from db_models.site import Site
from db_models.category import Category
from db_models.department import Department


# Asset column that points at each reference table
ASSET_REFERENCE_COLUMNS = {
    Site: Asset.site_id,
    Category: Asset.category_id,
    Department: Asset.department_id,
}


def select_items(model):
    """Select all rows in display order."""
    return select(model).order_by(model.sort_order.asc(), model.name.asc())


def select_item_by_id(model, item_id: int):
    """Select a row by its ID."""
    return select(model).where(model.id == item_id)


def select_item_by_name(model, name: str):
    """Select a row by exact name (case-insensitive)."""
    return select(model).where(func.lower(model.name) == name.lower())


def select_max_sort_order(model):
    """Highest sort order in use, 0 for an empty table."""
    return select(func.coalesce(func.max(model.sort_order), 0))


def count_assets_referencing(model, item_id: int):
    """Count assets pointing at the given row."""
    column = ASSET_REFERENCE_COLUMNS[model]
    return select(func.count(Asset.id)).where(column == item_id)


def select_neighbour(model, sort_order: int, direction: str):
    """Select the row directly above ("up") or below ("down") in display order."""
    if direction == "up":
        return (
            select(model)
            .where(model.sort_order < sort_order)
            .order_by(model.sort_order.desc())
            .limit(1)
        )
    return (
        select(model)
        .where(model.sort_order > sort_order)
        .order_by(model.sort_order.asc())
        .limit(1)
    )
