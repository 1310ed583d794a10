# api/assets/queries.py
"""
SQLAlchemy query builders for asset registry operations.
"""
from sqlalchemy import select, func, or_

from db_models.asset import Asset
from db_models.so_asset_entry import SOAssetEntry


# Separators people type (or scanners emit) inside asset numbers
IGNORED_NUMBER_CHARS = (".", "-", "_", "/", " ")

SORT_COLUMNS = {
    "name": Asset.name,
    "dateCreated": Asset.created_at,
    "assetNumber": Asset.asset_number,
}


def normalize_asset_number(value: str) -> str:
    """Uppercase and drop separators: "fa.00-1" -> "FA001"."""
    normalized = value.strip()
    for ch in IGNORED_NUMBER_CHARS:
        normalized = normalized.replace(ch, "")
    return normalized.upper()


def normalized_number_column():
    """SQL expression mirroring normalize_asset_number over Asset.asset_number."""
    expr = Asset.asset_number
    for ch in IGNORED_NUMBER_CHARS:
        expr = func.replace(expr, ch, "")
    return func.upper(expr)


def select_asset_by_id(asset_id: int):
    """Select an asset by its ID."""
    return select(Asset).where(Asset.id == asset_id)


def select_asset_by_exact_number(number: str):
    """Select an asset whose number matches exactly."""
    return select(Asset).where(Asset.asset_number == number)


def asset_number_lookups(number: str, allow_partial: bool = False) -> list:
    """
    Statements to try, in order, when resolving a typed or scanned number.

    exact -> case-insensitive -> separator-insensitive -> (optionally) contains
    """
    lookups = [
        select_asset_by_exact_number(number),
        select(Asset)
        .where(func.lower(Asset.asset_number) == number.lower())
        .order_by(Asset.id.asc())
        .limit(1),
    ]

    normalized = normalize_asset_number(number)
    if normalized:
        lookups.append(
            select(Asset)
            .where(normalized_number_column() == normalized)
            .order_by(Asset.id.asc())
            .limit(1)
        )

    if allow_partial:
        lookups.append(
            select(Asset)
            .where(func.lower(Asset.asset_number).contains(number.lower(), autoescape=True))
            .order_by(Asset.asset_number.asc())
            .limit(1)
        )
    return lookups


def _filtered(
    stmt,
    *,
    search: str | None = None,
    site_id: int | None = None,
    category_id: int | None = None,
    department_id: int | None = None,
    pic_id: int | None = None,
    status: str | None = None,
):
    if search:
        term = search.lower()
        stmt = stmt.where(
            or_(
                func.lower(Asset.name).contains(term, autoescape=True),
                func.lower(Asset.asset_number).contains(term, autoescape=True),
                func.lower(func.coalesce(Asset.serial_no, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(Asset.brand, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(Asset.model, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(Asset.pic, "")).contains(term, autoescape=True),
            )
        )
    if site_id is not None:
        stmt = stmt.where(Asset.site_id == site_id)
    if category_id is not None:
        stmt = stmt.where(Asset.category_id == category_id)
    if department_id is not None:
        stmt = stmt.where(Asset.department_id == department_id)
    if pic_id is not None:
        stmt = stmt.where(Asset.pic_id == pic_id)
    if status:
        stmt = stmt.where(Asset.status == status)
    return stmt


def select_assets(*, offset: int, limit: int, sort: str, order: str, **filters):
    """Select a page of assets with filters and sorting applied."""
    column = SORT_COLUMNS.get(sort, Asset.created_at)
    ordering = column.asc() if order == "asc" else column.desc()
    return (
        _filtered(select(Asset), **filters)
        .order_by(ordering, Asset.id.asc())
        .offset(offset)
        .limit(limit)
    )


def count_assets(**filters):
    """Count assets matching the same filters as select_assets."""
    return _filtered(select(func.count(Asset.id)), **filters)


def select_distinct_statuses():
    """Distinct non-empty asset statuses, sorted."""
    return (
        select(Asset.status)
        .where(Asset.status.is_not(None), Asset.status != "")
        .distinct()
        .order_by(Asset.status.asc())
    )


def count_entries_for_asset(asset_id: int):
    """Count stock-opname entries recorded against an asset."""
    return select(func.count(SOAssetEntry.id)).where(SOAssetEntry.asset_id == asset_id)


def select_existing_numbers(numbers: list[str]):
    """Asset numbers from ``numbers`` that are already registered."""
    return (
        select(Asset.asset_number)
        .where(Asset.asset_number.in_(numbers))
        .order_by(Asset.asset_number.asc())
    )


def select_ids_by_name(model):
    """IDs of a reference table in name order, the position used in generated numbers."""
    return select(model.id).order_by(model.name.asc(), model.id.asc())


def count_scanned_assets():
    """Count distinct assets that appear in any stock-opname session."""
    return select(func.count(func.distinct(SOAssetEntry.asset_id)))
