# api/assets/db_manager.py
"""
Business logic for the asset registry.
"""
import logging
import re
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.master_data import queries as reference_queries
from core.errors import ConflictError, NotFoundError, ValidationError
from db_models.asset import Asset
from db_models.asset_checkout import AssetCheckout
from db_models.asset_event import AssetEvent
from db_models.site import Site
from db_models.category import Category
from db_models.department import Department
from db_models.employee import Employee
from db_models.so_asset_entry import SOAssetEntry
from . import queries

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200

DEFAULT_STATUS = "Active"

# Foreign keys accepted on create/update and the table each must exist in
_REFERENCES = {
    "site_id": Site,
    "category_id": Category,
    "department_id": Department,
    "pic_id": Employee,
}


class AssetNotFoundError(NotFoundError):
    """Raised when asset doesn't exist"""
    pass


class AssetAlreadyExistsError(ConflictError):
    """Raised when the asset number is already registered"""
    pass


class AssetInUseError(ConflictError):
    """Raised when deleting an asset that appears in stock-opname sessions"""
    pass


async def get_asset_or_raise(db: AsyncSession, asset_id: int) -> Asset:
    """Get asset by ID or raise AssetNotFoundError"""
    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def resolve_asset_number(
    db: AsyncSession,
    number: str,
    *,
    allow_partial: bool = False,
) -> Asset | None:
    """
    Find the asset a typed or scanned number refers to.

    Tries an exact match first, then case-insensitive, then ignoring
    separators (``. - _ /`` and spaces), so "fa001" and "FA.001" both
    resolve to "FA001". With ``allow_partial`` a substring match is the
    last resort. Returns None when nothing matches.
    """
    value = (number or "").strip()
    if not value:
        return None

    for stmt in queries.asset_number_lookups(value, allow_partial=allow_partial):
        result = await db.execute(stmt)
        asset = result.scalars().first()
        if asset is not None:
            return asset
    return None


async def list_assets(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 50,
    sort: str = "dateCreated",
    order: str = "desc",
    **filters,
) -> tuple[list[Asset], int]:
    """Return one page of assets and the total match count."""
    limit = min(limit, MAX_PAGE_SIZE)
    offset = (page - 1) * limit

    result = await db.execute(
        queries.select_assets(offset=offset, limit=limit, sort=sort, order=order, **filters)
    )
    assets = list(result.scalars().all())

    result = await db.execute(queries.count_assets(**filters))
    total = result.scalar() or 0
    return assets, total


async def list_statuses(db: AsyncSession) -> list[str]:
    result = await db.execute(queries.select_distinct_statuses())
    return list(result.scalars().all())


async def _check_references(db: AsyncSession, data: dict) -> None:
    for field, model in _REFERENCES.items():
        ref_id = data.get(field)
        if ref_id is None:
            continue
        if await db.get(model, ref_id) is None:
            raise ValidationError(f"{model.__name__} {ref_id} does not exist")


def _apply_pic_rules(data: dict) -> dict:
    """A linked employee and a free-text PIC are mutually exclusive."""
    data = dict(data)
    if data.get("pic_id") is not None:
        data["pic"] = None
    elif data.get("pic"):
        data["pic_id"] = None
    return data


async def create_asset(db: AsyncSession, data: dict) -> Asset:
    """
    Register a new asset.

    Raises:
        ValidationError: If the number is blank or a referenced row is missing
        AssetAlreadyExistsError: If the asset number is taken
    """
    data = _apply_pic_rules(data)
    data["asset_number"] = (data.get("asset_number") or "").strip()
    if not data["asset_number"]:
        raise ValidationError("Asset number is required")

    await _check_references(db, data)

    # Best-effort check; the unique constraint is the final authority
    result = await db.execute(queries.select_asset_by_exact_number(data["asset_number"]))
    existing = result.scalar_one_or_none()
    if existing is not None:
        raise AssetAlreadyExistsError(
            f"Asset with number {data['asset_number']} already exists (id={existing.id})"
        )

    asset = Asset(**data)
    db.add(asset)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise AssetAlreadyExistsError(
            f"Asset with number {data['asset_number']} already exists"
        ) from exc

    await db.refresh(asset)
    logger.info("Created asset %s (%s)", asset.id, asset.asset_number)
    return asset


async def update_asset(db: AsyncSession, asset_id: int, changes: dict) -> Asset:
    """Apply partial changes to an asset's registry record."""
    asset = await get_asset_or_raise(db, asset_id)

    if "name" in changes:
        changes = dict(changes)
        changes["name"] = (changes["name"] or "").strip()
        if not changes["name"]:
            raise ValidationError("Asset name is required")

    if "pic_id" in changes or "pic" in changes:
        changes = _apply_pic_rules(changes)
    await _check_references(db, changes)

    for field, value in changes.items():
        setattr(asset, field, value)

    await db.commit()
    await db.refresh(asset)
    return asset


async def delete_asset(db: AsyncSession, asset_id: int) -> None:
    """
    Delete an asset together with its events and check-outs.

    Raises:
        AssetNotFoundError: If the asset doesn't exist
        AssetInUseError: If the asset has been scanned in any session
    """
    asset = await get_asset_or_raise(db, asset_id)

    result = await db.execute(queries.count_entries_for_asset(asset_id))
    scanned_in = result.scalar() or 0
    if scanned_in:
        raise AssetInUseError(
            f"Cannot delete asset {asset.asset_number}: it was scanned in "
            f"{scanned_in} stock opname session(s)"
        )

    await db.execute(delete(AssetEvent).where(AssetEvent.asset_id == asset_id))
    await db.execute(delete(AssetCheckout).where(AssetCheckout.asset_id == asset_id))
    await db.delete(asset)
    await db.commit()
    logger.info("Deleted asset %s (%s)", asset_id, asset.asset_number)


def to_roman(value: int) -> str:
    """Roman numeral for a 1-based position; anything below 1 reads as "I"."""
    if value <= 0:
        return "I"
    numerals = (
        (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
        (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
        (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
    )
    roman = ""
    for amount, numeral in numerals:
        count, value = divmod(value, amount)
        roman += numeral * count
    return roman


async def _position_by_name(db: AsyncSession, model, item_id: int | None) -> int | None:
    if item_id is None:
        return None
    result = await db.execute(queries.select_ids_by_name(model))
    ids = list(result.scalars().all())
    return ids.index(item_id) + 1 if item_id in ids else None


async def generate_asset_number(
    db: AsyncSession,
    *,
    category_id: int | None = None,
    site_id: int | None = None,
) -> dict:
    """
    Suggest the next asset number as ``FA<seq>/<category roman>/<site>``.

    ``seq`` is the registry size plus one, zero-padded to three digits. The
    category and site parts are their positions in name order; unknown or
    missing ids fall back to "I" and "01".
    """
    result = await db.execute(queries.count_assets())
    next_seq = (result.scalar() or 0) + 1

    category_pos = await _position_by_name(db, Category, category_id)
    site_pos = await _position_by_name(db, Site, site_id)
    category_roman = to_roman(category_pos) if category_pos else "I"
    site_number = f"{site_pos:02d}" if site_pos else "01"

    return {
        "asset_number": f"FA{next_seq:03d}/{category_roman}/{site_number}",
        "category_roman": category_roman,
        "site_number": site_number,
    }


async def find_existing_numbers(db: AsyncSession, numbers: list[str]) -> list[str]:
    """Return the given asset numbers that are already registered."""
    wanted = sorted({n.strip() for n in numbers if n and n.strip()})
    if not wanted:
        return []
    result = await db.execute(queries.select_existing_numbers(wanted))
    return list(result.scalars().all())


def _cell(value) -> str | None:
    """Trimmed text from an imported row; blank and "?" placeholders read as None."""
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned or cleaned == "?":
        return None
    return cleaned


def _parse_cost(value) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _cell(value)
    if cleaned is None:
        return None
    try:
        return float(re.sub(r"[^0-9.]", "", cleaned))
    except ValueError:
        return None


def _parse_date(value) -> date | None:
    cleaned = _cell(value)
    if cleaned is None:
        return None
    try:
        return date.fromisoformat(cleaned[:10])
    except ValueError:
        return None


async def _reference_id(db: AsyncSession, model, name: str | None) -> int | None:
    """ID of the reference row called ``name``, creating it at the end of the display order."""
    if name is None:
        return None
    result = await db.execute(reference_queries.select_item_by_name(model, name))
    item = result.scalar_one_or_none()
    if item is None:
        result = await db.execute(reference_queries.select_max_sort_order(model))
        item = model(name=name, sort_order=(result.scalar() or 0) + 1)
        db.add(item)
        await db.flush()
        logger.info("Created %s '%s' during bulk import", model.__name__, name)
    return item.id


async def bulk_create_assets(db: AsyncSession, rows: list[dict]) -> dict:
    """
    Create assets row by row, each in its own transaction.

    Sites, categories and departments are matched by name and created when
    missing. A failing row is reported in ``errors`` (1-based) and does not
    affect the others.

    Raises:
        ValidationError: If ``rows`` is empty
    """
    if not rows:
        raise ValidationError("Assets array is required")

    success_count = 0
    errors: list[str] = []
    for index, row in enumerate(rows, start=1):
        name = _cell(row.get("name"))
        number = _cell(row.get("asset_number"))
        if not name or not number:
            errors.append(f"Asset {index}: Name and asset number are required")
            continue

        result = await db.execute(queries.select_asset_by_exact_number(number))
        if result.scalar_one_or_none() is not None:
            errors.append(f'Asset {index}: Asset number "{number}" already exists')
            continue

        try:
            asset = Asset(
                asset_number=number,
                name=name,
                status=_cell(row.get("status")) or DEFAULT_STATUS,
                serial_no=_cell(row.get("serial_no")),
                brand=_cell(row.get("brand")),
                model=_cell(row.get("model")),
                pic=_cell(row.get("pic")),
                cost=_parse_cost(row.get("cost")),
                purchase_date=_parse_date(row.get("purchase_date")),
                site_id=await _reference_id(db, Site, _cell(row.get("site"))),
                category_id=await _reference_id(db, Category, _cell(row.get("category"))),
                department_id=await _reference_id(db, Department, _cell(row.get("department"))),
            )
            db.add(asset)
            await db.commit()
        except (IntegrityError, DataError):
            await db.rollback()
            logger.warning("Bulk import row %s (%s) rejected by the database", index, number)
            errors.append(f"Asset {index}: Failed to create asset")
            continue
        success_count += 1

    logger.info("Bulk import: %s created, %s failed", success_count, len(errors))
    return {
        "success_count": success_count,
        "failed_count": len(errors),
        "errors": errors,
    }


async def bulk_delete_assets(db: AsyncSession, *, confirm_all: bool) -> dict:
    """
    Delete every asset that was never scanned, with its events and check-outs.

    Assets recorded in any stock-opname session are kept and counted as
    skipped.

    Raises:
        ValidationError: If ``confirm_all`` is not set
    """
    if not confirm_all:
        raise ValidationError("Confirmation required. Set confirmAll to true to delete all assets.")

    result = await db.execute(queries.count_scanned_assets())
    skipped = result.scalar() or 0

    scanned = select(SOAssetEntry.asset_id)
    for model in (AssetEvent, AssetCheckout):
        await db.execute(
            delete(model)
            .where(model.asset_id.not_in(scanned))
            .execution_options(synchronize_session=False)
        )
    result = await db.execute(
        delete(Asset)
        .where(Asset.id.not_in(scanned))
        .execution_options(synchronize_session=False)
    )
    deleted = result.rowcount or 0
    await db.commit()

    logger.info("Bulk deleted %s asset(s), kept %s scanned asset(s)", deleted, skipped)
    return {"deleted_count": deleted, "skipped_count": skipped}
