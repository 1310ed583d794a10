# api/master_data/db_manager.py
"""
Business logic for reference data: sites, categories and departments.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, NotFoundError, ValidationError
from . import queries

logger = logging.getLogger(__name__)

MOVE_DIRECTIONS = ("up", "down")


class ReferenceNotFoundError(NotFoundError):
    """Raised when a site, category or department doesn't exist."""
    pass


class DuplicateNameError(ConflictError):
    """Raised when a name is already taken in the same table."""
    pass


class ReferenceInUseError(ConflictError):
    """Raised when deleting a row that assets still point at."""
    pass


def _label(model) -> str:
    return model.__name__


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required")
    return cleaned


async def list_items(db: AsyncSession, model) -> list:
    """Return all rows of ``model`` ordered for display."""
    result = await db.execute(queries.select_items(model))
    return list(result.scalars().all())


async def get_item_or_raise(db: AsyncSession, model, item_id: int):
    """Get a row by ID. Raises ReferenceNotFoundError if not found."""
    result = await db.execute(queries.select_item_by_id(model, item_id))
    item = result.scalar_one_or_none()
    if item is None:
        raise ReferenceNotFoundError(f"{_label(model)} {item_id} not found")
    return item


async def _ensure_name_free(db: AsyncSession, model, name: str, exclude_id: int | None = None) -> None:
    result = await db.execute(queries.select_item_by_name(model, name))
    existing = result.scalar_one_or_none()
    if existing is not None and existing.id != exclude_id:
        raise DuplicateNameError(f"{_label(model)} with name '{name}' already exists")


async def create_item(db: AsyncSession, model, data: dict):
    """
    Create a row, appending it at the end of the display order.

    Raises:
        ValidationError: If the name is blank
        DuplicateNameError: If the name already exists
    """
    data = dict(data)
    data["name"] = _clean_name(data.get("name"))
    await _ensure_name_free(db, model, data["name"])

    result = await db.execute(queries.select_max_sort_order(model))
    data["sort_order"] = (result.scalar() or 0) + 1

    item = model(**data)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    logger.info("Created %s %s (%s)", _label(model), item.id, item.name)
    return item


async def update_item(db: AsyncSession, model, item_id: int, changes: dict):
    """Apply partial changes to a row."""
    item = await get_item_or_raise(db, model, item_id)

    if "name" in changes:
        changes = dict(changes)
        changes["name"] = _clean_name(changes["name"])
        await _ensure_name_free(db, model, changes["name"], exclude_id=item.id)

    for field, value in changes.items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)
    return item


async def delete_item(db: AsyncSession, model, item_id: int) -> None:
    """
    Delete a row.

    Raises:
        ReferenceNotFoundError: If the row doesn't exist
        ReferenceInUseError: If any asset still references it
    """
    item = await get_item_or_raise(db, model, item_id)

    result = await db.execute(queries.count_assets_referencing(model, item_id))
    in_use = result.scalar() or 0
    if in_use:
        raise ReferenceInUseError(
            f"Cannot delete {_label(model).lower()} '{item.name}': "
            f"{in_use} asset(s) still reference it"
        )

    await db.delete(item)
    await db.commit()
    logger.info("Deleted %s %s", _label(model), item_id)


async def move_item(db: AsyncSession, model, item_id: int, direction: str):
    """
    Swap a row's sort order with its neighbour. Moving past either end is a no-op.
    """
    if direction not in MOVE_DIRECTIONS:
        raise ValidationError(f"Invalid direction '{direction}'. Must be 'up' or 'down'")

    item = await get_item_or_raise(db, model, item_id)

    result = await db.execute(queries.select_neighbour(model, item.sort_order, direction))
    neighbour = result.scalar_one_or_none()
    if neighbour is None:
        return item

    item.sort_order, neighbour.sort_order = neighbour.sort_order, item.sort_order
    await db.commit()
    await db.refresh(item)
    return item
