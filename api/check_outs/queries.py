# api/check_outs/queries.py
"""
SQLAlchemy query builders for check-out operations.
"""
from sqlalchemy import select, func

from db_models.asset_checkout import AssetCheckout, CheckoutStatus


def _filtered(stmt, status: str | None, asset_id: int | None, assign_to_id: int | None):
    if status:
        stmt = stmt.where(AssetCheckout.status == status)
    if asset_id is not None:
        stmt = stmt.where(AssetCheckout.asset_id == asset_id)
    if assign_to_id is not None:
        stmt = stmt.where(AssetCheckout.assign_to_id == assign_to_id)
    return stmt


def select_checkouts(*, status: str | None, asset_id: int | None, assign_to_id: int | None, offset: int, limit: int):
    """Select a page of check-outs, newest first."""
    return (
        _filtered(select(AssetCheckout), status, asset_id, assign_to_id)
        .order_by(AssetCheckout.checkout_date.desc(), AssetCheckout.id.desc())
        .offset(offset)
        .limit(limit)
    )


def count_checkouts(*, status: str | None, asset_id: int | None, assign_to_id: int | None):
    """Count check-outs under the same filters as select_checkouts."""
    return _filtered(select(func.count(AssetCheckout.id)), status, asset_id, assign_to_id)


def select_checkout_by_id(checkout_id: int):
    """Select a check-out by its ID."""
    return select(AssetCheckout).where(AssetCheckout.id == checkout_id)


def select_open_checkout_for_asset(asset_id: int):
    """Select the asset's check-out that has not been returned yet."""
    return (
        select(AssetCheckout)
        .where(
            AssetCheckout.asset_id == asset_id,
            AssetCheckout.status == CheckoutStatus.CHECKED_OUT.value,
        )
        .limit(1)
    )
