# api/dashboard/queries.py
"""
SQLAlchemy query builders for dashboard statistics.
"""
from sqlalchemy import select, func, desc

from db_models.asset import Asset
from db_models.asset_checkout import AssetCheckout, CheckoutStatus
from db_models.so_session import SOSession


def count_rows(model):
    """Count all rows of a table."""
    return select(func.count(model.id))


def count_checked_out_assets():
    """Count assets currently out with an employee."""
    return (
        select(func.count(func.distinct(AssetCheckout.asset_id)))
        .where(AssetCheckout.status == CheckoutStatus.CHECKED_OUT.value)
    )


def sum_asset_cost():
    """Total recorded cost of the registry."""
    return select(func.coalesce(func.sum(Asset.cost), 0.0))


def assets_grouped_by(model, fk_column, fallback: str):
    """Asset count per reference row, unassigned assets under ``fallback``."""
    label = func.coalesce(model.name, fallback).label("name")
    value = func.count(Asset.id).label("value")
    return (
        select(label, value)
        .select_from(Asset)
        .outerjoin(model, fk_column == model.id)
        .group_by(model.id, model.name)
        .order_by(desc(value), label)
    )


def cost_grouped_by(model, fk_column, fallback: str):
    """Summed asset cost per reference row."""
    label = func.coalesce(model.name, fallback).label("name")
    value = func.coalesce(func.sum(Asset.cost), 0.0).label("value")
    return (
        select(label, value)
        .select_from(Asset)
        .outerjoin(model, fk_column == model.id)
        .group_by(model.id, model.name)
        .order_by(desc(value), label)
    )


def select_recent_sessions(limit: int = 5):
    """Select the most recently created sessions."""
    return (
        select(SOSession)
        .order_by(SOSession.created_at.desc(), SOSession.id.desc())
        .limit(limit)
    )
