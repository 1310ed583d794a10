# Import every model so Base.metadata is complete for create_all and Alembic
from db_models.site import Site
from db_models.category import Category
from db_models.department import Department
from db_models.employee import Employee
from db_models.asset import Asset
from db_models.so_session import SOSession, SessionStatus
from db_models.so_asset_entry import SOAssetEntry
from db_models.asset_checkout import AssetCheckout, CheckoutStatus
from db_models.asset_event import AssetEvent, AssetEventType
from db_models.user import User, UserRole

__all__ = [
    "Site",
    "Category",
    "Department",
    "Employee",
    "Asset",
    "SOSession",
    "SessionStatus",
    "SOAssetEntry",
    "AssetCheckout",
    "CheckoutStatus",
    "AssetEvent",
    "AssetEventType",
    "User",
    "UserRole",
]
