# api/reconciliation/models.py
from core.schemas import CamelModel
from api.assets.models import AssetRead
from api.scans.models import EntryRead
from api.so_sessions.models import SessionRead


class ReconciliationStatistics(CamelModel):
    total_assets: int
    scanned_assets: int
    missing_assets: int
    identified_assets: int
    unidentified_assets: int
    completion_percentage: int
    identification_percentage: int


class GroupedMissingAssets(CamelModel):
    # Keyed by site / category / department name
    site: dict[str, list[AssetRead]]
    category: dict[str, list[AssetRead]]
    department: dict[str, list[AssetRead]]


class MissingAssetsReport(CamelModel):
    session: SessionRead
    statistics: ReconciliationStatistics
    missing_assets: list[AssetRead]
    grouped_by: GroupedMissingAssets
    scanned_entries: list[EntryRead]
