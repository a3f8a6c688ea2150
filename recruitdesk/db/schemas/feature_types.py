# recruitdesk/db/schemas/feature_types.py
from enum import Enum
from typing import Optional


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Role for a raw column value, or None when it is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


class FeatureKey(str, Enum):
    """Closed registry of togglable capabilities."""

    EMPLOYERS = "isEmployersEnabled"
    JOBS = "isJobsEnabled"
    VISA_KANBAN = "isVisaKanbanEnabled"
    DOCUMENTS = "isDocumentsEnabled"
    VISA_TRACKING = "isVisaTrackingEnabled"
    FINANCE_TRACKING = "isFinanceTrackingEnabled"
    MEDICAL = "isMedicalEnabled"
    INTERVIEW = "isInterviewEnabled"
    TRAVEL = "isTravelEnabled"
    HISTORY = "isHistoryEnabled"
    BULK_IMPORT = "isBulkImportEnabled"
    MOBILE_ACCESS = "isMobileAccessEnabled"
    VIEW_REPORTS = "canViewReports"
    ACCESS_SETTINGS = "canAccessSettings"
    ACCESS_RECYCLE_BIN = "canAccessRecycleBin"
    DELETE_PERMANENTLY = "canDeletePermanently"

    @classmethod
    def values(cls) -> list[str]:
        return [key.value for key in cls]

    @classmethod
    def is_known(cls, value: str) -> bool:
        return value in cls.values()


def default_feature_flags() -> dict[str, bool]:
    """Global policy written when the super admin account is created."""
    return {key: True for key in FeatureKey.values()}


__all__ = ["Role", "FeatureKey", "default_feature_flags"]
