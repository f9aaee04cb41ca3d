"""Repository interfaces for data access abstraction."""

from .feature_store_repository import FeatureStoreRepository
from .raw_record_repository import RawRecordRepository

__all__ = [
    "FeatureStoreRepository",
    "RawRecordRepository",
]
