"""Adapters implementing the repository interfaces."""

from .json_repositories import (
    JsonFeatureStoreRepository,
    JsonRawRecordRepository,
    JsonStoreConfiguration,
)
from .memory_repositories import (
    InMemoryFeatureStoreRepository,
    InMemoryRawRecordRepository,
)

__all__ = [
    "InMemoryFeatureStoreRepository",
    "InMemoryRawRecordRepository",
    "JsonFeatureStoreRepository",
    "JsonRawRecordRepository",
    "JsonStoreConfiguration",
]
