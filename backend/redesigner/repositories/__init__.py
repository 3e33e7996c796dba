"""Repository implementations for data access."""

from redesigner.repositories.base import JobStore
from redesigner.repositories.sql import JobRepository, PageDesignRepository, SqlJobStore

__all__ = [
    "JobStore",
    "SqlJobStore",
    "JobRepository",
    "PageDesignRepository",
]
