"""SQLAlchemy models."""

from redesigner.models.job import Job
from redesigner.models.page_design import PageDesign

__all__ = [
    "Job",
    "PageDesign",
]
