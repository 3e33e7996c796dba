"""Repository protocols.

The pipeline only talks to a ``JobStore``; tests and alternate backends can
provide their own implementation.
"""

from typing import Any, Protocol

from redesigner.models import Job, PageDesign


class JobStore(Protocol):
    """Persistence boundary for jobs and their page artifacts."""

    def create_job(self, **fields: Any) -> Job:
        """Insert a job in the initial ``scraping`` state."""
        ...

    def get_job(self, job_id: str) -> Job | None:
        ...

    def update_job(self, job_id: str, **fields: Any) -> Job:
        """Patch job fields. Status changes must move forward."""
        ...

    def create_page_design(
        self,
        job_id: str,
        page_number: int,
        title: str,
        source_url: str,
        generated_html: str,
    ) -> PageDesign:
        ...

    def get_page_design(self, page_design_id: str) -> PageDesign | None:
        ...

    def list_page_designs(self, job_id: str) -> list[PageDesign]:
        ...
