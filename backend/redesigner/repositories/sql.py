"""SQLAlchemy repository implementations.

``SqlJobStore`` is the sync store used by Celery workers. The async
repositories back the API routes.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, sessionmaker

from redesigner.exceptions import InvalidTransition, PersistenceFailure
from redesigner.models import Job, PageDesign
from redesigner.models.job import can_transition, is_error_status

logger = logging.getLogger(__name__)


class SqlJobStore:
    """Sync job store. Each call runs in its own short transaction."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def create_job(self, **fields: Any) -> Job:
        job = Job(status="scraping", **fields)
        try:
            with self.session_factory() as session:
                session.add(job)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to create job: {e}") from e
        return job

    def get_job(self, job_id: str) -> Job | None:
        try:
            with self.session_factory() as session:
                return session.get(Job, job_id)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to load job {job_id}: {e}") from e

    def update_job(self, job_id: str, **fields: Any) -> Job:
        try:
            with self.session_factory() as session:
                job = session.get(Job, job_id)
                if job is None:
                    raise PersistenceFailure(f"Job {job_id} not found")

                new_status = fields.get("status")
                if new_status is not None and new_status != job.status:
                    if not can_transition(job.status, new_status):
                        raise InvalidTransition(
                            f"Job {job_id} cannot move from '{job.status}' to '{new_status}'"
                        )
                    if new_status == "completed":
                        fields.setdefault("completed_at", datetime.now(timezone.utc))
                    elif is_error_status(new_status):
                        fields.setdefault("error_message", new_status.split(":", 1)[1].strip())
                elif new_status is not None and job.is_terminal:
                    raise InvalidTransition(f"Job {job_id} is already '{job.status}'")

                for key, value in fields.items():
                    if not hasattr(Job, key):
                        raise AttributeError(f"Job has no field '{key}'")
                    setattr(job, key, value)

                session.commit()
                logger.debug(f"Job {job_id} updated: {sorted(fields)}")
                return job
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to update job {job_id}: {e}") from e

    def create_page_design(
        self,
        job_id: str,
        page_number: int,
        title: str,
        source_url: str,
        generated_html: str,
    ) -> PageDesign:
        design = PageDesign(
            job_id=job_id,
            page_number=page_number,
            title=title,
            source_url=source_url,
            generated_html=generated_html,
        )
        try:
            with self.session_factory() as session:
                session.add(design)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(
                f"Failed to save page {page_number} of job {job_id}: {e}"
            ) from e
        return design

    def get_page_design(self, page_design_id: str) -> PageDesign | None:
        try:
            with self.session_factory() as session:
                return session.get(PageDesign, page_design_id)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to load page design {page_design_id}: {e}") from e

    def list_page_designs(self, job_id: str) -> list[PageDesign]:
        try:
            with self.session_factory() as session:
                result = session.execute(
                    select(PageDesign)
                    .where(PageDesign.job_id == job_id)
                    .order_by(PageDesign.page_number)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to list pages of job {job_id}: {e}") from e


class JobRepository:
    """Async job repository for the API."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, job_id: str) -> Job | None:
        """Get a job by ID."""
        result = await self.session.execute(select(Job).where(Job.id == job_id))
        return result.scalar_one_or_none()

    async def save(self, job: Job) -> Job:
        """Save a job (insert or update)."""
        self.session.add(job)
        await self.session.flush()
        return job


class PageDesignRepository:
    """Async page design repository for the API."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, page_design_id: str) -> PageDesign | None:
        result = await self.session.execute(
            select(PageDesign).where(PageDesign.id == page_design_id)
        )
        return result.scalar_one_or_none()

    async def get_by_job(self, job_id: str) -> list[PageDesign]:
        """Get all page designs for a job, in page order."""
        result = await self.session.execute(
            select(PageDesign)
            .where(PageDesign.job_id == job_id)
            .order_by(PageDesign.page_number)
        )
        return list(result.scalars().all())
