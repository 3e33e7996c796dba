"""Celery task definitions.

These tasks are thin wrappers that build a JobOrchestrator and hand it the
job id. The actual pipeline lives in the services module.
"""

import logging

from celery.exceptions import SoftTimeLimitExceeded

from redesigner.config import get_settings
from redesigner.database import SyncSessionLocal
from redesigner.exceptions import RedesignError
from redesigner.models.job import error_status
from redesigner.repositories import SqlJobStore
from redesigner.services.crawler import SiteCrawler
from redesigner.services.generator import DesignGenerator
from redesigner.services.notifier import EmailNotifier
from redesigner.services.orchestrator import JobOrchestrator
from redesigner.workers.celery_app import celery_app

settings = get_settings()
logger = logging.getLogger(__name__)


def build_orchestrator(store: SqlJobStore) -> JobOrchestrator:
    """Wire the orchestrator with production collaborators."""
    return JobOrchestrator(
        store=store,
        crawler=SiteCrawler(settings),
        generator=DesignGenerator(settings),
        notifier=EmailNotifier(settings),
        max_pages=settings.max_pages_per_job,
        generate_preview_image=settings.generate_preview_image,
        passthrough_exceptions=(SoftTimeLimitExceeded,),
    )


def _run_job(job_id: str, kind: str) -> dict:
    store = SqlJobStore(SyncSessionLocal)

    try:
        job = build_orchestrator(store).run(job_id)
    except SoftTimeLimitExceeded:
        logger.error(f"{kind} job {job_id} timed out")
        try:
            store.update_job(job_id, status=error_status("Job timed out"))
        except RedesignError as e:
            logger.error(f"Could not record timeout for job {job_id}: {e}")
        return {"job_id": job_id, "status": "error: Job timed out"}

    if job is None:
        return {"job_id": job_id, "error": "Job not found"}
    return {"job_id": job_id, "status": job.status}


@celery_app.task(bind=True, soft_time_limit=600, time_limit=660)
def process_clone_job(self, job_id: str) -> dict:
    """Redesign a website: crawl, generate each page, persist demo pages."""
    logger.info(f"Task {self.request.id}: clone job {job_id}")
    return _run_job(job_id, "clone")


@celery_app.task(bind=True, soft_time_limit=300, time_limit=360)
def process_mockup_job(self, job_id: str) -> dict:
    """Generate a single mockup image for a website."""
    logger.info(f"Task {self.request.id}: mockup job {job_id}")
    return _run_job(job_id, "mockup")
