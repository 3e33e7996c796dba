"""Job submission and status routes."""

import logging

from fastapi import APIRouter, HTTPException, status

from redesigner.api.deps import AppSettings, CamelModel, DbSession
from redesigner.models import Job
from redesigner.repositories import JobRepository, PageDesignRepository
from redesigner.services.url_validator import URLValidator
from redesigner.workers.tasks import process_clone_job, process_mockup_job

logger = logging.getLogger(__name__)

router = APIRouter()


class CloneWebsiteRequest(CamelModel):
    """Request to redesign a website."""

    website: str | None = None
    email: str | None = None
    theme: str = "clean-white"
    business_type: str = "local-business"
    page_count: int | None = None


class CreateMockupRequest(CamelModel):
    """Request to generate a mockup image for a website."""

    website: str | None = None
    email: str | None = None
    theme: str = "clean-white"
    business_type: str = "local-business"


class JobCreatedResponse(CamelModel):
    job_id: str
    message: str


class JobStatusResponse(CamelModel):
    """Polling view of a job."""

    job_id: str
    status: str
    status_description: str
    job_type: str
    website: str
    demo_urls: list[str] | None = None
    mockup_url: str | None = None
    preview_image_url: str | None = None
    current_page: int = 0
    total_pages: int = 0
    error_message: str | None = None


class PageDesignResponse(CamelModel):
    id: str
    page_number: int
    title: str
    source_url: str
    demo_url: str


class JobPagesResponse(CamelModel):
    job_id: str
    pages: list[PageDesignResponse]


def _validated_website(website: str | None) -> str:
    validation = URLValidator().validate(website)
    if not validation.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation.error_message,
        )
    return validation.normalized_url


@router.post("/clone-website", response_model=JobCreatedResponse)
async def clone_website(
    request: CloneWebsiteRequest,
    db: DbSession,
    settings: AppSettings,
) -> JobCreatedResponse:
    """Create a redesign job and start it in the background."""
    website = _validated_website(request.website)
    page_count = max(1, min(request.page_count or 1, settings.max_pages_per_job))

    job = Job(
        website=website,
        email=request.email or None,
        theme=request.theme,
        business_type=request.business_type,
        job_type="clone",
        page_count=page_count,
        status="scraping",
    )
    await JobRepository(db).save(job)

    # Commit before dispatching so the worker can see the row
    await db.commit()

    task = process_clone_job.delay(job.id)
    job.celery_task_id = task.id
    logger.info(f"Queued clone job {job.id} for {website} ({page_count} pages)")

    return JobCreatedResponse(job_id=job.id, message="Website processing started")


@router.post("/create-mockup", response_model=JobCreatedResponse)
async def create_mockup(
    request: CreateMockupRequest,
    db: DbSession,
) -> JobCreatedResponse:
    """Create a mockup job and start it in the background."""
    website = _validated_website(request.website)

    job = Job(
        website=website,
        email=request.email or None,
        theme=request.theme,
        business_type=request.business_type,
        job_type="mockup",
        page_count=1,
        status="scraping",
    )
    await JobRepository(db).save(job)
    await db.commit()

    task = process_mockup_job.delay(job.id)
    job.celery_task_id = task.id
    logger.info(f"Queued mockup job {job.id} for {website}")

    return JobCreatedResponse(job_id=job.id, message="Mockup generation started")


@router.get("/status/{job_id}", response_model=JobStatusResponse)
async def get_status(job_id: str, db: DbSession) -> JobStatusResponse:
    """Get the current status of a job."""
    job = await JobRepository(db).get_by_id(job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )

    return JobStatusResponse(
        job_id=job.id,
        status=job.status,
        status_description=job.status_description,
        job_type=job.job_type,
        website=job.website,
        demo_urls=job.demo_urls,
        mockup_url=job.mockup_url,
        preview_image_url=job.preview_image_url,
        current_page=job.current_page,
        total_pages=job.total_pages,
        error_message=job.error_message,
    )


@router.get("/jobs/{job_id}/pages", response_model=JobPagesResponse)
async def list_pages(job_id: str, db: DbSession) -> JobPagesResponse:
    """List the redesigned pages of a job."""
    job = await JobRepository(db).get_by_id(job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )

    designs = await PageDesignRepository(db).get_by_job(job_id)
    return JobPagesResponse(
        job_id=job.id,
        pages=[
            PageDesignResponse(
                id=design.id,
                page_number=design.page_number,
                title=design.title,
                source_url=design.source_url,
                demo_url=design.demo_path,
            )
            for design in designs
        ],
    )
