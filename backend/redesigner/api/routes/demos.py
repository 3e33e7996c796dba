"""Serving generated demo pages."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse

from redesigner.api.deps import DbSession
from redesigner.repositories import JobRepository, PageDesignRepository

router = APIRouter()


@router.get("/demo/{artifact_id}", response_class=HTMLResponse)
async def get_demo(artifact_id: str, db: DbSession) -> HTMLResponse:
    """Serve a redesigned page by page-design id, or a job's primary page by job id."""
    design = await PageDesignRepository(db).get_by_id(artifact_id)
    if design and design.generated_html:
        return HTMLResponse(content=design.generated_html)

    job = await JobRepository(db).get_by_id(artifact_id)
    if job and job.generated_html:
        return HTMLResponse(content=job.generated_html)

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Demo not found",
    )
