"""Job orchestration: crawl, prompt, generate, sanitize, persist, notify.

The orchestrator is the only place that advances a job's status and the only
place that turns a pipeline exception into a persisted ``error: <message>``.
"""

import logging

from redesigner.exceptions import GenerationFailure, MalformedArtifact, RedesignError
from redesigner.models import Job, PageDesign
from redesigner.models.job import error_status
from redesigner.prompts import REDESIGN_SYSTEM_PROMPT
from redesigner.repositories.base import JobStore
from redesigner.services.content_extractor import PageContent
from redesigner.services.crawler import SiteCrawler
from redesigner.services.generator import DesignGenerator
from redesigner.services.notifier import EmailNotifier, NotificationPayload
from redesigner.services.prompt_builder import PromptBuilder
from redesigner.services.sanitizer import ResponseSanitizer

logger = logging.getLogger(__name__)


class JobOrchestrator:
    """Drive one job through its state machine.

    Collaborators are injected so workers, tests and scripts can each supply
    their own store and model backend.
    """

    def __init__(
        self,
        store: JobStore,
        crawler: SiteCrawler,
        generator: DesignGenerator,
        notifier: EmailNotifier | None = None,
        prompt_builder: PromptBuilder | None = None,
        sanitizer: ResponseSanitizer | None = None,
        max_pages: int = 15,
        generate_preview_image: bool = True,
        passthrough_exceptions: tuple[type[BaseException], ...] = (),
    ):
        self.store = store
        self.crawler = crawler
        self.generator = generator
        self.notifier = notifier
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.sanitizer = sanitizer or ResponseSanitizer()
        self.max_pages = max_pages
        self.generate_preview_image = generate_preview_image
        # Raised to the caller instead of being recorded as a job error
        self.passthrough_exceptions = passthrough_exceptions

    def run(self, job_id: str) -> Job | None:
        """Run a job to a terminal state and return its final row."""
        job = self.store.get_job(job_id)
        if job is None:
            logger.error(f"Job {job_id} not found")
            return None
        if job.is_terminal:
            logger.info(f"Job {job_id} already finished with status '{job.status}', skipping")
            return job

        logger.info(f"Starting {job.job_type} job {job_id} for {job.website}")

        try:
            if job.job_type == "mockup":
                payload = self._run_mockup(job)
            else:
                payload = self._run_clone(job)
        except self.passthrough_exceptions:
            raise
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.exception(f"Job {job_id} failed: {message}")
            self._record_failure(job_id, message)
            return self.store.get_job(job_id)

        logger.info(f"Job {job_id} completed")

        if job.email:
            self.notify(job.email, payload)

        return self.store.get_job(job_id)

    def notify(self, address: str, payload: NotificationPayload) -> bool:
        if self.notifier is None:
            logger.info(f"No notifier configured, skipping email to {address}")
            return False
        return self.notifier.notify(address, payload)

    def _record_failure(self, job_id: str, message: str) -> None:
        """Best-effort terminal error write."""
        try:
            self.store.update_job(job_id, status=error_status(message))
        except RedesignError as e:
            logger.error(f"Could not record failure for job {job_id}: {e}")

    def _run_clone(self, job: Job) -> NotificationPayload:
        page_limit = max(1, min(job.page_count or 1, self.max_pages))
        result = self.crawler.crawl(job.website, max_pages=page_limit)
        pages = result.pages

        self.store.update_job(
            job.id,
            status="analyzing",
            total_pages=len(pages),
            link_stats=result.link_stats.to_dict(),
        )

        designs = self._design_pages(job, pages)
        preview_url = self._preview_image(job, pages[0])

        demo_urls = [design.demo_path for design in designs]
        self.store.update_job(
            job.id,
            status="completed",
            demo_urls=demo_urls,
            generated_html=designs[0].generated_html,
            preview_image_url=preview_url,
        )

        return NotificationPayload(
            website=job.website,
            theme=job.theme,
            business_type=job.business_type,
            job_type=job.job_type,
            demo_urls=demo_urls,
        )

    def _design_pages(self, job: Job, pages: list[PageContent]) -> list[PageDesign]:
        """Redesign every crawled page.

        A single-page job fails on its page's error. In a multi-page job a page
        that can't be generated or sanitized is skipped, and the job only fails
        when no page at all produced an artifact.
        """
        if len(pages) == 1:
            self.store.update_job(job.id, status="generating", current_page=1)
            return [self._design_page(job, pages[0], 1)]

        designs: list[PageDesign] = []
        last_error: RedesignError | None = None

        for page_number, page in enumerate(pages, start=1):
            self.store.update_job(job.id, status="processing_page", current_page=page_number)
            logger.info(f"Job {job.id}: page {page_number}/{len(pages)} {page.url}")
            try:
                designs.append(self._design_page(job, page, page_number))
            except (GenerationFailure, MalformedArtifact) as e:
                logger.warning(f"Job {job.id}: skipping page {page_number} ({page.url}): {e}")
                last_error = e

        if not designs:
            raise last_error or GenerationFailure("No pages could be redesigned")

        self.store.update_job(job.id, status="generating")
        return designs

    def _design_page(self, job: Job, page: PageContent, page_number: int) -> PageDesign:
        prompt = self.prompt_builder.build_redesign_prompt(page, job.business_type, job.theme)
        raw = self.generator.generate(prompt, system=REDESIGN_SYSTEM_PROMPT)
        document = self.sanitizer.sanitize(raw)
        branded = self.sanitizer.brand(document, page.title, page.url)
        return self.store.create_page_design(
            job_id=job.id,
            page_number=page_number,
            title=page.title or page.url,
            source_url=page.url,
            generated_html=branded,
        )

    def _preview_image(self, job: Job, page: PageContent) -> str | None:
        """Illustrative mockup of the primary page. Failure is not fatal."""
        if not self.generate_preview_image:
            return None
        try:
            prompt = self.prompt_builder.build_image_prompt(page, job.business_type, job.theme)
            return self.generator.generate_image(prompt)
        except GenerationFailure as e:
            logger.warning(f"Job {job.id}: preview image skipped: {e}")
            return None

    def _run_mockup(self, job: Job) -> NotificationPayload:
        page = self.crawler.fetch_page(job.website)

        self.store.update_job(job.id, status="analyzing", total_pages=1, current_page=1)
        prompt = self.prompt_builder.build_image_prompt(page, job.business_type, job.theme)

        self.store.update_job(job.id, status="generating")
        image_url = self.generator.generate_image(prompt)

        self.store.update_job(job.id, status="completed", mockup_url=image_url)

        return NotificationPayload(
            website=job.website,
            theme=job.theme,
            business_type=job.business_type,
            job_type=job.job_type,
            mockup_url=image_url,
        )
