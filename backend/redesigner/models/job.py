"""Job model for tracking redesign and mockup requests."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from redesigner.database import Base

JOB_TYPES = ("clone", "mockup")

# Forward-only stage ordering. Error states sit outside it and are terminal.
STATUS_ORDER = {
    "scraping": 0,
    "analyzing": 1,
    "processing_page": 2,
    "generating": 3,
    "completed": 4,
}
ERROR_PREFIX = "error:"


def is_error_status(status: str) -> bool:
    return status.startswith(ERROR_PREFIX)


def is_terminal_status(status: str) -> bool:
    return status == "completed" or is_error_status(status)


def error_status(message: str) -> str:
    """Build the terminal error status, keeping the message verbatim."""
    return f"{ERROR_PREFIX} {message}"


def can_transition(current: str, new: str) -> bool:
    """Check whether moving from ``current`` to ``new`` keeps the state machine forward-only.

    Any non-terminal state may fail. Re-writing the same state is allowed so
    ``processing_page`` can advance its page counter.
    """
    if is_terminal_status(current):
        return False
    if is_error_status(new):
        return True
    if new not in STATUS_ORDER or current not in STATUS_ORDER:
        return False
    return STATUS_ORDER[new] >= STATUS_ORDER[current]


def describe_status(status: str, job_type: str) -> str:
    """Human-readable description shown while polling."""
    if status == "scraping":
        return "Analyzing your website content and structure..."
    if status == "analyzing":
        return "AI is processing your content and generating design ideas..."
    if status == "processing_page":
        return "Redesigning your website page by page..."
    if status == "generating":
        if job_type == "mockup":
            return "Creating your website mockup with AI..."
        return "Generating your redesigned website..."
    if status == "completed":
        if job_type == "mockup":
            return "Your website mockup is ready!"
        return "Your redesigned website is ready!"
    if is_error_status(status):
        return "An error occurred during processing. Please try again."
    return "Processing your request..."


class Job(Base):
    """A redesign (clone) or mockup request."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Request
    website: Mapped[str] = mapped_column(String(2048))
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    theme: Mapped[str] = mapped_column(String(100), default="clean-white")
    business_type: Mapped[str] = mapped_column(String(100), default="local-business")
    job_type: Mapped[str] = mapped_column(String(20), default="clone")  # clone, mockup
    page_count: Mapped[int] = mapped_column(Integer, default=1)

    # Job status
    status: Mapped[str] = mapped_column(
        Text, default="scraping"
    )  # scraping, analyzing, processing_page, generating, completed, error: <message>
    current_page: Mapped[int] = mapped_column(Integer, default=0)
    total_pages: Mapped[int] = mapped_column(Integer, default=0)

    # Results
    demo_urls: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    mockup_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)  # clone jobs only
    generated_html: Mapped[str | None] = mapped_column(Text, nullable=True)
    link_stats: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Error tracking
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Celery task ID for status tracking
    celery_task_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Timing
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relationships
    page_designs: Mapped[list["PageDesign"]] = relationship(
        "PageDesign",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="PageDesign.page_number",
    )

    @property
    def is_terminal(self) -> bool:
        return is_terminal_status(self.status)

    @property
    def status_description(self) -> str:
        return describe_status(self.status, self.job_type)


# Forward reference
from redesigner.models.page_design import PageDesign  # noqa: E402
