"""PageDesign model for generated page artifacts."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from redesigner.database import Base


class PageDesign(Base):
    """One redesigned page of a clone job. Written once, never updated."""

    __tablename__ = "page_designs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    job_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        index=True,
    )

    page_number: Mapped[int] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(512), default="")
    source_url: Mapped[str] = mapped_column(String(2048))
    generated_html: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    job: Mapped["Job"] = relationship("Job", back_populates="page_designs")

    @property
    def demo_path(self) -> str:
        return f"/demo/{self.id}"


# Forward reference
from redesigner.models.job import Job  # noqa: E402
