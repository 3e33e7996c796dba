"""Initial schema - jobs and page designs.

Revision ID: 001
Revises:
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Jobs table
    op.create_table(
        "jobs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("website", sa.String(2048), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("theme", sa.String(100), nullable=False, server_default="clean-white"),
        sa.Column("business_type", sa.String(100), nullable=False, server_default="local-business"),
        sa.Column("job_type", sa.String(20), nullable=False, server_default="clone"),
        sa.Column("page_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("status", sa.Text, nullable=False, server_default="scraping"),
        sa.Column("current_page", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_pages", sa.Integer, nullable=False, server_default="0"),
        sa.Column("demo_urls", sa.JSON, nullable=True),
        sa.Column("mockup_url", sa.Text, nullable=True),
        sa.Column("preview_image_url", sa.Text, nullable=True),
        sa.Column("generated_html", sa.Text, nullable=True),
        sa.Column("link_stats", sa.JSON, nullable=True),
        sa.Column("error_message", sa.Text, nullable=True),
        sa.Column("celery_task_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_jobs_status", "jobs", ["status"])

    # Page designs table
    op.create_table(
        "page_designs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "job_id",
            sa.String(36),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("page_number", sa.Integer, nullable=False),
        sa.Column("title", sa.String(512), nullable=False, server_default=""),
        sa.Column("source_url", sa.String(2048), nullable=False),
        sa.Column("generated_html", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("page_designs")
    op.drop_index("ix_jobs_status", table_name="jobs")
    op.drop_table("jobs")
