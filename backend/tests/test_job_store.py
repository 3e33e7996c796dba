"""Tests for the job state machine helpers and SqlJobStore.

The store runs against the file-backed SQLite database created in conftest.
"""

import pytest
from sqlalchemy.exc import OperationalError

from redesigner.exceptions import InvalidTransition, PersistenceFailure
from redesigner.models.job import (
    STATUS_ORDER,
    can_transition,
    describe_status,
    error_status,
    is_terminal_status,
)
from redesigner.repositories import SqlJobStore


def _new_job(store: SqlJobStore, **overrides):
    fields = {
        "website": "https://example.com",
        "theme": "clean-white",
        "business_type": "tech",
        "job_type": "clone",
    }
    fields.update(overrides)
    return store.create_job(**fields)


# ---------------------------------------------------------------------------
# State machine helpers
# ---------------------------------------------------------------------------

class TestTransitions:
    @pytest.mark.parametrize(
        "current,new",
        [
            ("scraping", "analyzing"),
            ("analyzing", "processing_page"),
            ("processing_page", "processing_page"),
            ("processing_page", "generating"),
            ("scraping", "generating"),
            ("generating", "completed"),
            ("scraping", "error: boom"),
            ("generating", "error: boom"),
        ],
    )
    def test_forward_moves_allowed(self, current, new) -> None:
        assert can_transition(current, new) is True

    @pytest.mark.parametrize(
        "current,new",
        [
            ("analyzing", "scraping"),
            ("generating", "processing_page"),
            ("completed", "generating"),
            ("completed", "error: late"),
            ("error: boom", "completed"),
            ("scraping", "unknown"),
        ],
    )
    def test_backward_or_terminal_moves_refused(self, current, new) -> None:
        assert can_transition(current, new) is False

    def test_error_status_keeps_message(self) -> None:
        assert error_status("Failed to fetch https://x: timed out") == "error: Failed to fetch https://x: timed out"

    def test_terminal_states(self) -> None:
        assert is_terminal_status("completed")
        assert is_terminal_status("error: x")
        assert not any(is_terminal_status(s) for s in STATUS_ORDER if s != "completed")


class TestDescribeStatus:
    def test_job_type_specific_wording(self) -> None:
        assert describe_status("generating", "mockup") == "Creating your website mockup with AI..."
        assert describe_status("generating", "clone") == "Generating your redesigned website..."
        assert describe_status("completed", "mockup") == "Your website mockup is ready!"
        assert describe_status("completed", "clone") == "Your redesigned website is ready!"

    def test_error_and_unknown(self) -> None:
        assert describe_status("error: boom", "clone") == (
            "An error occurred during processing. Please try again."
        )
        assert describe_status("queued", "clone") == "Processing your request..."


# ---------------------------------------------------------------------------
# SqlJobStore
# ---------------------------------------------------------------------------

class TestSqlJobStore:
    def test_create_and_get(self, store) -> None:
        job = _new_job(store, email="owner@example.com")

        loaded = store.get_job(job.id)

        assert loaded.status == "scraping"
        assert loaded.email == "owner@example.com"
        assert loaded.created_at is not None

    def test_get_unknown_returns_none(self, store) -> None:
        assert store.get_job("missing") is None

    def test_update_moves_forward(self, store) -> None:
        job = _new_job(store)

        store.update_job(job.id, status="analyzing", total_pages=3)
        updated = store.update_job(job.id, status="processing_page", current_page=2)

        assert updated.status == "processing_page"
        assert store.get_job(job.id).total_pages == 3
        assert store.get_job(job.id).current_page == 2

    def test_update_refuses_backward_move(self, store) -> None:
        job = _new_job(store)
        store.update_job(job.id, status="generating")

        with pytest.raises(InvalidTransition):
            store.update_job(job.id, status="analyzing")

        assert store.get_job(job.id).status == "generating"

    def test_completed_is_final(self, store) -> None:
        job = _new_job(store)
        store.update_job(job.id, status="completed", demo_urls=["/demo/x"])

        with pytest.raises(InvalidTransition):
            store.update_job(job.id, status="completed")
        with pytest.raises(InvalidTransition):
            store.update_job(job.id, status=error_status("late"))

        loaded = store.get_job(job.id)
        assert loaded.completed_at is not None
        assert loaded.demo_urls == ["/demo/x"]

    def test_error_records_message(self, store) -> None:
        job = _new_job(store)

        store.update_job(job.id, status=error_status("Model timed out"))

        loaded = store.get_job(job.id)
        assert loaded.status == "error: Model timed out"
        assert loaded.error_message == "Model timed out"

    def test_update_unknown_job(self, store) -> None:
        with pytest.raises(PersistenceFailure):
            store.update_job("missing", status="analyzing")

    def test_page_designs_listed_in_order(self, store) -> None:
        job = _new_job(store)
        second = store.create_page_design(job.id, 2, "About", "https://example.com/about", "<html></html>")
        first = store.create_page_design(job.id, 1, "Home", "https://example.com", "<html></html>")

        designs = store.list_page_designs(job.id)

        assert [d.id for d in designs] == [first.id, second.id]
        assert store.get_page_design(first.id).source_url == "https://example.com"
        assert first.demo_path == f"/demo/{first.id}"

    def test_database_errors_become_persistence_failures(self, store, monkeypatch) -> None:
        job = _new_job(store)

        def broken_commit(self):
            raise OperationalError("UPDATE jobs", {}, Exception("disk I/O error"))

        monkeypatch.setattr("sqlalchemy.orm.Session.commit", broken_commit)

        with pytest.raises(PersistenceFailure, match="disk I/O error"):
            store.update_job(job.id, status="analyzing")
