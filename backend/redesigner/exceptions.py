"""Failure taxonomy for the redesign pipeline.

Pure stages (extraction, prompt building, sanitizing) raise these directly.
The job orchestrator is the single place that turns them into a persisted
``error: <message>`` status.
"""


class RedesignError(Exception):
    """Base class for pipeline failures."""


class FetchFailure(RedesignError):
    """Target page unreachable, non-2xx, non-HTML, or timed out."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class MalformedArtifact(RedesignError):
    """Model output could not be reduced to a plausible HTML document."""


class GenerationFailure(RedesignError):
    """The text or image model errored or returned no usable payload."""


class PersistenceFailure(RedesignError):
    """A job store write or read failed."""


class NotificationFailure(RedesignError):
    """An email notification could not be sent. Never escalated to job status."""


class InvalidTransition(RedesignError):
    """A job status update would move the state machine backwards."""
