"""URL validation for submitted websites.

Only checks the URL's shape. Reachability is the crawler's job, so an
unreachable site becomes a job error rather than a rejected submission.
"""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

DOMAIN_PATTERN = re.compile(r"^([a-zA-Z0-9]([a-zA-Z0-9\-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$")


@dataclass
class ValidationResult:
    """Result of URL validation."""
    is_valid: bool
    error_message: str | None = None
    normalized_url: str | None = None


class URLValidator:
    """Normalize and validate website URLs before creating jobs."""

    def normalize(self, url: str) -> str:
        """Trim whitespace and default bare hosts to https://."""
        url = (url or "").strip()
        if url and not url.startswith(("http://", "https://")):
            url = "https://" + url
        return url

    def validate(self, url: str | None) -> ValidationResult:
        if not url or not url.strip():
            return ValidationResult(is_valid=False, error_message="Website URL is required")

        normalized = self.normalize(url)
        error = self._validate_format(normalized)
        if error:
            return ValidationResult(is_valid=False, error_message=error)
        return ValidationResult(is_valid=True, normalized_url=normalized)

    def _validate_format(self, url: str) -> str | None:
        """Validate URL format. Returns error message or None if valid."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return "Invalid URL format"

        if parsed.scheme not in ("http", "https"):
            return "URL must use http:// or https://"

        if not parsed.netloc:
            return "URL must include a domain name"

        domain = (parsed.hostname or "").lower()
        if not DOMAIN_PATTERN.match(domain) and domain != "localhost":
            return "Invalid domain name"

        return None
