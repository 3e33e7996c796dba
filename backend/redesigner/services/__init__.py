"""Business logic services."""

from redesigner.services.content_extractor import ContentExtractor, PageContent
from redesigner.services.crawler import CrawlResult, SiteCrawler
from redesigner.services.generator import DesignGenerator
from redesigner.services.notifier import EmailNotifier, NotificationPayload
from redesigner.services.orchestrator import JobOrchestrator
from redesigner.services.prompt_builder import PromptBuilder
from redesigner.services.sanitizer import ResponseSanitizer

__all__ = [
    "ContentExtractor",
    "PageContent",
    "SiteCrawler",
    "CrawlResult",
    "DesignGenerator",
    "EmailNotifier",
    "NotificationPayload",
    "JobOrchestrator",
    "PromptBuilder",
    "ResponseSanitizer",
]
