"""Site crawler for collecting page content to redesign."""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any
from urllib.parse import parse_qs, urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from redesigner.config import Settings
from redesigner.exceptions import FetchFailure
from redesigner.services.content_extractor import ContentExtractor, PageContent

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredLink:
    """A same-origin candidate page found on the root document."""
    url: str
    depth: int
    is_navigation: bool = False


@dataclass
class LinkStats:
    """Advisory crawl statistics. Never affects job outcome."""
    internal_found: int = 0
    internal_selected: int = 0
    navigation_links: int = 0
    pages_fetched: int = 0
    pages_failed: int = 0
    failed_urls: list[str] = field(default_factory=list)
    external_found: int = 0
    external_checked: int = 0
    external_broken: int = 0
    broken_links: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CrawlResult:
    pages: list[PageContent]
    link_stats: LinkStats


class SiteCrawler:
    """Fetch a root page and a bounded set of same-origin sub-pages."""

    # Containers whose anchors count as site navigation
    NAV_CONTAINER_SELECTORS = [
        "nav",
        "header",
        "[role='navigation']",
        ".nav",
        ".navbar",
        ".navigation",
        ".menu",
        ".main-nav",
        ".site-nav",
    ]

    # Anchor class fragments that mark a navigation link on their own
    NAV_CLASS_HINTS = ["nav", "menu"]

    SKIP_PATH_PATTERNS = [
        # Non-HTML resources
        ".pdf", ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico",
        ".css", ".js", ".xml", ".json", ".zip", ".mp3", ".mp4",
        ".doc", ".docx", ".xls", ".xlsx",
        # Commerce and user-specific pages
        "/cart", "/basket", "/checkout",
        "/admin", "/wp-admin", "/wp-login",
        "/login", "/signin", "/sign-in", "/logout", "/register", "/signup",
        "/account", "/my-account", "/profile",
        # Listings, search and pagination
        "/search",
        "/tag/", "/tags/", "/category/", "/categories/",
        "/page/",
        # Comment threads
        "/comment", "replytocom",
        # System paths
        "/feed", "/wp-content/", "/wp-json/", "/cdn-cgi/",
    ]

    SKIP_QUERY_KEYS = {"page", "paged", "s", "q", "replytocom"}

    INDEX_FILES = [
        "/index.html", "/index.htm", "/index.php",
        "/default.html", "/default.htm", "/default.aspx",
    ]

    def __init__(self, settings: Settings, extractor: ContentExtractor | None = None):
        self.settings = settings
        self.timeout = settings.crawl_timeout_seconds
        self.delay = settings.crawl_delay_seconds
        self.user_agent = settings.user_agent
        self.default_max_pages = settings.max_pages_per_crawl
        self.link_check_limit = settings.link_check_limit
        self.link_check_timeout = settings.link_check_timeout_seconds
        self.extractor = extractor or ContentExtractor()

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        )

    def fetch_document(self, url: str) -> BeautifulSoup:
        """Fetch and parse one page, raising FetchFailure on any problem."""
        with self._client() as client:
            return self._fetch(client, url)

    def fetch_page(self, url: str) -> PageContent:
        """Fetch one page and extract its content."""
        return self.extractor.extract_from_soup(self.fetch_document(url), url)

    def crawl(self, base_url: str, max_pages: int | None = None) -> CrawlResult:
        """Crawl ``base_url`` and up to ``max_pages - 1`` discovered sub-pages.

        The root page counts toward ``max_pages``. A root fetch failure raises
        FetchFailure; sub-page failures are recorded in the stats and skipped.
        """
        max_pages = max(1, max_pages or self.default_max_pages)
        stats = LinkStats()

        with self._client() as client:
            root_soup = self._fetch(client, base_url)
            pages = [self.extractor.extract_from_soup(root_soup, base_url)]
            stats.pages_fetched = 1
            logger.info(f"Fetched root page {base_url}")

            internal, external = self.discover_links(root_soup, base_url)
            stats.internal_found = len(internal)
            stats.navigation_links = sum(1 for link in internal if link.is_navigation)
            stats.external_found = len(external)

            # Navigation pages first, shallow before deep
            candidates = sorted(internal, key=lambda link: (not link.is_navigation, link.depth))
            selected = candidates[: max_pages - 1]
            stats.internal_selected = len(selected)

            for link in selected:
                # Polite delay between requests
                time.sleep(self.delay)
                try:
                    soup = self._fetch(client, link.url)
                    page = self.extractor.extract_from_soup(soup, link.url)
                except (FetchFailure, ValueError) as e:
                    logger.warning(f"Skipping sub-page {link.url}: {e}")
                    stats.pages_failed += 1
                    stats.failed_urls.append(link.url)
                    continue
                pages.append(page)
                stats.pages_fetched += 1
                logger.info(f"Fetched sub-page {link.url} ({len(pages)}/{max_pages})")

        self._check_external_links(external, stats)

        logger.info(
            f"Crawl of {base_url} finished: {stats.pages_fetched} fetched, "
            f"{stats.pages_failed} failed, {stats.external_broken} broken external links"
        )
        return CrawlResult(pages=pages, link_stats=stats)

    def _fetch(self, client: httpx.Client, url: str) -> BeautifulSoup:
        try:
            response = client.get(url)
        except httpx.TimeoutException as e:
            raise FetchFailure(url, "timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchFailure(url, str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise FetchFailure(url, f"HTTP {response.status_code}")

        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type.lower():
            raise FetchFailure(url, f"unsupported content type '{content_type}'")

        return BeautifulSoup(response.text, "lxml")

    def discover_links(
        self, soup: BeautifulSoup, base_url: str
    ) -> tuple[list[DiscoveredLink], list[str]]:
        """Split the root page's anchors into internal candidates and external URLs.

        Internal candidates keep every depth-1 path and only the first depth-2
        path seen under each top-level segment. Deeper paths are dropped.
        """
        base_netloc = urlparse(base_url).netloc
        root = self._normalize_url(base_url)

        nav_anchor_ids = {
            id(anchor)
            for selector in self.NAV_CONTAINER_SELECTORS
            for container in soup.select(selector)
            for anchor in container.find_all("a", href=True)
        }

        internal: list[DiscoveredLink] = []
        by_url: dict[str, DiscoveredLink] = {}
        external: list[str] = []
        depth_two_parents: set[str] = set()

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()
            if not href or href.startswith(("mailto:", "tel:", "javascript:", "#")):
                continue

            try:
                absolute = urljoin(base_url, href)
                parsed = urlparse(absolute)
            except ValueError:
                logger.debug(f"Skipping malformed link {href!r}")
                continue
            if parsed.scheme not in ("http", "https"):
                continue

            if parsed.netloc != base_netloc:
                if absolute not in external:
                    external.append(absolute)
                continue

            normalized = self._normalize_url(absolute)
            is_navigation = id(anchor) in nav_anchor_ids or self._has_nav_class(anchor)

            if normalized in by_url:
                if is_navigation:
                    by_url[normalized].is_navigation = True
                continue
            if normalized == root or self._should_skip_url(normalized):
                continue

            segments = [s for s in urlparse(normalized).path.split("/") if s]
            depth = len(segments)
            if depth == 0 or depth > 2:
                continue
            if depth == 2:
                if segments[0] in depth_two_parents:
                    continue
                depth_two_parents.add(segments[0])

            link = DiscoveredLink(url=normalized, depth=depth, is_navigation=is_navigation)
            by_url[normalized] = link
            internal.append(link)

        return internal, external

    def _has_nav_class(self, anchor) -> bool:
        classes = anchor.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return any(hint in cls.lower() for cls in classes for hint in self.NAV_CLASS_HINTS)

    def _check_external_links(self, urls: list[str], stats: LinkStats) -> None:
        """HEAD-probe a bounded number of external links."""
        to_check = urls[: self.link_check_limit]
        if not to_check:
            return

        with httpx.Client(
            timeout=self.link_check_timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            for url in to_check:
                stats.external_checked += 1
                try:
                    response = client.head(url)
                    broken = response.status_code >= 400
                except (httpx.HTTPError, httpx.InvalidURL) as e:
                    logger.debug(f"External link check failed for {url}: {e}")
                    broken = True
                if broken:
                    stats.external_broken += 1
                    stats.broken_links.append(url)

    def _should_skip_url(self, url: str) -> bool:
        """Check if URL is a known non-content page."""
        parsed = urlparse(url)
        path = parsed.path.lower()

        for pattern in self.SKIP_PATH_PATTERNS:
            if pattern in path:
                return True

        query_keys = {key.lower() for key in parse_qs(parsed.query, keep_blank_values=True)}
        return bool(query_keys & self.SKIP_QUERY_KEYS)

    def _normalize_url(self, url: str) -> str:
        """Normalize URL for deduplication.

        Drops the fragment, folds index files into their directory and
        removes trailing slashes except on the root.
        """
        parsed = urlparse(url)
        path = parsed.path or "/"

        for index_file in self.INDEX_FILES:
            if path.endswith(index_file):
                path = path[: -len(index_file)] or "/"
                break

        if len(path) > 1:
            path = path.rstrip("/")

        normalized = f"{parsed.scheme}://{parsed.netloc}{path}"
        if parsed.query:
            normalized += f"?{parsed.query}"
        return normalized
