"""Structured content extraction from a single HTML document.

Turns raw HTML into a ``PageContent`` record. Everything here is pure: no
network I/O, no logging of page content, and absent elements become empty
values instead of errors.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup

# Per-field bounds so prompts stay within model token budgets
MAX_NAVIGATION = 8
MAX_NAV_TEXT_LENGTH = 50
MAX_HEADINGS = 40
MAX_PARAGRAPHS = 40
MAX_IMAGES = 40
MAX_LINKS = 100
MAX_BUTTONS = 20
MAX_SOCIAL_LINKS = 10
MAX_EMAILS = 2
MAX_PHONES = 2
MAX_ADDRESSES = 1
MIN_PARAGRAPH_LENGTH = 20

DEFAULT_BUSINESS_TYPE = "local-business"
DEFAULT_THEMES = ["clean-white", "dark-black", "colorful"]

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+\d{1,3}[-. ]?)?\(?\d{3}\)?[-. ]?\d{3}[-. ]?\d{4}")
ADDRESS_PATTERN = re.compile(
    r"\b\d+\s+(?:[A-Za-z]+\s+){1,5}"
    r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr)\b",
    re.IGNORECASE,
)


@dataclass
class Logo:
    src: str
    alt: str = "Logo"


@dataclass
class Heading:
    level: str  # h1..h4
    text: str
    css_classes: str = ""


@dataclass
class Image:
    src: str
    alt: str = ""
    css_classes: str = ""


@dataclass
class Link:
    text: str
    href: str
    css_classes: str = ""


@dataclass
class PageContent:
    """Everything the prompt builder needs from one page."""

    url: str
    title: str = ""
    description: str = ""
    logo: Logo | None = None
    navigation: list[str] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    buttons: list[str] = field(default_factory=list)
    contact_info: list[str] = field(default_factory=list)
    social_links: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _classes(element) -> str:
    value = element.get("class") or []
    if isinstance(value, str):
        return value
    return " ".join(value)


def _text(element) -> str:
    return " ".join(element.get_text(" ", strip=True).split())


def resolve_url(base_url: str, href: str) -> str | None:
    """Absolute form of ``href``, or None when it cannot be parsed."""
    try:
        return urljoin(base_url, href)
    except ValueError:
        return None


def body_text(soup: BeautifulSoup) -> str:
    """Visible-ish text of the document body, whitespace-collapsed."""
    root = soup.body or soup
    return " ".join(root.get_text(" ", strip=True).split())


class ContentExtractor:
    """Extract a ``PageContent`` record from HTML using tolerant heuristics."""

    # Probed in order, first match wins
    LOGO_SELECTORS = [
        ".logo img",
        ".brand img",
        ".header-logo img",
        "header img",
        ".navbar-brand img",
        ".site-logo img",
    ]
    LOGO_FALLBACK_SELECTOR = "header img, .header img, .navbar img"

    NAVIGATION_SELECTOR = "nav a, .navbar a, .navigation a, .menu a"
    HEADING_SELECTOR = "h1, h2, h3, h4"
    BUTTON_SELECTOR = "button, .btn, input[type='submit']"

    SOCIAL_DOMAINS = ["facebook", "twitter", "instagram", "linkedin", "youtube"]

    # Checked in order, first matching category wins
    BUSINESS_KEYWORDS = [
        ("flower-shop", ["flower", "floral", "bouquet"]),
        ("healthcare", ["health", "medical", "doctor"]),
        ("tech", ["tech", "software", "app"]),
        ("pet-care", ["pet", "dog", "cat"]),
        ("blog", ["blog", "article", "post"]),
        ("retail-store", ["retail", "shop", "store"]),
    ]

    THEME_KEYWORDS = [
        (["modern", "tech", "innovation"], ["clean-white", "dark-black"]),
        (["creative", "art", "design"], ["colorful", "clean-white"]),
        (["professional", "business", "corporate"], ["clean-white", "dark-black"]),
        (["warm", "friendly", "welcoming"], ["colorful", "clean-white"]),
    ]

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html or "", "lxml")

    def extract(self, html: str, base_url: str) -> PageContent:
        """Extract structured content from raw HTML."""
        return self.extract_from_soup(self.parse(html), base_url)

    def extract_from_soup(self, soup: BeautifulSoup, base_url: str) -> PageContent:
        """Extract structured content from an already parsed document."""
        text = body_text(soup)
        return PageContent(
            url=base_url,
            title=self.extract_title(soup),
            description=self.extract_description(soup),
            logo=self.find_logo(soup, base_url),
            navigation=self.extract_navigation(soup),
            headings=self.extract_headings(soup),
            paragraphs=self.extract_paragraphs(soup),
            images=self.extract_images(soup, base_url),
            links=self.extract_links(soup),
            buttons=self.extract_buttons(soup),
            contact_info=self.extract_contact_info(text),
            social_links=self.extract_social_links(soup),
        )

    def extract_title(self, soup: BeautifulSoup) -> str:
        if soup.title is None:
            return ""
        return _text(soup.title)

    def extract_description(self, soup: BeautifulSoup) -> str:
        meta = soup.find("meta", attrs={"name": "description"})
        if meta is None:
            return ""
        return (meta.get("content") or "").strip()

    def find_logo(self, soup: BeautifulSoup, base_url: str = "") -> Logo | None:
        """Return the first logo-like image, or None."""
        for selector in self.LOGO_SELECTORS + [self.LOGO_FALLBACK_SELECTOR]:
            img = soup.select_one(selector)
            if img is None or not img.get("src"):
                continue
            src = resolve_url(base_url, img["src"])
            if src:
                return Logo(src=src, alt=img.get("alt") or "Logo")
        return None

    def extract_navigation(self, soup: BeautifulSoup) -> list[str]:
        """Anchor text from nav-like containers, in document order."""
        items: list[str] = []
        for anchor in soup.select(self.NAVIGATION_SELECTOR):
            text = _text(anchor)
            if not text or len(text) >= MAX_NAV_TEXT_LENGTH or text in items:
                continue
            items.append(text)
            if len(items) >= MAX_NAVIGATION:
                break
        return items

    def extract_headings(self, soup: BeautifulSoup) -> list[Heading]:
        headings = []
        for element in soup.select(self.HEADING_SELECTOR):
            text = _text(element)
            if not text:
                continue
            headings.append(Heading(level=element.name, text=text, css_classes=_classes(element)))
            if len(headings) >= MAX_HEADINGS:
                break
        return headings

    def extract_paragraphs(self, soup: BeautifulSoup) -> list[str]:
        paragraphs = []
        for element in soup.find_all("p"):
            text = _text(element)
            if len(text) > MIN_PARAGRAPH_LENGTH:
                paragraphs.append(text)
                if len(paragraphs) >= MAX_PARAGRAPHS:
                    break
        return paragraphs

    def extract_images(self, soup: BeautifulSoup, base_url: str = "") -> list[Image]:
        images = []
        for element in soup.find_all("img"):
            if not element.get("src"):
                continue
            src = resolve_url(base_url, element["src"])
            if not src:
                continue
            images.append(
                Image(
                    src=src,
                    alt=element.get("alt") or "",
                    css_classes=_classes(element),
                )
            )
            if len(images) >= MAX_IMAGES:
                break
        return images

    def extract_links(self, soup: BeautifulSoup) -> list[Link]:
        """Anchors that carry both text and an href."""
        links = []
        for element in soup.find_all("a"):
            text = _text(element)
            href = element.get("href")
            if not text or not href:
                continue
            links.append(Link(text=text, href=href, css_classes=_classes(element)))
            if len(links) >= MAX_LINKS:
                break
        return links

    def extract_buttons(self, soup: BeautifulSoup) -> list[str]:
        buttons = []
        for element in soup.select(self.BUTTON_SELECTOR):
            if element.name == "input":
                text = (element.get("value") or "").strip()
            else:
                text = _text(element)
            if text:
                buttons.append(text)
                if len(buttons) >= MAX_BUTTONS:
                    break
        return buttons

    def extract_contact_info(self, text: str) -> list[str]:
        """Emails, phone numbers and street addresses found in ``text``.

        Each category is capped and keeps first-encountered order.
        """
        return (
            self._first_matches(EMAIL_PATTERN, text, MAX_EMAILS)
            + self._first_matches(PHONE_PATTERN, text, MAX_PHONES)
            + self._first_matches(ADDRESS_PATTERN, text, MAX_ADDRESSES)
        )

    def _first_matches(self, pattern: re.Pattern, text: str, limit: int) -> list[str]:
        found: list[str] = []
        for match in pattern.finditer(text):
            value = match.group(0).strip()
            if value and value not in found:
                found.append(value)
                if len(found) >= limit:
                    break
        return found

    def extract_social_links(self, soup: BeautifulSoup) -> list[str]:
        """Known social-platform anchors formatted as ``"text: href"``."""
        social = []
        for anchor in soup.find_all("a", href=True):
            href = anchor["href"]
            text = _text(anchor)
            if not text:
                continue
            if any(domain in href.lower() for domain in self.SOCIAL_DOMAINS):
                social.append(f"{text}: {href}")
                if len(social) >= MAX_SOCIAL_LINKS:
                    break
        return social

    def estimate_business_type(self, text: str) -> str:
        """Keyword match over lower-cased page text."""
        lowered = text.lower()
        for business_type, keywords in self.BUSINESS_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                return business_type
        return DEFAULT_BUSINESS_TYPE

    def suggest_themes(self, text: str) -> list[str]:
        """Up to three theme suggestions, always padded with the defaults."""
        lowered = text.lower()
        themes: list[str] = []
        for keywords, suggested in self.THEME_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                themes.extend(suggested)

        for theme in DEFAULT_THEMES:
            if theme not in themes:
                themes.append(theme)

        unique = list(dict.fromkeys(themes))
        return unique[:3]
