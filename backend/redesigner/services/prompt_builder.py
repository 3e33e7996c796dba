"""Prompt templating for redesign and mockup generation."""

from redesigner.prompts import MOCKUP_IMAGE_PROMPT, REDESIGN_PROMPT
from redesigner.services.content_extractor import PageContent

MAX_PROMPT_HEADINGS = 5
MAX_PROMPT_PARAGRAPHS = 5
MAX_IMAGE_PROMPT_PARAGRAPHS = 3
MAX_PARAGRAPH_CHARS = 300
EMPTY = "none"


def _join(items: list[str], separator: str = ", ") -> str:
    values = [item for item in items if item]
    return separator.join(values) if values else EMPTY


def _truncate(text: str, limit: int = MAX_PARAGRAPH_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


class PromptBuilder:
    """Build model prompts from extracted page content.

    Pure string templating: the same content, business type and theme always
    produce the same prompt.
    """

    def build_redesign_prompt(self, content: PageContent, business_type: str, theme: str) -> str:
        headings = [f"{h.level}: {h.text}" for h in content.headings[:MAX_PROMPT_HEADINGS]]
        paragraphs = [_truncate(p) for p in content.paragraphs[:MAX_PROMPT_PARAGRAPHS]]
        logo = f"{content.logo.src} ({content.logo.alt})" if content.logo else EMPTY

        return REDESIGN_PROMPT.format(
            url=content.url,
            title=content.title or "Untitled",
            description=content.description or EMPTY,
            business_type=business_type,
            theme=theme,
            headings=_join(headings),
            paragraphs=_join(paragraphs, " | "),
            navigation=_join(content.navigation),
            buttons=_join(content.buttons[:10]),
            contact_info=_join(content.contact_info),
            social_links=_join(content.social_links),
            logo=logo,
        )

    def build_image_prompt(self, content: PageContent, business_type: str, theme: str) -> str:
        headings = [h.text for h in content.headings[:MAX_PROMPT_HEADINGS]]
        paragraphs = [_truncate(p) for p in content.paragraphs[:MAX_IMAGE_PROMPT_PARAGRAPHS]]

        return MOCKUP_IMAGE_PROMPT.format(
            business_type=business_type,
            theme=theme,
            title=content.title or "Website",
            description=content.description or EMPTY,
            headings=_join(headings),
            paragraphs=_join(paragraphs, " | "),
            navigation=_join(content.navigation),
            contact_info=_join(content.contact_info),
            social_links=_join(content.social_links),
        )
