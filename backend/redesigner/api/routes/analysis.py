"""Synchronous single-page website analysis."""

import logging

from fastapi import APIRouter, HTTPException, status

from redesigner.api.deps import AppSettings, CamelModel
from redesigner.exceptions import FetchFailure
from redesigner.services.content_extractor import body_text
from redesigner.services.crawler import SiteCrawler
from redesigner.services.url_validator import URLValidator

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_SUMMARY_HEADINGS = 5


class AnalyzeWebsiteRequest(CamelModel):
    website: str | None = None


class LogoResponse(CamelModel):
    src: str
    alt: str


class HeadingResponse(CamelModel):
    level: str
    text: str
    css_classes: str


class ImageResponse(CamelModel):
    src: str
    alt: str
    css_classes: str


class LinkResponse(CamelModel):
    text: str
    href: str
    css_classes: str


class PageContentResponse(CamelModel):
    """Full extracted content of a page."""

    url: str
    title: str
    description: str
    logo: LogoResponse | None = None
    navigation: list[str]
    headings: list[HeadingResponse]
    paragraphs: list[str]
    images: list[ImageResponse]
    links: list[LinkResponse]
    buttons: list[str]
    contact_info: list[str]
    social_links: list[str]


class AnalysisResponse(CamelModel):
    """Form pre-fill summary plus the full page content."""

    website: str
    title: str
    description: str
    logo: LogoResponse | None = None
    navigation: list[str]
    headings: list[str]
    contact_info: list[str]
    social_links: list[str]
    estimated_business_type: str
    suggested_themes: list[str]
    content: PageContentResponse


@router.post("/analyze-website", response_model=AnalysisResponse)
def analyze_website(request: AnalyzeWebsiteRequest, settings: AppSettings) -> AnalysisResponse:
    """Fetch one page and summarize it without creating a job."""
    validation = URLValidator().validate(request.website)
    if not validation.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=validation.error_message,
        )
    website = validation.normalized_url

    crawler = SiteCrawler(settings)
    try:
        soup = crawler.fetch_document(website)
    except FetchFailure as e:
        logger.warning(f"Analysis failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )

    extractor = crawler.extractor
    content = extractor.extract_from_soup(soup, website)
    text = body_text(soup)

    return AnalysisResponse(
        website=website,
        title=content.title,
        description=content.description,
        logo=LogoResponse.model_validate(content.logo) if content.logo else None,
        navigation=content.navigation,
        headings=[heading.text for heading in content.headings[:MAX_SUMMARY_HEADINGS]],
        contact_info=content.contact_info,
        social_links=content.social_links,
        estimated_business_type=extractor.estimate_business_type(text),
        suggested_themes=extractor.suggest_themes(text),
        content=PageContentResponse.model_validate(content),
    )
