"""Cleanup and branding of model-generated HTML.

The model's output format is not guaranteed, so cleanup is heuristic string
slicing rather than parsing. Both ``sanitize`` and ``brand`` are idempotent.
"""

import html
import re

from redesigner.exceptions import MalformedArtifact

# Marker attribute on the injected header block
BRAND_MARKER = "data-redesign-banner"

FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_-]*")
DOCTYPE_PATTERN = re.compile(r"<!doctype\s+html", re.IGNORECASE)
DOCUMENT_PATTERN = re.compile(r"<(?:html|body)[\s>]", re.IGNORECASE)
HEAD_OPEN_PATTERN = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
HTML_OPEN_PATTERN = re.compile(r"<html(?:\s[^>]*)?>", re.IGNORECASE)
BODY_OPEN_PATTERN = re.compile(r"<body(?:\s[^>]*)?>", re.IGNORECASE)
HEAD_CLOSE_PATTERN = re.compile(r"</head\s*>", re.IGNORECASE)
TITLE_PATTERN = re.compile(r"<title[\s>]", re.IGNORECASE)
CHARSET_PATTERN = re.compile(r"<meta[^>]+charset", re.IGNORECASE)
VIEWPORT_PATTERN = re.compile(r"<meta[^>]+name=[\"']viewport", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(r"<meta[^>]+name=[\"']description", re.IGNORECASE)
MARKUP_START_PATTERN = re.compile(r"<!doctype\s+html|<html[\s>]", re.IGNORECASE)

# Openers models tend to put ahead of the document
PREAMBLES = [
    "here is the complete html",
    "here is the redesigned",
    "here is the html",
    "here is your",
    "here's the complete html",
    "here's the redesigned",
    "here's the html",
    "here's your",
    "below is the complete html",
    "below is the redesigned",
    "sure! here",
    "sure, here",
    "certainly! here",
    "certainly, here",
    "this html document",
    "this redesign",
    "i've redesigned",
    "i have redesigned",
]

BRAND_STYLE = """<style>
  .demo-header {
    background: #f8f9fa;
    border-bottom: 2px solid #007bff;
    padding: 1rem;
    text-align: center;
    font-family: Arial, sans-serif;
  }
  .demo-header h1 { margin: 0; color: #007bff; font-size: 1.5rem; }
  .demo-header p { margin: 0.5rem 0 0 0; color: #666; font-size: 0.9rem; }
  .demo-header a { color: #007bff; text-decoration: none; }
  .demo-header a:hover { text-decoration: underline; }
</style>"""


class ResponseSanitizer:
    """Isolate an HTML document from raw model output and brand it."""

    def sanitize(self, raw: str) -> str:
        """Reduce raw model output to a single HTML document.

        Raises:
            MalformedArtifact: if no plausible document can be isolated.
        """
        if not raw or not raw.strip():
            raise MalformedArtifact("Model returned an empty response")

        text = FENCE_PATTERN.sub("", raw)
        text = self._strip_preambles(text)

        start = self._content_start(text)
        end = text.rfind(">")
        if start == -1 or end < start:
            raise MalformedArtifact("Model response contains no HTML markup")
        document = text[start : end + 1]

        if not self._starts_as_document(document):
            match = DOCTYPE_PATTERN.search(text)
            if match:
                document = text[match.start() : end + 1]

        document = document.strip()
        if not DOCUMENT_PATTERN.search(document):
            raise MalformedArtifact("Model response is not a complete HTML document")
        return document

    def _strip_preambles(self, text: str) -> str:
        """Drop preamble lines ahead of the markup.

        Scanning stops at the first line that opens with a tag, so text inside
        the document is never touched. A preamble sharing its line with the
        document start is cut back to where the document begins.
        """
        lines = text.splitlines(keepends=True)
        for index, line in enumerate(lines):
            stripped = line.strip()
            if stripped.startswith("<"):
                break
            if not stripped.lower().startswith(tuple(PREAMBLES)):
                continue
            match = MARKUP_START_PATTERN.search(line)
            if match:
                lines[index] = line[match.start() :]
                break
            lines[index] = ""
        return "".join(lines)

    def _content_start(self, text: str) -> int:
        """Index of the first tag, keeping a doctype that precedes it."""
        start = -1
        for match in re.finditer("<", text):
            if text[match.start() + 1 : match.start() + 2] != "!":
                start = match.start()
                break
        if start == -1:
            return -1

        doctype = DOCTYPE_PATTERN.search(text, 0, start)
        if doctype:
            return doctype.start()
        return start

    def _starts_as_document(self, document: str) -> bool:
        lowered = document.lstrip().lower()
        return lowered.startswith("<!doctype") or lowered.startswith("<html")

    def brand(self, document: str, source_title: str, source_url: str) -> str:
        """Insert meta tags and the redesign header block.

        A document that already carries the header block is returned unchanged.
        """
        if BRAND_MARKER in document:
            return document

        url = html.escape(source_url, quote=True)
        label = html.escape(source_title or source_url)

        meta = []
        if not CHARSET_PATTERN.search(document):
            meta.append('<meta charset="UTF-8">')
        if not VIEWPORT_PATTERN.search(document):
            meta.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
        if not DESCRIPTION_PATTERN.search(document):
            meta.append(f'<meta name="description" content="AI-redesigned version of {url}">')
        if not TITLE_PATTERN.search(document):
            meta.append(f"<title>Redesigned: {url}</title>")
        meta.append(BRAND_STYLE)
        head_block = "\n".join(meta)

        header_block = (
            f'<div class="demo-header" {BRAND_MARKER}>\n'
            "  <h1>AI-Redesigned Website</h1>\n"
            f'  <p>This is an AI-generated redesign of <a href="{url}" target="_blank" '
            f'rel="noopener">{label}</a></p>\n'
            "  <p>All original content has been preserved and enhanced with modern design</p>\n"
            "</div>"
        )

        document = self._insert_head(document, head_block)
        return self._insert_body(document, header_block)

    def _insert_head(self, document: str, block: str) -> str:
        match = HEAD_OPEN_PATTERN.search(document)
        if match:
            return document[: match.end()] + "\n" + block + document[match.end() :]
        match = HTML_OPEN_PATTERN.search(document)
        if match:
            return (
                document[: match.end()]
                + f"\n<head>\n{block}\n</head>"
                + document[match.end() :]
            )
        return f"<head>\n{block}\n</head>\n{document}"

    def _insert_body(self, document: str, block: str) -> str:
        match = BODY_OPEN_PATTERN.search(document)
        if match:
            return document[: match.end()] + "\n" + block + document[match.end() :]
        match = HEAD_CLOSE_PATTERN.search(document)
        if match:
            return document[: match.end()] + "\n" + block + document[match.end() :]
        return document + "\n" + block
