"""HTML segmenter — carve a documentation page into a titled Document.

The page is parsed once.  Every later step works on a deep copy of the
part it needs, so no step ever observes a tree another step has already
edited:

1. title and source URL are read from the untouched tree;
2. each section marker is copied, its code placeholders are rewritten to
   fenced blocks, and the copy is converted to Markdown;
3. the content region is copied with every section marker and the
   floating feedback widget removed, and the remainder becomes the
   whole-document Markdown, followed by a generated section index.

Usage::

    from doc_indexer.extraction.segmenter import segment_page

    document = segment_page(html, "https://shopify.dev/docs/apps/discounts")
    for section in document.sections:
        print(section.order, section.section_title)
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Callable

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel

from doc_indexer.config import settings
from doc_indexer.exceptions import ConversionError, ExtractionError, ParseError
from doc_indexer.extraction.fetcher import fetch_page
from doc_indexer.extraction.markdown import html_to_markdown
from doc_indexer.models import Document, Section

logger = logging.getLogger(__name__)

MarkdownConverter = Callable[[str], str]

_TOKEN_PREFIX = "DOCINDEXERCODEBLOCK"


class PageLayout(BaseModel):
    """CSS selectors describing where things live on a documentation page.

    Attributes
    ----------
    host_prefix:
        Literal prefix stripped from the page URL to form ``source_url``.
    title_selector:
        Node holding the page title.
    content_selector:
        The single content region; required.
    section_selector:
        Section markers inside the content region.
    section_title_selector / section_anchor_selector:
        Heading text and anchor link, relative to a section marker.
    floating_ui_selector:
        Non-content widget removed before rendering the whole document.
    code_placeholder_selector:
        Elements carrying verbatim code in ``data-language`` /
        ``data-title`` attributes.
    """

    host_prefix: str = settings.host_prefix
    title_selector: str = settings.title_selector
    content_selector: str = settings.content_selector
    section_selector: str = settings.section_selector
    section_title_selector: str = settings.section_title_selector
    section_anchor_selector: str = settings.section_anchor_selector
    floating_ui_selector: str = settings.floating_ui_selector
    code_placeholder_selector: str = settings.code_placeholder_selector


def render_code_block(language: str, title: str, code: str) -> str:
    """Return a fenced Markdown code block; *code* is copied verbatim."""
    if title:
        return f'```{language} title="{title}"\n{code}\n```'
    return f"```{language}\n{code}\n```"


def splice_code_block(markdown: str, token: str, block: str) -> str:
    """Replace *token* in *markdown* with *block*.

    Continuation lines of *block* are prefixed like the token's own line
    (list indentation becomes spaces, blockquote markers are kept), so a
    fence nested in a list item or quote stays inside it.
    """
    match = re.search(rf"^(.*?){token}", markdown, re.MULTILINE)
    if match is None:
        return markdown
    indent = re.sub(r"[^\s>]", " ", match.group(1))
    first, *rest = block.split("\n")
    lines = [first] + [indent + line if line else indent.rstrip() for line in rest]
    return markdown[: match.end(1)] + "\n".join(lines) + markdown[match.end():]


def strip_host_prefix(page_url: str, host_prefix: str) -> str:
    """Remove *host_prefix* from the start of *page_url*, if present."""
    if host_prefix and page_url.startswith(host_prefix):
        return page_url[len(host_prefix):]
    return page_url


class HtmlSegmenter:
    """Split a documentation page into a :class:`Document` and its sections.

    Parameters
    ----------
    converter:
        HTML → Markdown callable.  It must raise
        :class:`~doc_indexer.exceptions.ConversionError` on failure.
    layout:
        Selectors for the page structure; defaults come from settings.
    trim_section_markdown:
        Strip whitespace around each section's Markdown.  Off by default:
        only the whole-document Markdown is trimmed.
    """

    def __init__(
        self,
        converter: MarkdownConverter = html_to_markdown,
        *,
        layout: PageLayout | None = None,
        trim_section_markdown: bool = settings.trim_section_markdown,
    ) -> None:
        self._convert = converter
        self.layout = layout or PageLayout()
        self.trim_section_markdown = trim_section_markdown
        self._factory = BeautifulSoup("", "html.parser")

    # -- public API -----------------------------------------------------------

    def segment(self, html: str, page_url: str) -> Document:
        """Segment *html* fetched from *page_url*.

        Raises
        ------
        ParseError
            The HTML could not be parsed.
        ExtractionError
            The content region is missing, or the whole-document body
            could not be converted (:class:`ConversionError`).
        """
        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as exc:
            raise ParseError(f"failed to parse HTML for {page_url}: {exc}") from exc

        title_node = soup.select_one(self.layout.title_selector)
        title = title_node.get_text().strip() if title_node else ""
        source_url = strip_host_prefix(page_url, self.layout.host_prefix)

        region = soup.select_one(self.layout.content_selector)
        if region is None:
            raise ExtractionError(
                f"content region {self.layout.content_selector!r} not found on {page_url}"
            )

        sections = self._extract_sections(region, title, source_url)
        body = self._render_body(region, page_url)

        section_list = "## Sections\n\n"
        for section in sections:
            section_list += f"- [{section.section_title}]({source_url}{section.section_anchor})\n"
        content_markdown = f"{body}\n\n{section_list}"

        logger.info("Segmented %s into %d sections", source_url, len(sections))
        return Document(
            source_title=title,
            source_url=source_url,
            content_markdown=content_markdown.strip(),
            sections=tuple(sections),
        )

    # -- internals ------------------------------------------------------------

    def _extract_sections(self, region: Tag, title: str, source_url: str) -> list[Section]:
        sections: list[Section] = []
        for index, marker in enumerate(region.select(self.layout.section_selector)):
            fragment = copy.copy(marker)

            heading = fragment.select_one(self.layout.section_title_selector)
            anchor_link = fragment.select_one(self.layout.section_anchor_selector)
            section_title = heading.get_text().strip() if heading else ""
            anchor = anchor_link.get("href", "") if anchor_link else ""

            try:
                markdown = self._to_markdown(fragment)
            except ConversionError as exc:
                logger.warning(
                    "Skipping section %d (%r) of %s: %s", index, section_title, source_url, exc
                )
                continue

            if self.trim_section_markdown:
                markdown = markdown.strip()

            sections.append(
                Section(
                    order=len(sections),
                    section_title=section_title,
                    source_title=title,
                    source_url=source_url,
                    section_anchor=anchor,
                    content_markdown=markdown,
                )
            )
        return sections

    def _render_body(self, region: Tag, page_url: str) -> str:
        body = copy.copy(region)
        for marker in body.select(self.layout.section_selector):
            marker.decompose()
        for node in body.select(self.layout.floating_ui_selector):
            node.decompose()

        try:
            return self._to_markdown(body)
        except ConversionError as exc:
            raise ConversionError(
                f"failed to convert document body of {page_url}: {exc}"
            ) from exc

    def _to_markdown(self, fragment: Tag) -> str:
        """Convert *fragment*'s inner HTML, splicing in fenced code blocks.

        Each code placeholder is replaced by an opaque token paragraph
        before conversion and the token is swapped for its fenced block
        afterwards, so the code never passes through Markdown escaping.
        """
        blocks: dict[str, str] = {}
        for placeholder in fragment.select(self.layout.code_placeholder_selector):
            token = f"{_TOKEN_PREFIX}{len(blocks)}X"
            blocks[token] = render_code_block(
                placeholder.get("data-language", ""),
                placeholder.get("data-title", ""),
                placeholder.string or "",
            )
            paragraph = self._factory.new_tag("p")
            paragraph.string = token
            placeholder.replace_with(paragraph)

        markdown = self._convert(fragment.decode_contents())
        for token, block in blocks.items():
            markdown = splice_code_block(markdown, token, block)
        return markdown


def segment_page(html: str, page_url: str) -> Document:
    """Segment *html* with the default layout and converter."""
    return HtmlSegmenter().segment(html, page_url)


def extract_document(
    page_url: str,
    *,
    segmenter: HtmlSegmenter | None = None,
    fetcher: Callable[[str], str] = fetch_page,
) -> Document:
    """Fetch *page_url* and segment it into a :class:`Document`."""
    html = fetcher(page_url)
    return (segmenter or HtmlSegmenter()).segment(html, page_url)
