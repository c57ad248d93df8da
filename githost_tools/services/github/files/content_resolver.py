"""Resolve the content for a single-file write.

Content is either passed literally or scraped from a published document
that embeds it in exactly one ``<code>`` element.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from githost_tools.services.github.api.client import GitHubAPIClient
from githost_tools.services.github.errors import ContentExtractionError, InvalidArgumentError

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r"<code\b[^>]*>(.*?)</code>", re.DOTALL | re.IGNORECASE)
ENTITY_PATTERN = re.compile(r"&[a-zA-Z0-9#]+;")

HTML_ENTITIES = {
    "&quot;": '"',
    "&amp;": "&",
    "&apos;": "'",
    "&lt;": "<",
    "&gt;": ">",
    "&#x27;": "'",
}


def decode_html_entities(text: str) -> str:
    """Decode the supported HTML entities in one pass; others are left as-is."""
    return ENTITY_PATTERN.sub(lambda match: HTML_ENTITIES.get(match.group(0), match.group(0)), text)


class CodeBlockStatus(str, Enum):
    FOUND = "found"
    MISSING = "missing"
    AMBIGUOUS = "ambiguous"


@dataclass
class CodeBlockExtraction:
    status: CodeBlockStatus
    content: Optional[str] = None
    block_count: int = 0


def extract_code_block(html: str) -> CodeBlockExtraction:
    """Find the single ``<code>`` block in ``html`` and decode its text."""
    blocks = CODE_BLOCK_PATTERN.findall(html)
    if not blocks:
        return CodeBlockExtraction(status=CodeBlockStatus.MISSING)
    if len(blocks) > 1:
        return CodeBlockExtraction(status=CodeBlockStatus.AMBIGUOUS, block_count=len(blocks))
    return CodeBlockExtraction(
        status=CodeBlockStatus.FOUND,
        content=decode_html_entities(blocks[0]),
        block_count=1,
    )


class ContentResolver:
    """Produces the text to write from literal content or a document URL."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        self.client = client or GitHubAPIClient()

    async def resolve(
        self,
        content: Optional[str] = None,
        document_url: Optional[str] = None,
    ) -> str:
        """Return the file content from exactly one source.

        Args:
            content: Literal file content
            document_url: Public URL of a document holding the content in one <code> block

        Returns:
            File content

        Raises:
            InvalidArgumentError: If both or neither source is given
            ContentExtractionError: If the document has zero or several code blocks
            RemoteError: If the document cannot be downloaded
        """
        if content is not None and document_url is not None:
            raise InvalidArgumentError(
                "Only one of 'content' or 'published_artifact_url' can be provided"
            )
        if content is None and document_url is None:
            raise InvalidArgumentError(
                "Either 'content' or 'published_artifact_url' must be provided"
            )

        if content is not None:
            return content

        html = await self.client.fetch_text(document_url)
        extraction = extract_code_block(html)

        if extraction.status is CodeBlockStatus.MISSING:
            raise ContentExtractionError(document_url, "no <code> block found")
        if extraction.status is CodeBlockStatus.AMBIGUOUS:
            raise ContentExtractionError(
                document_url, f"found {extraction.block_count} <code> blocks, expected one"
            )

        logger.info(f"Extracted {len(extraction.content)} characters from {document_url}")
        return extraction.content
