"""Recover file metadata from a prompt that was flattened into one string.

Only prompts built with the ``Context from uploaded files:`` template can be
parsed. The match is best-effort and covers the first ``File:`` reference
only; anything else is treated as a bare query.
"""

import re

from db.models import FileMetadata
from services.types import ParsedPrompt

CONTEXT_PATTERN = re.compile(
    r"Context from uploaded files:\n(.*?)\n\nUser Query: (.*)", re.DOTALL
)
FILE_HEADER_PATTERN = re.compile(r"File: (.*?) \((.*?)\)")

CONTENT_MARKER = "Content:"
TRUNCATION_MARKER = "..."

IMAGE_PLACEHOLDER = "Image file uploaded (visual content available)"


def placeholder_content(category: str) -> str:
    """Content stored for files whose text is not carried in the prompt."""
    if category == "image":
        return IMAGE_PLACEHOLDER
    return f"{category} file uploaded"


def _extract_content(block: str) -> str | None:
    start = block.find(CONTENT_MARKER)
    if start == -1:
        return None
    start += len(CONTENT_MARKER)
    end = block.find(TRUNCATION_MARKER, start)
    if end == -1:
        end = len(block)
    return block[start:end].strip()


def parse_prompt_context(prompt: str) -> ParsedPrompt:
    """Split a legacy prompt into its file metadata and user query.

    Args:
        prompt: Full prompt as received by the relay.

    Returns:
        ParsedPrompt. When the context template does not match, the whole
        prompt is the query and ``file`` is None.
    """
    match = CONTEXT_PATTERN.search(prompt)
    if not match or not match.group(1) or not match.group(2):
        return ParsedPrompt(query=prompt)

    block, query = match.group(1), match.group(2)

    header = FILE_HEADER_PATTERN.search(block)
    if not header:
        return ParsedPrompt(query=query)

    name, category = header.group(1), header.group(2)
    content = _extract_content(block) if category == "text" else None
    if content is None:
        content = placeholder_content(category)

    return ParsedPrompt(
        query=query,
        file=FileMetadata(name=name, category=category, content=content),
    )
