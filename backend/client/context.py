"""Context building for questions about a local file.

Handles:
- File categorisation from MIME type and filename
- Text extraction from PDF (PyMuPDF), DOCX (python-docx) and plain text files
- Prompt assembly with a fixed-length content preview

Blocking file reads and parsing run through asyncio.to_thread.
"""

import asyncio
import io
import logging
import mimetypes
import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF
from docx import Document as DocxDocument

from services.prompt_parser import placeholder_content

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 1000
TRUNCATION_MARKER = "..."

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

# Checked in order; the first category whose MIME prefix or extension matches wins
CATEGORY_RULES: tuple[tuple[str, str, re.Pattern[str]], ...] = (
    ("text", "text/", re.compile(r"\.(txt|md|pdf|docx|pptx)$", re.IGNORECASE)),
    ("image", "image/", re.compile(r"\.(png|jpg|jpeg|gif|webp)$", re.IGNORECASE)),
    ("audio", "audio/", re.compile(r"\.(mp3|wav|ogg)$", re.IGNORECASE)),
    ("video", "video/", re.compile(r"\.(mp4|webm|mov)$", re.IGNORECASE)),
)
CATEGORIES = frozenset({"text", "image", "audio", "video", "other"})


class FileReadError(Exception):
    """Raised when a file cannot be read or parsed."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Failed to read {filename}")
        self.filename = filename


@dataclass
class UploadedFile:
    """A file read on the client, ready to be placed in a prompt."""

    name: str
    type: str
    size: int
    category: str
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    processed_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def preview(self) -> str:
        return self.content[:PREVIEW_LENGTH]

    def to_metadata(self) -> dict[str, Any]:
        """Structured metadata sent to the relay alongside the prompt."""
        return {
            "name": self.name,
            "type": self.type,
            "size": self.size,
            "category": self.category,
            "content": self.preview,
            "processedAt": self.processed_at,
        }


def classify(mime_type: str | None, file_name: str) -> str:
    """Return the file category: text, image, audio, video or other."""
    mime_type = mime_type or ""
    for category, prefix, extensions in CATEGORY_RULES:
        if mime_type.startswith(prefix) or extensions.search(file_name or ""):
            return category
    return "other"


def extract_text(pdf_bytes: bytes) -> str:
    """Extract text from a PDF, one line per page.

    Words on a page are joined with single spaces and pages are joined with
    a newline in page order. A document without pages yields "".
    """
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        pages = []
        for page in doc:
            words = page.get_text("words")
            pages.append(" ".join(word[4] for word in words))
        return "\n".join(pages)
    finally:
        doc.close()


def _extract_docx_text(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    text_parts = [p.text for p in doc.paragraphs if p.text.strip()]

    for table in doc.tables:
        for row in table.rows:
            row_text = " | ".join(cell.text.strip() for cell in row.cells)
            if row_text.strip():
                text_parts.append(row_text)

    return "\n".join(text_parts)


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _is_pdf(mime_type: str, name: str) -> bool:
    return mime_type == PDF_MIME_TYPE or name.lower().endswith(".pdf")


def _is_docx(mime_type: str, name: str) -> bool:
    return mime_type == DOCX_MIME_TYPE or name.lower().endswith(".docx")


def _read_file_sync(path: Path, mime_type: str) -> UploadedFile:
    data = path.read_bytes()
    name = path.name
    category = classify(mime_type, name)

    if _is_pdf(mime_type, name):
        content = extract_text(data)
    elif _is_docx(mime_type, name):
        content = _extract_docx_text(data)
    elif category == "text":
        content = _decode_text(data)
    else:
        content = placeholder_content(category)

    return UploadedFile(
        name=name,
        type=mime_type,
        size=len(data),
        category=category,
        content=content,
    )


async def read_file(path: str | Path, mime_type: str | None = None) -> UploadedFile:
    """Read a local file into an UploadedFile.

    Args:
        path: File to read.
        mime_type: MIME type reported by the picker; guessed from the name if missing.

    Raises:
        FileReadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if mime_type is None:
        mime_type = mimetypes.guess_type(path.name)[0] or ""

    try:
        uploaded = await asyncio.to_thread(_read_file_sync, path, mime_type)
    except Exception as e:
        logger.error("Failed to read %s: %s", path.name, e)
        raise FileReadError(path.name) from e

    logger.debug("Read %s as %s (%d bytes)", uploaded.name, uploaded.category, uploaded.size)
    return uploaded


def build_context(files: Iterable[UploadedFile]) -> str:
    """Render files as prompt context.

    Each entry carries at most PREVIEW_LENGTH characters of content and
    always ends with the truncation marker.
    """
    return "\n\n".join(
        f"File: {f.name}\nContent: {f.preview}{TRUNCATION_MARKER}" for f in files
    )


def build_prompt(context: str, query: str) -> str:
    return f"Context:\n{context}\n\nQuery:\n{query}"
