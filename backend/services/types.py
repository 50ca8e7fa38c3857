"""Shared types and dataclasses for services.

Provides typed alternatives to dict[str, Any] for better type safety.
"""

from dataclasses import dataclass

from db.models import FileMetadata


@dataclass
class ParsedPrompt:
    """File metadata and query recovered from a flattened prompt."""

    query: str
    file: FileMetadata | None = None
