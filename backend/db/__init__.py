"""Persistence layer."""

from db.firestore import InteractionLogError, InteractionLogService
from db.models import FileMetadata, InteractionRecord

__all__ = [
    "InteractionLogService",
    "InteractionLogError",
    "FileMetadata",
    "InteractionRecord",
]
