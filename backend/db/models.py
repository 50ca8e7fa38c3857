"""Firestore document schemas for the interaction log.

These represent the structure of documents stored in Firestore.
`FileMetadata` doubles as the `file` field of the query request body.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class FileMetadata(BaseModel):
    """File description stored with an interaction."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Original filename")
    category: str = Field(..., description="text, image, audio, video or other")
    content: str | None = Field(None, description="Content preview or placeholder")
    type: str | None = Field(None, description="MIME type")
    size: int | None = Field(None, description="Size in bytes")
    processed_at: str | None = Field(
        None, alias="processedAt", description="When the client read the file"
    )


class InteractionRecord(BaseModel):
    """One answered question.

    Path: interactions/{auto_id}
    """

    query: str = Field(..., description="The user's question, or the whole prompt")
    response: str = Field(..., description="Answer returned by the model")
    file: FileMetadata | None = Field(None, description="Uploaded file, if known")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
