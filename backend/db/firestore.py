"""Firestore service for the interaction log.

Stores one document per answered question:
- `interactions/{auto_id}` - file metadata, query, response, timestamp

The log is append-only; nothing here updates or deletes records.
"""

import base64
import json
import logging
import os
import time
from datetime import UTC, datetime
from typing import Any

from google.cloud.firestore_v1 import AsyncClient
from google.oauth2 import service_account

from config import Settings, get_settings
from db.models import InteractionRecord

logger = logging.getLogger(__name__)


class InteractionLogError(Exception):
    """Raised when an interaction cannot be written."""


def _load_firebase_credentials(creds_value: str) -> dict:
    """Load Firebase credentials from JSON string, file path, or base64."""
    if os.path.isfile(creds_value):
        with open(creds_value) as f:
            return json.load(f)

    try:
        return json.loads(creds_value)
    except json.JSONDecodeError:
        pass

    try:
        decoded = base64.b64decode(creds_value).decode("utf-8")
        return json.loads(decoded)
    except (ValueError, UnicodeDecodeError):
        pass

    raise ValueError("FIREBASE_CREDENTIALS is not valid JSON, file path, or base64")


class InteractionLogService:
    """Append-only interaction store backed by Firestore."""

    def __init__(
        self,
        settings: Settings | None = None,
        db: AsyncClient | None = None,
    ) -> None:
        """Initialize Firestore client unless one is supplied."""
        self.settings = settings or get_settings()
        self.collection = self.settings.interactions_collection

        if db is not None:
            self.db = db
            return

        try:
            creds_dict = _load_firebase_credentials(self.settings.firebase_credentials)
            gcp_credentials = service_account.Credentials.from_service_account_info(
                creds_dict
            )
            self.db = AsyncClient(
                project=creds_dict.get("project_id"),
                credentials=gcp_credentials,
            )
            logger.info("Firestore client initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize Firestore: %s", e)
            raise

    async def add_interaction(self, record: InteractionRecord) -> str:
        """Append an interaction and return its generated id."""
        try:
            doc_ref = self.db.collection(self.collection).document()
            await doc_ref.set(record.model_dump(by_alias=True))
            logger.debug("Stored interaction %s", doc_ref.id)
            return doc_ref.id

        except Exception as e:
            logger.error("Failed to store interaction: %s", e)
            raise InteractionLogError(f"Failed to store interaction: {e}") from e

    async def health_check(self) -> dict[str, Any]:
        """Check Firestore connection health."""
        start = time.time()
        try:
            test_ref = self.db.collection("_health_check").document("test")
            await test_ref.set({"timestamp": datetime.now(UTC)})
            await test_ref.get()

            latency = (time.time() - start) * 1000
            return {"status": "healthy", "latency_ms": round(latency, 2)}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    async def aclose(self) -> None:
        """Close the gRPC channel behind the Firestore client."""
        await self.db._firestore_api.transport.close()
