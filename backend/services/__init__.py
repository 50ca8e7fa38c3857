"""Services module for the relay's business logic.

Contains:
- Prompt re-parsing for legacy flattened prompts
- Relay orchestration (model call + interaction log)

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from db.models import FileMetadata, InteractionRecord
from services.prompt_parser import parse_prompt_context, placeholder_content
from services.relay import RelayService
from services.types import ParsedPrompt

__all__ = [
    "RelayService",
    "parse_prompt_context",
    "placeholder_content",
    # Types
    "FileMetadata",
    "InteractionRecord",
    "ParsedPrompt",
]
