"""Query relay between the client and the model API.

Flow for one question:
1. Work out file metadata and the user query, either from structured
   request fields or by re-parsing a legacy flattened prompt
2. Send the unmodified prompt to the model
3. Record the exchange in the interaction log
"""

import logging

from config import Settings
from db import FileMetadata, InteractionLogService, InteractionRecord
from llm import BaseLLMService
from services.prompt_parser import parse_prompt_context
from services.types import ParsedPrompt
from utils import truncate_text

logger = logging.getLogger(__name__)


class RelayService:
    """Stateless handler for one prompt at a time.

    Each call is independent; the only shared state is owned by the
    injected LLM client and interaction log.
    """

    def __init__(
        self,
        settings: Settings,
        llm: BaseLLMService,
        interaction_log: InteractionLogService,
    ) -> None:
        self.settings = settings
        self.llm = llm
        self.interaction_log = interaction_log

    def resolve_context(
        self,
        prompt: str,
        file: FileMetadata | None = None,
        query: str | None = None,
    ) -> ParsedPrompt:
        """Prefer structured fields; fall back to re-parsing the prompt."""
        if file is not None or query:
            return ParsedPrompt(query=query or prompt, file=file)
        return parse_prompt_context(prompt)

    async def handle_query(
        self,
        prompt: str,
        file: FileMetadata | None = None,
        query: str | None = None,
        request_id: str | None = None,
    ) -> str:
        """Answer a prompt and log the interaction.

        Args:
            prompt: Full prompt, forwarded to the model as-is.
            file: Structured metadata of the uploaded file, if the client sent it.
            query: The user's question on its own, if the client sent it.
            request_id: Tag used in log lines.

        Returns:
            The model's answer.

        Raises:
            UpstreamAPIError: Model API answered with a non-2xx status.
            LLMError: Model API could not be reached.
            InteractionLogError: Log write failed and strict logging is on.
        """
        context = self.resolve_context(prompt, file, query)
        logger.info("[%s] Received query: %s", request_id, truncate_text(context.query, 100))

        answer = await self.llm.generate(prompt)

        record = InteractionRecord(
            file=context.file,
            query=context.query,
            response=answer,
        )
        await self._record(record, request_id)

        logger.info("[%s] Response generated successfully", request_id)
        return answer

    async def _record(self, record: InteractionRecord, request_id: str | None) -> None:
        try:
            await self.interaction_log.add_interaction(record)
        except Exception:
            if self.settings.strict_interaction_log:
                raise
            logger.exception("[%s] Interaction not recorded", request_id)
