from __future__ import annotations

import asyncio
from typing import Optional

from livescore.config import Settings
from livescore.events.schema import BallEvent
from livescore.extraction.errors import ExtractionFailure
from livescore.extraction.llm_client import LLMClient
from livescore.extraction.parsing import parse_ball_event
from livescore.extraction.prompting import SYSTEM_PROMPT, build_extraction_prompt


class EventExtractor:
    """
    Turns one raw commentary message into a validated BallEvent.

    The classification service is untrusted: anything other than a
    well-formed response surfaces as ExtractionFailure, never as a
    partially filled event.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        timeout_sec: Optional[float] = 30.0,
        max_tokens: Optional[int] = None,
    ) -> None:
        self.llm_client = llm_client
        self.timeout_sec = timeout_sec
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings, debug: bool = False) -> "EventExtractor":
        llm = LLMClient(
            system_prompt=SYSTEM_PROMPT,
            model_name=settings.model_name,
            api_key=settings.api_key,
            debug=debug,
        )
        return cls(llm, timeout_sec=settings.classify_timeout_sec)

    async def _classify(self, message: str) -> str:
        messages = build_extraction_prompt(message)
        call = self.llm_client.agenerate(messages, max_tokens=self.max_tokens, temperature=0.0)
        if self.timeout_sec is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout_sec)

    async def extract(self, message: str) -> BallEvent:
        """
        Classify `message`.

        Raises ExtractionFailure (or its MalformedEvent subclass) when no
        valid event can be produced.
        """
        try:
            raw = await self._classify(message)
        except asyncio.TimeoutError as e:
            raise ExtractionFailure(
                f"classification timed out after {self.timeout_sec}s"
            ) from e
        except Exception as e:
            raise ExtractionFailure(f"classification service error: {e}") from e

        return parse_ball_event(raw)
