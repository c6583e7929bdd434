from __future__ import annotations

import logging
from typing import Any, List, Dict, Optional

from google import genai
from google.genai import types

from livescore.config import DEFAULT_MODEL_NAME
from livescore.utils.logger import get_logger

logger = get_logger("extraction.llm_client")


class LLMClient:
    """
    Thin wrapper around the Gemini client.

    Usage:
        llm = LLMClient(system_prompt="You extract cricket events")
        text = await llm.agenerate(
            [{"role": "user", "content": "FOUR!"}]
        )
    """

    def __init__(
        self,
        system_prompt: str,
        model_name: str = DEFAULT_MODEL_NAME,
        api_key: Optional[str] = None,
        debug: bool = False,
        client: Optional[genai.Client] = None,
    ) -> None:
        self.system_prompt = system_prompt.strip()
        self.model_name = model_name
        self.debug = debug
        if debug:
            logger.setLevel(logging.DEBUG)

        # Prefer an injected client, then an explicit key; otherwise let the
        # SDK read GEMINI_API_KEY/GOOGLE_API_KEY.
        if client is not None:
            self.client = client
        elif api_key is not None:
            self.client = genai.Client(api_key=api_key)
        else:
            self.client = genai.Client()

    def _flatten_messages(self, messages: List[Dict[str, str]]) -> str:
        """
        Convert chat-style messages into a single text prompt.

        A lone user message is sent as-is; otherwise prepend ROLE: and join
        with newlines.
        """
        if len(messages) == 1 and messages[0].get("role", "user") == "user":
            return messages[0].get("content", "")
        lines: List[str] = []
        for m in messages:
            role = m.get("role", "user")
            content = m.get("content", "")
            lines.append(f"{role.upper()}: {content}")
        return "\n".join(lines)

    def _config(self, max_tokens: Optional[int], temperature: float) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.system_prompt,
            max_output_tokens=max_tokens,
            temperature=temperature,
        )

    @staticmethod
    def _response_text(response: Any) -> str:
        # Primary path: use the convenience .text property.
        text = (getattr(response, "text", None) or "").strip()
        if text:
            return text

        # Fallback: manually reconstruct from candidates if .text is empty.
        text_parts: List[str] = []
        candidates = getattr(response, "candidates", None) or []
        for cand in candidates:
            content = getattr(cand, "content", None)
            if not content:
                continue
            parts = getattr(content, "parts", None) or []
            for part in parts:
                part_text = getattr(part, "text", None)
                if part_text:
                    text_parts.append(part_text)
        return " ".join(text_parts).strip()

    def _log_prompt(self, convo_text: str) -> None:
        if self.debug:
            logger.debug("Prompt sent to %s:\n%s", self.model_name, convo_text)

    def _log_response(self, response: Any, text: str) -> None:
        if self.debug:
            logger.debug("Raw response object: %r", response)
            logger.debug("Extracted text: %r", text)

    async def agenerate(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: float = 0.0,
    ) -> str:
        """
        Call Gemini and return the plain response text ("" if empty).

        Awaits the SDK's aio client so the event loop keeps accepting
        messages while the model thinks.

        messages: list of {"role": "system"|"user"|"assistant", "content": "..."}.
        """
        convo_text = self._flatten_messages(messages)
        self._log_prompt(convo_text)

        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=convo_text,
            config=self._config(max_tokens, temperature),
        )

        text = self._response_text(response)
        self._log_response(response, text)
        return text
