"""
Message classification components.

- llm_client: Gemini-backed LLM client abstraction.
- prompting: extraction prompt construction.
- parsing: validation boundary from raw model output to BallEvent.
- extractor: EventExtractor that combines the prompt, the LLM and the parser.
"""

from .errors import ExtractionFailure, MalformedEvent  # noqa: F401
from .llm_client import LLMClient  # noqa: F401
from .parsing import parse_ball_event  # noqa: F401
from .extractor import EventExtractor  # noqa: F401
