"""
Message ingestion.

- queue: IngestionQueue, the single-flight FIFO between the chat source,
         the EventExtractor and the scorecard engine.
"""

from .queue import IngestionQueue, QueueState, QueueStats  # noqa: F401
