from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from livescore.events.schema import BallEvent
from livescore.extraction.errors import ExtractionFailure
from livescore.extraction.extractor import EventExtractor
from livescore.state.scorecard import (
    WICKET_MODULUS,
    Scorecard,
    apply_event,
    format_scorecard,
)
from livescore.utils.logger import get_logger

logger = get_logger("ingest.queue")

OnUpdate = Callable[[Scorecard, BallEvent], None]


class QueueState(str, Enum):
    IDLE = "idle"
    DRAINING = "draining"


@dataclass
class QueueStats:
    received: int = 0
    applied: int = 0
    ignored: int = 0
    failed: int = 0


class IngestionQueue:
    """
    Single-consumer FIFO that classifies and scores one message at a time.

    enqueue() only appends and, when the queue is idle, starts a drain
    task. The drain task is the only writer of the scorecard and the
    classification call is its only suspension point, so events are
    applied in exactly the order messages were enqueued however long each
    call takes.

    Must be used from inside a running asyncio event loop.
    """

    def __init__(
        self,
        extractor: EventExtractor,
        scorecard: Optional[Scorecard] = None,
        wicket_modulus: Optional[int] = WICKET_MODULUS,
        on_update: Optional[OnUpdate] = None,
    ) -> None:
        self.extractor = extractor
        self.wicket_modulus = wicket_modulus
        self.on_update = on_update
        self.stats = QueueStats()

        self._scorecard = scorecard if scorecard is not None else Scorecard()
        self._pending: asyncio.Queue = asyncio.Queue()
        self._state = QueueState.IDLE
        self._drain_task: Optional[asyncio.Task] = None

    @property
    def scorecard(self) -> Scorecard:
        return self._scorecard

    @property
    def state(self) -> QueueState:
        return self._state

    @property
    def pending(self) -> int:
        """Messages waiting behind the one currently in flight."""
        return self._pending.qsize()

    def enqueue(self, message: str) -> None:
        """
        Append `message` to the tail of the queue. Never blocks.
        """
        self._pending.put_nowait(message)
        self.stats.received += 1

        if self._state is QueueState.IDLE:
            # Raises outside a running loop; the state stays IDLE so the
            # next enqueue from inside a loop drains everything pending.
            loop = asyncio.get_running_loop()
            self._drain_task = loop.create_task(self._drain())
            self._state = QueueState.DRAINING

    async def wait_idle(self) -> None:
        """
        Wait until every message enqueued so far has been processed, or
        until stop() cancels the drain.
        """
        while self._drain_task is not None:
            task = self._drain_task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
                return

    async def stop(self) -> None:
        """Cancel the active drain, if any. Unprocessed messages stay queued."""
        task = self._drain_task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _drain(self) -> None:
        try:
            # No await between the emptiness check and the IDLE transition,
            # so an enqueue() can never be stranded.
            while not self._pending.empty():
                message = self._pending.get_nowait()
                await self._process(message)
        finally:
            self._state = QueueState.IDLE
            self._drain_task = None

    async def _process(self, message: str) -> None:
        logger.debug("Processing message: %r", message)

        try:
            event = await self.extractor.extract(message)
        except ExtractionFailure as e:
            self.stats.failed += 1
            logger.warning("Dropped message %r: %s", message, e)
            return
        except Exception:
            self.stats.failed += 1
            logger.exception("Unexpected error classifying message %r", message)
            return

        if event.ignore:
            self.stats.ignored += 1
            logger.info("Ignored message %r, scorecard unchanged", message)
            return

        try:
            updated = apply_event(self._scorecard, event, wicket_modulus=self.wicket_modulus)
        except Exception:
            self.stats.failed += 1
            logger.exception("Could not apply %r to %r", event, self._scorecard)
            return

        self._scorecard = updated
        self.stats.applied += 1
        logger.info("Scorecard: %s", format_scorecard(updated))

        if self.on_update is not None:
            try:
                self.on_update(updated, event)
            except Exception:
                logger.exception("Scorecard update callback failed")
