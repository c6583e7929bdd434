"""Shared test fixtures for the live scorecard tests."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Union

import pytest

from livescore.events.schema import BallEvent, ExtraType
from livescore.extraction.errors import ExtractionFailure
from livescore.state.scorecard import Scorecard


def make_ball(
    runs: int = 0,
    extra_type: Optional[ExtraType] = None,
    extra_runs: int = 0,
    wicket: bool = False,
    free_hit: bool = False,
) -> BallEvent:
    return BallEvent(
        runs_off_bat=runs,
        extra_type=extra_type,
        extra_runs=extra_runs,
        wicket=wicket,
        free_hit=free_hit,
    )


def card(runs: int, overs: str, wickets: int, on_strike: int) -> Scorecard:
    """Build a Scorecard from the compact {runs, X.Y, wickets, on_strike} form."""
    over_count, balls = (int(p) for p in overs.split("."))
    return Scorecard(
        runs=runs,
        over_count=over_count,
        balls_in_current_over=balls,
        wickets=wickets,
        on_strike=on_strike,
    )


Outcome = Union[BallEvent, Exception]


class ScriptedExtractor:
    """
    Stand-in for EventExtractor: returns a scripted outcome per message,
    optionally after a per-message delay, and records call overlap.
    """

    def __init__(self, outcomes: Dict[str, Outcome], delays: Optional[Dict[str, float]] = None):
        self.outcomes = outcomes
        self.delays = delays or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def extract(self, message: str) -> BallEvent:
        self.calls.append(message)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(message, 0))
            outcome = self.outcomes.get(message)
            if outcome is None:
                raise ExtractionFailure(f"no script for {message!r}")
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1


class StubLLMClient:
    """Replaces LLMClient; returns canned text or raises."""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None, delay: float = 0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts: List[List[Dict[str, str]]] = []

    async def agenerate(self, messages, max_tokens=None, temperature=0.0) -> str:
        self.prompts.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def empty_card() -> Scorecard:
    return Scorecard()
