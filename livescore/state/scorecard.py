from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from livescore.events.schema import BallEvent

BALLS_PER_OVER = 6

# Observed behaviour of the live feed: the wicket counter wraps back to 0
# after reaching 10. Pass wicket_modulus=None to apply_event to disable.
WICKET_MODULUS = 11


class ScorecardInvariantError(ValueError):
    """A Scorecard outside its invariants reached the engine."""


@dataclass(frozen=True)
class Scorecard:
    """
    Running score for a single innings.

    Overs are stored as two integers; use overs_display() for the familiar
    X.Y readout.
    """

    runs: int = 0
    over_count: int = 0
    balls_in_current_over: int = 0  # legal deliveries only, 0-5
    wickets: int = 0
    on_strike: int = 0  # 0 or 1, which batter faces the next ball

    def overs_display(self) -> str:
        return f"{self.over_count}.{self.balls_in_current_over}"

    @property
    def legal_balls(self) -> int:
        return self.over_count * BALLS_PER_OVER + self.balls_in_current_over

    def __str__(self) -> str:
        return format_scorecard(self)


def format_scorecard(state: Scorecard) -> str:
    return (
        f"{state.runs}/{state.wickets} ({state.overs_display()} ov) "
        f"on_strike={state.on_strike}"
    )


def check_invariants(state: Scorecard) -> None:
    if state.runs < 0 or state.over_count < 0 or state.wickets < 0:
        raise ScorecardInvariantError(f"Negative field in {state!r}")
    if not 0 <= state.balls_in_current_over < BALLS_PER_OVER:
        raise ScorecardInvariantError(
            f"balls_in_current_over must be in 0..{BALLS_PER_OVER - 1}, "
            f"got {state.balls_in_current_over}"
        )
    if state.on_strike not in (0, 1):
        raise ScorecardInvariantError(f"on_strike must be 0 or 1, got {state.on_strike}")


def apply_event(
    state: Scorecard,
    event: BallEvent,
    wicket_modulus: Optional[int] = WICKET_MODULUS,
) -> Scorecard:
    """
    Return the scorecard that results from bowling `event` on `state`.

    Pure function: `state` is never modified and every field of the result
    is derived from the same pre-update state.

    Parameters
    ----------
    state : Scorecard
        Score before the delivery.
    event : BallEvent
        Validated event for the delivery.
    wicket_modulus : int or None
        Wrap the wicket counter modulo this value. None, 0 or a negative
        value keeps a plain counter.
    """
    if event.ignore:
        return state

    check_invariants(state)

    # 1) Wickets
    wickets = state.wickets
    if event.wicket:
        wickets += 1
        if wicket_modulus is not None and wicket_modulus > 0:
            wickets %= wicket_modulus

    # 2) Runs and strike rotation. The wide / no-ball penalty run is not
    # run by the batters, so it never rotates strike.
    credited = event.credited_runs
    rotation_basis = credited
    if not event.is_legal_delivery:
        rotation_basis -= 1

    on_strike = state.on_strike
    if rotation_basis % 2 == 1:
        on_strike ^= 1

    # 3) Over progression (legal deliveries only)
    over_count = state.over_count
    balls = state.balls_in_current_over
    if event.is_legal_delivery:
        if balls == BALLS_PER_OVER - 1:
            over_count += 1
            balls = 0
            on_strike ^= 1  # ends swap at the end of the over
        else:
            balls += 1

    return replace(
        state,
        runs=state.runs + credited,
        over_count=over_count,
        balls_in_current_over=balls,
        wickets=wickets,
        on_strike=on_strike,
    )


def build_scorecard_from_events(
    events: Iterable[BallEvent],
    initial: Optional[Scorecard] = None,
    wicket_modulus: Optional[int] = WICKET_MODULUS,
) -> Scorecard:
    """
    Fold events, in the order given, onto `initial` (an empty scorecard by
    default).
    """
    state = initial if initial is not None else Scorecard()
    for e in events:
        state = apply_event(state, e, wicket_modulus=wicket_modulus)
    return state
