"""
State tracking for a live innings.

Currently includes:

- scorecard: Scorecard dataclass and the pure apply_event transition.
"""

from .scorecard import (  # noqa: F401
    Scorecard,
    ScorecardInvariantError,
    apply_event,
    build_scorecard_from_events,
    format_scorecard,
)
