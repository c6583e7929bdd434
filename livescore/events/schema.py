from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any, Optional


class EventKind(str, Enum):
    """
    Classification label attached to a ball event.

    The label is informational; the numeric fields of BallEvent are what
    actually drive the scorecard update.
    """

    RUNS = "RUNS"
    DOT = "DOT"
    FOUR = "FOUR"
    SIX = "SIX"
    WICKET = "WICKET"
    EXTRA = "EXTRA"
    FREE_HIT = "FREE_HIT"


class ExtraType(str, Enum):
    WIDE = "wide"
    NO_BALL = "no_ball"
    LEG_BYE = "leg_bye"
    BYE = "bye"

    @property
    def is_illegal_delivery(self) -> bool:
        """Wides and no-balls do not count towards the over."""
        return self in (ExtraType.WIDE, ExtraType.NO_BALL)


@dataclass(frozen=True)
class BallEvent:
    """
    One delivery as classified from a single commentary message.

    Attributes
    ----------
    kind : EventKind
        Label reported by the classifier.
    runs_off_bat : int
        Runs credited to the batter.
    extra_type : ExtraType or None
        Kind of extra, if any.
    extra_runs : int
        Extra runs. For wides and no-balls this already includes the
        one-run penalty, e.g. "no ball +3" is runs_off_bat=3, extra_runs=1.
    free_hit : bool
        Next ball is a free hit. Recorded only.
    wicket : bool
        A dismissal happened on this delivery.
    ignore : bool
        Message carried no scoring information; every other field is
        disregarded.
    """

    kind: EventKind = EventKind.DOT
    runs_off_bat: int = 0
    extra_type: Optional[ExtraType] = None
    extra_runs: int = 0
    free_hit: bool = False
    wicket: bool = False
    ignore: bool = False

    @classmethod
    def ignored(cls) -> "BallEvent":
        return cls(ignore=True)

    @property
    def credited_runs(self) -> int:
        return self.runs_off_bat + self.extra_runs

    @property
    def is_legal_delivery(self) -> bool:
        return self.extra_type is None or not self.extra_type.is_illegal_delivery

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dict using the classifier's field names.
        """
        d = asdict(self)
        d["type"] = d.pop("kind").value
        d["extra_type"] = self.extra_type.value if self.extra_type is not None else None
        return d
