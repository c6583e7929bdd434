"""
Event abstractions.

- schema: EventKind / ExtraType enums and the BallEvent dataclass produced
          once per classified commentary message.
"""

from .schema import EventKind, ExtraType, BallEvent  # noqa: F401
