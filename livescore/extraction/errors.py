from __future__ import annotations


class ExtractionFailure(Exception):
    """
    The classification service could not turn a message into a BallEvent:
    it raised, timed out, returned nothing, or returned unparsable text.
    """


class MalformedEvent(ExtractionFailure):
    """The response parsed as JSON but does not match the BallEvent schema."""
