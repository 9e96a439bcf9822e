"""Typed domain exceptions for the Moji core.

Nothing here is shown to a player as an error message. Malformed
persisted state self-heals inside StatsEngine.load; the remaining errors
are caught at the HTTP boundary and converted to JSON responses.
"""


class MojiError(Exception):
    """Base exception for Moji domain errors."""


class MalformedStatsError(MojiError):
    """Persisted statistics could not be parsed as a StatsRecord.

    Attributes:
        key: The store key the record was read from.

    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"malformed stats record under {key!r}: {reason}")


class NothingToShareError(MojiError):
    """Share was requested before any result exists in the session."""
