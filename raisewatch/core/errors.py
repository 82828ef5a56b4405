from typing import Optional


class RaiseWatchError(Exception):
    """Recoverable failure, reported through the ``error`` notification."""


class LiveVideoResolutionError(RaiseWatchError):
    pass


class StatisticsFetchError(RaiseWatchError):
    pass


class UpstreamApiError(StatisticsFetchError):
    """The YouTube Data API answered with an ``error`` payload."""

    def __init__(self, message: str, code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.reason = reason


class ProgrammingFault(RuntimeError):
    """Integration bug. Never reported through notifications."""


class IdentityMismatchError(ProgrammingFault):
    pass


class TrackerNotSeededError(ProgrammingFault):
    pass
