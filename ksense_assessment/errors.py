"""Errors raised by the assessment client."""


class AssessmentError(Exception):
    pass


class ConfigurationError(AssessmentError):
    pass


class RequestFailed(AssessmentError):
    """A logical request ran out of retries.

    ``status`` is the last HTTP status seen, or None for network errors.
    The last underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class RateLimitExceeded(RequestFailed):
    pass


class ServerErrorExhausted(RequestFailed):
    pass


class TransientRequestError(RequestFailed):
    pass
