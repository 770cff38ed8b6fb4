"""Exceptions raised by the split-ticket search."""


class SplitTicketError(Exception):
    """Base error for split-ticket searches."""


class InvalidInputError(SplitTicketError):
    """Raised when a request is missing required input or is malformed."""


class NotFoundError(SplitTicketError):
    """Raised when a location cannot be resolved or no journey exists."""


class ProviderError(SplitTicketError):
    """Raised when a mandatory call to the journey provider fails."""
