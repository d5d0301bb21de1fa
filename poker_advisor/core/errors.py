"""Exceptions raised by the advisor core."""
from __future__ import annotations


class AdvisorError(Exception):
    """Base class for every error raised by the advisor."""


class ParseError(AdvisorError, ValueError):
    """Raised for a malformed card code or numeric field."""


class ValidationError(AdvisorError, ValueError):
    """Raised when known cards or wagering inputs are inconsistent."""


class InvalidArgument(AdvisorError, ValueError):
    """Raised for an out-of-range simulation parameter."""


class InsufficientCardsError(AdvisorError):
    """Raised when the deck cannot supply the cards a trial needs."""


class SimulationCancelled(AdvisorError):
    """Raised when a simulation is aborted before finishing its trials."""


__all__ = [
    "AdvisorError",
    "ParseError",
    "ValidationError",
    "InvalidArgument",
    "InsufficientCardsError",
    "SimulationCancelled",
]
