"""
Exceptions raised by the remodeler package.
"""


class RemodelerError(Exception):
    """Base class for all remodeler errors."""


class InvalidConfiguration(RemodelerError, ValueError):
    """
    Raised when a registry is configured with something it cannot use.

    Builders raise this before touching the rule set, so a failed call
    leaves the registry as it was.
    """
