"""Custom exceptions for Gatedrop.

An infeasible roster is NOT an exception: the optimizer returns
OptimalRoster(is_feasible=False). These types cover caller mistakes only.

Inheritance Pattern:
    InvalidStateError subclasses RuntimeError and InvalidInputError subclasses
    ValueError, so callers can catch either the specific type or the builtin.
"""


class GatedropError(Exception):
    """Base exception for Gatedrop errors."""
    pass


class InvalidStateError(GatedropError, RuntimeError):
    """Raised when an operation needs data that does not exist yet.

    Example: scoring a rider whose race result is not available.
    """
    pass


class InvalidInputError(GatedropError, ValueError):
    """Raised for malformed candidates, constraints, or result rows."""
    pass
