# mini_bloom/kernel/errors.py
"""Exceptions raised for invalid calls into the geometry core."""


class PreconditionError(ValueError):
    """Raised when a call violates an input precondition (too few points, bad counts, ...)."""
    pass


class RecursionLimitError(PreconditionError):
    """Raised when a recursive pattern asks for more depth than the configured ceiling."""
    pass
