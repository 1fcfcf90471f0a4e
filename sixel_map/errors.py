# sixel_map/errors.py
"""
Exception types.

SixelError            : base for everything raised on purpose by sixel_map.
InvalidArgumentError  : the caller broke a precondition (bad palette, bad shape).
InternalError         : a quantiser invariant broke; report it as a bug.
"""


class SixelError(Exception):
    """Base class for sixel_map errors."""


class InvalidArgumentError(SixelError, ValueError):
    """A caller-supplied argument violates a documented precondition."""


class InternalError(SixelError, RuntimeError):
    """An internal invariant was violated. Not retryable."""


__all__ = ["SixelError", "InvalidArgumentError", "InternalError"]
