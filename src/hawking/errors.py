"""
Exceptions raised by the black hole model.

All errors are local validation failures raised before any state changes.
"""


class BlackHoleError(Exception):
    """Base class for black hole validation errors."""


class InvalidDimension(BlackHoleError, ValueError):
    """A value's physical dimension does not match the target observable."""

    def __init__(self, target: str, expected, got):
        self.target = target
        self.expected = expected
        self.got = got
        super().__init__(f"{target} requires a value of kind {expected}, got {got}")


class InvalidMass(BlackHoleError, ValueError):
    """Mass would become negative, infinite or NaN."""


class InvalidDuration(BlackHoleError, ValueError):
    """Elapsed time for aging is not a positive finite duration."""


class UnknownField(BlackHoleError, KeyError):
    """Field selector does not name a supported observable."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
