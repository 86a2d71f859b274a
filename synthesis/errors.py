"""
Exceptions raised by the signal synthesizer.

All of them are ValueError subclasses: every failure is a caller input
problem detected before generation starts.
"""


class SynthesisError(ValueError):
    """Base class for synthesizer input errors."""


class InvalidArgument(SynthesisError):
    """Raised for bad counts, periods, poses, layouts or noise settings."""


class InvalidDuration(SynthesisError):
    """Raised when a trajectory spans no usable time samples."""
