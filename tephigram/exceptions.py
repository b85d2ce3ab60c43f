"""
Custom exceptions for the tephigram package.

This module defines exception classes for parameter validation, projection
failures, and rendering problems so that callers (the CLI and interactive
viewer in particular) can report errors consistently.
"""


class TephigramError(Exception):
    """Base exception class for all tephigram errors."""
    pass


class InvalidParameterError(TephigramError):
    """
    Raised for invalid user inputs.

    This exception is used for parameter validation failures such as
    inverted thermodynamic bounds, malformed sounding profiles, or a
    diagram that cannot be projected with the current parameters.
    """
    pass


class ProjectionError(TephigramError):
    """
    Raised when a point cannot be projected onto the skewed grid.

    This occurs when the shear basis directions are parallel or when an
    isobar runs parallel to the screen Y axis, so no unique intersection
    exists.
    """
    pass


class RenderError(TephigramError):
    """
    Raised when diagram rendering fails.

    This can occur due to invalid frame data or matplotlib errors during
    the drawing process.
    """
    pass
