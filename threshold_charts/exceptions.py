"""
Custom exceptions for ThresholdCharts package.

This module defines exception classes for better error handling and messaging
across the package, particularly when decorations are configured, when the
drawing surface is driven, and when charts are rendered or saved.
"""


class ThresholdChartsError(Exception):
    """Base exception class for all ThresholdCharts errors."""
    pass


class InvalidConfigurationError(ThresholdChartsError):
    """
    Raised for malformed threshold line or range configuration.

    This is raised before any rendering is attempted, for example when a
    line uses an unknown axis position, a value is not numeric, or a
    width/opacity is out of range.
    """
    pass


class RenderError(ThresholdChartsError):
    """
    Raised when chart rendering fails.

    This can occur when a chart is saved before it has been rendered, when
    a series cannot be laid out, or when matplotlib fails to draw.
    """
    pass


class SurfaceError(ThresholdChartsError):
    """
    Raised when the drawing surface receives a request it cannot honour.

    This typically means an unknown primitive kind or an attribute that
    does not apply to the primitive it was set on.
    """
    pass
