"""
Custom exceptions for TileRenderer package.

The classification and compositing core never raises for well-formed input;
these exceptions are used by the feature loader, the user-facing API, batch
rendering, and the CLI.
"""


class TileRendererError(Exception):
    """Base exception class for all TileRenderer errors."""
    pass


class FeatureLoadError(TileRendererError):
    """
    Raised when a feature document cannot be turned into FeatureRecords.

    This covers unsupported file formats, malformed records, unknown
    property-code names, and codes outside the unsigned 16-bit range.
    """
    pass


class RenderError(TileRendererError):
    """
    Raised when tile rendering fails.

    Wraps errors coming from the projection or from matplotlib while the
    canvas is being drawn or saved.
    """
    pass


class InvalidParameterError(TileRendererError):
    """
    Raised for invalid user inputs.

    Used for configuration validation failures, bad canvas dimensions, and
    unsupported batch backends.
    """
    pass
