"""Error taxonomy for style resolution.

Every pipeline stage either returns normally or raises one of these. The
HTTP layer maps ``status_code`` onto the response; everything except a
missing style is a server-side failure.
"""
from typing import Optional


class StyleError(Exception):
    """Base error for all style resolution failures."""

    code = "style_error"
    status_code = 500

    def __init__(self, message: str, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidIdentifier(StyleError):
    """The style string cannot be turned into a usable style reference."""

    code = "invalid_identifier"


class StyleNotFound(StyleError):
    """Short name is in neither the independent nor the dependent registry."""

    code = "style_not_found"
    status_code = 404

    def __init__(self, message: str = "Style not found", **kwargs):
        super().__init__(message, **kwargs)


class DependentResolutionError(StyleError):
    """A dependent style does not declare an independent parent."""

    code = "dependent_resolution"


class FileReadError(StyleError):
    """Reading a style file from storage failed."""

    code = "file_read_error"


class UnsupportedSource(StyleError):
    """Styles hosted anywhere but the canonical style host."""

    code = "unsupported_source"


class InternalFallthrough(StyleError):
    """Fetch reached a dependent identifier it has no content logic for."""

    code = "internal_fallthrough"


class ResolutionLoopError(StyleError):
    """Full resolution hit a cycle or ran past the hop limit."""

    code = "resolution_loop"


class RegistryLoadError(StyleError):
    """Style directories could not be enumerated at startup."""

    code = "registry_load_error"
