"""Exception hierarchy for glyphdupe."""


class GlyphDupeError(Exception):
    """Base exception for all glyphdupe errors."""

    pass


class ConfigurationError(GlyphDupeError):
    """Invalid run configuration (probe set, threshold, grid, location)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(GlyphDupeError):
    """Errors related to locating or loading fonts."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontDiscoveryError(FontError):
    """Input path is neither a font file nor a directory."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot use '{path}': {reason}")
