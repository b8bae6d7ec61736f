"""Page resolution: clean URLs, legacy redirects and landing documents."""

from catalog.site.layout import ConfigurationError, SiteLayout
from catalog.site.paths import (
    PathInfo,
    PathKind,
    SecurityError,
    UnsafePathError,
    classify_path,
    split_segments,
)
from catalog.site.pipeline import ResolutionPipeline
from catalog.site.redirects import evaluate_redirect
from catalog.site.types import (
    Diagnostic,
    NotFound,
    PageRequest,
    Passthrough,
    Redirect,
    Resolution,
    ServeFile,
)

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "NotFound",
    "PageRequest",
    "Passthrough",
    "PathInfo",
    "PathKind",
    "Redirect",
    "Resolution",
    "ResolutionPipeline",
    "SecurityError",
    "ServeFile",
    "SiteLayout",
    "UnsafePathError",
    "classify_path",
    "evaluate_redirect",
    "split_segments",
]
