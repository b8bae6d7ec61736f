"""Page resolution pipeline.

Each request passes through the stages below in order. The first stage
that produces an outcome ends the resolution:

    classify -> sanitize -> redirect rules -> root documents | candidate page
    -> static file -> not found

Dot-named files and directories are never served.

API paths are handed back untouched as ``Passthrough``.
"""

import structlog

from catalog.site.layout import SiteLayout
from catalog.site.paths import (
    PathKind,
    UnsafePathError,
    classify_path,
    has_hidden_segment,
    join_within,
    split_segments,
)
from catalog.site.redirects import evaluate_redirect
from catalog.site.resolver import (
    find_candidate,
    find_default_document,
    find_first_document,
    is_regular_file,
)
from catalog.site.types import (
    Diagnostic,
    NotFound,
    PageRequest,
    Passthrough,
    Resolution,
    ServeFile,
)

logger = structlog.get_logger()


class ResolutionPipeline:
    """Resolves page requests against a fixed site layout.

    The pipeline holds no mutable state. One instance is shared by all
    requests and every call re-reads the filesystem.
    """

    def __init__(self, layout: SiteLayout) -> None:
        """Initialize pipeline.

        Args:
            layout: Validated site layout.
        """
        self.layout = layout

    @property
    def diagnostic_text(self) -> str:
        names = " or ".join(self.layout.default_documents) or "an index page"
        return (
            f"No default {self.layout.document_extension} document found in the "
            f"site roots (add {names})."
        )

    def resolve(self, request: PageRequest) -> Resolution:
        """Decide how to answer a request.

        Args:
            request: Incoming page request.

        Returns:
            Passthrough for API paths, otherwise a Redirect, ServeFile,
            Diagnostic or NotFound outcome.
        """
        info = classify_path(request.path, self.layout.api_prefix)
        if info.kind is PathKind.API:
            return Passthrough()

        try:
            segments = split_segments(request.path)
        except UnsafePathError as e:
            logger.warning("unsafe_path_rejected", path=e.path, error=str(e))
            return NotFound()

        canonical = PageRequest(
            path=self._canonical_path(segments, request.path),
            query=request.query,
        )

        redirect = evaluate_redirect(canonical, self.layout)
        if redirect is not None:
            return redirect

        if not segments:
            return self.resolve_root()

        if has_hidden_segment(segments):
            logger.debug("hidden_path_ignored", path=canonical.path)
            return NotFound()

        if info.kind is PathKind.EXTENSIONLESS:
            document = find_candidate(
                segments,
                self.layout.roots,
                self.layout.document_extension,
            )
            if document is not None:
                return ServeFile(path=document)

        return self.serve_static(segments)

    def resolve_root(self) -> ServeFile | Diagnostic:
        """Pick the landing document for ``/``.

        The protected index wins, then the default documents in order, then
        any document found by walking the roots.

        Returns:
            ServeFile for the chosen document, or Diagnostic when the roots
            hold no document at all.
        """
        if is_regular_file(self.layout.protected_index):
            return ServeFile(path=self.layout.protected_index)

        document = find_default_document(
            self.layout.default_documents,
            self.layout.roots,
        )
        if document is not None:
            return ServeFile(path=document)

        document = find_first_document(
            self.layout.roots,
            self.layout.document_extension,
        )
        if document is not None:
            logger.info("root_fallback_document", path=str(document))
            return ServeFile(path=document)

        logger.warning(
            "root_document_missing",
            roots=[str(root) for root in self.layout.roots],
        )
        return Diagnostic(text=self.diagnostic_text)

    def serve_static(self, segments: tuple[str, ...]) -> ServeFile | NotFound:
        """Serve an exact path from the static directory.

        Directories are never served and there is no index lookup.

        Args:
            segments: Safe, non-empty path segments.

        Returns:
            ServeFile for an existing regular file, otherwise NotFound.
        """
        candidate = join_within(self.layout.static_dir, "/".join(segments))
        if candidate is not None and is_regular_file(candidate):
            return ServeFile(path=candidate)
        return NotFound()

    @staticmethod
    def _canonical_path(segments: tuple[str, ...], raw: str) -> str:
        if not segments:
            return "/"
        path = "/" + "/".join(segments)
        return path + "/" if raw.endswith("/") else path
