"""Permanent redirect rules for page paths.

Rules run in a fixed order and the first match wins:

1. Protected namespace: any path at or below it goes to ``/``.
2. Legacy prefix: ``/public/x`` goes to ``/x``, keeping the query string.
3. Explicit document suffix: ``/x.html`` goes to ``/x``, keeping the query.
"""

import structlog

from catalog.site.layout import SiteLayout
from catalog.site.paths import under_prefix
from catalog.site.types import PageRequest, Redirect

logger = structlog.get_logger()


def with_query(target: str, query: str) -> str:
    """Reattach a raw query string to a redirect target.

    Args:
        target: Redirect path.
        query: Raw query string, with or without a leading ``?``.

    Returns:
        ``target?query``, or ``target`` alone when the query is empty.
    """
    if query.startswith("?"):
        query = query[1:]
    if not query:
        return target
    return f"{target}?{query}"


def local_target(path: str) -> str:
    """Force a redirect target to stay on this site.

    Leading slashes and backslashes collapse to one slash, so a stripped
    path such as ``//example.com`` cannot become a protocol-relative URL.
    """
    return "/" + path.lstrip("/\\")


def protected_redirect(request: PageRequest, layout: SiteLayout) -> Redirect | None:
    if under_prefix(request.path, layout.protected_prefix):
        return Redirect(target="/")
    return None


def legacy_redirect(request: PageRequest, layout: SiteLayout) -> Redirect | None:
    if not under_prefix(request.path, layout.legacy_prefix):
        return None
    stripped = local_target(request.path[len(layout.legacy_prefix):])
    return Redirect(target=with_query(stripped, request.query))


def suffix_redirect(request: PageRequest, layout: SiteLayout) -> Redirect | None:
    if not request.path.endswith(layout.document_extension):
        return None
    clean = local_target(request.path[: -len(layout.document_extension)])
    return Redirect(target=with_query(clean, request.query))


RULES = (
    ("protected_namespace", protected_redirect),
    ("legacy_prefix", legacy_redirect),
    ("document_suffix", suffix_redirect),
)


def evaluate_redirect(request: PageRequest, layout: SiteLayout) -> Redirect | None:
    """Apply the redirect rules to a non-API request.

    Args:
        request: Incoming page request.
        layout: Site layout with the configured prefixes.

    Returns:
        The redirect from the first matching rule, or None.
    """
    for name, rule in RULES:
        redirect = rule(request, layout)
        if redirect is not None:
            logger.debug(
                "redirect_rule_matched",
                rule=name,
                path=request.path,
                target=redirect.target,
            )
            return redirect
    return None
