"""Candidate lookup across the ordered document roots.

Every lookup goes to the filesystem. Nothing is cached between calls, so a
document created between two requests is visible to the second one.
Filesystem errors count as a miss for the candidate that raised them.
"""

import stat
from collections.abc import Iterator, Sequence
from pathlib import Path

import structlog

from catalog.site.paths import join_within

logger = structlog.get_logger()


def is_regular_file(path: Path) -> bool:
    """Check that a path exists and is a regular file.

    Args:
        path: Absolute path to check.

    Returns:
        True for regular files. Errors such as permission denied read as False.
    """
    try:
        return stat.S_ISREG(path.stat().st_mode)
    except OSError as e:
        if not isinstance(e, (FileNotFoundError, NotADirectoryError)):
            logger.debug("candidate_stat_error", path=str(path), error=str(e))
        return False


def find_file_in_roots(relative: str, roots: Sequence[Path]) -> Path | None:
    """Find the first root that holds ``relative`` as a regular file.

    Only the exact relative path is tried in each root. No subdirectory
    search happens here.

    Args:
        relative: Slash-separated path relative to each root.
        roots: Roots in priority order.

    Returns:
        Absolute path of the first match, or None.
    """
    for root in roots:
        candidate = join_within(root, relative)
        if candidate is not None and is_regular_file(candidate):
            return candidate
    return None


def find_candidate(
    segments: Sequence[str],
    roots: Sequence[Path],
    extension: str = ".html",
) -> Path | None:
    """Resolve a logical page path to a document.

    ``("section", "page")`` becomes ``section/page.html``.

    Args:
        segments: Safe path segments of an extensionless request path.
        roots: Roots in priority order.
        extension: Document extension to append.

    Returns:
        Absolute path of the document, or None when no root has it.
    """
    if not segments:
        return None
    return find_file_in_roots("/".join(segments) + extension, roots)


def find_default_document(
    names: Sequence[str],
    roots: Sequence[Path],
) -> Path | None:
    """Find the first landing document.

    Names take precedence over roots: every root is tried for the first name
    before the second name is considered.

    Args:
        names: Landing document filenames in order.
        roots: Roots in priority order.

    Returns:
        Absolute path of the first match, or None.
    """
    for name in names:
        found = find_file_in_roots(name, roots)
        if found is not None:
            return found
    return None


def _list_directory(directory: Path) -> list[Path] | None:
    try:
        return list(directory.iterdir())
    except OSError as e:
        logger.debug("directory_list_error", path=str(directory), error=str(e))
        return None


def _search_tree(root: Path, extension: str) -> Path | None:
    """Depth-first search of one root using an explicit stack of iterators.

    Entries are visited in enumeration order and a subdirectory is fully
    searched before the next sibling. Symlinks are never followed.
    """
    entries = _list_directory(root)
    if entries is None:
        return None

    stack: list[Iterator[Path]] = [iter(entries)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        try:
            mode = entry.lstat().st_mode
        except OSError:
            continue

        if stat.S_ISREG(mode) and entry.suffix.lower() == extension:
            return entry

        if stat.S_ISDIR(mode):
            children = _list_directory(entry)
            if children:
                stack.append(iter(children))

    return None


def find_first_document(roots: Sequence[Path], extension: str) -> Path | None:
    """Find any document of the served type, searching each root's subtree.

    Args:
        roots: Roots in priority order.
        extension: Lowercase document extension including the dot.

    Returns:
        Absolute path of the first document found, or None.
    """
    for root in roots:
        found = _search_tree(root, extension)
        if found is not None:
            return found
    return None
