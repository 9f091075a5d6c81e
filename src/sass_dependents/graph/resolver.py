"""Path resolution for import specifiers."""

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PARTIAL_PREFIX = "_"

PathLike = Union[str, Path]


def normalize_path(path: PathLike) -> str:
    """Return the absolute, symlink-free form of a path."""
    return os.path.realpath(os.path.abspath(os.fspath(path)))


def dedupe(paths: Iterable[str]) -> List[str]:
    """Remove duplicates while keeping first occurrences in order."""
    seen = set()
    result = []
    for path in paths:
        if path and path not in seen:
            seen.add(path)
            result.append(path)
    return result


def strip_extension(specifier: str, extensions: Sequence[str]) -> str:
    """
    Remove a trailing recognized extension from a specifier.

    Args:
        specifier: Raw import specifier
        extensions: Recognized extensions without the leading dot

    Returns:
        Specifier without its extension

    Examples:
        >>> strip_extension("theme/colors.scss", ["scss", "sass"])
        'theme/colors'
        >>> strip_extension("vendor/reset.css", ["scss", "sass"])
        'vendor/reset.css'
    """
    if not extensions:
        return specifier
    pattern = r"\.(?:%s)$" % "|".join(re.escape(ext) for ext in extensions)
    return re.sub(pattern, "", specifier, flags=re.IGNORECASE)


def build_search_paths(
    file_dir: str,
    base_dir: str,
    load_paths: Sequence[str],
) -> List[str]:
    """
    Build the ordered list of roots searched for one file's imports.

    The importing file's own directory always comes first, followed by the
    base directory and then the configured load paths.

    Args:
        file_dir: Directory of the importing file
        base_dir: Graph base directory
        load_paths: Configured load paths

    Returns:
        Deduplicated search roots in priority order
    """
    return dedupe([file_dir, base_dir, *load_paths])


def _candidate(root: str, name: str, extension: str) -> str:
    return os.path.normpath(os.path.join(root, f"{name.lstrip('/')}.{extension}"))


def _partial_form(path: str) -> str:
    directory, filename = os.path.split(path)
    return os.path.join(directory, PARTIAL_PREFIX + filename)


def resolve_specifier(
    specifier: str,
    search_paths: Sequence[str],
    extensions: Sequence[str],
) -> Optional[str]:
    """
    Resolve a raw import specifier to an existing file.

    Every (search path, extension) pair is tried as a direct file first.
    Only when none matches is the same sequence tried again with the final
    path segment prefixed by ``_``. Earlier search paths and earlier
    extensions win.

    Args:
        specifier: Raw import specifier as written in the source
        search_paths: Search roots in priority order
        extensions: Extensions in priority order, without the leading dot

    Returns:
        Path of the matching file, or None if nothing matches
    """
    name = strip_extension(specifier, extensions)
    if not name:
        return None

    for root in search_paths:
        for extension in extensions:
            candidate = _candidate(root, name, extension)
            if os.path.isfile(candidate):
                return candidate

    for root in search_paths:
        for extension in extensions:
            candidate = _partial_form(_candidate(root, name, extension))
            if os.path.isfile(candidate):
                return candidate

    logger.debug(f"Could not resolve '{specifier}' in {len(search_paths)} search paths")
    return None


def is_within(path: str, root: str) -> bool:
    """Check whether ``path`` lies inside ``root`` (both absolute)."""
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        return False


def containing_root(path: str, roots: Sequence[str]) -> Optional[str]:
    """Return the first root that contains ``path``, if any."""
    for root in roots:
        if is_within(path, root):
            return root
    return None


def relative_to_roots(path: str, roots: Sequence[str]) -> Optional[str]:
    """
    Express a path relative to the first root that contains it.

    Args:
        path: Absolute path
        roots: Candidate roots in priority order

    Returns:
        Relative path using forward slashes, or None if no root contains it
    """
    root = containing_root(path, roots)
    if root is None:
        return None
    return os.path.relpath(path, root).replace(os.sep, "/")
