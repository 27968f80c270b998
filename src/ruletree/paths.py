#!/usr/bin/env python3
"""
Rule Tree Paths

Normalization and splitting of slash-delimited rule tree addresses.

A path names a rule, behavior or criteria relative to the root rule:

    ""                               -> the root rule
    "/default"                       -> the root rule (root alias)
    "/Performance/JPEG Images"       -> a nested rule
    "/default/Performance/cpCode"    -> a behavior or criteria under Performance

Segments are matched case-insensitively. The root's own name is never a
descent segment; a leading "/<root_name>/" is stripped.
"""

from __future__ import annotations

from typing import List, Tuple

from .config import get_config
from .exceptions import InvalidPathError


def _clean(path: str) -> str:
    config = get_config()
    sep = config.separator

    doubled = sep * 2
    while doubled in path:
        path = path.replace(doubled, sep)

    if path.endswith(sep):
        path = path[: -len(sep)]

    alias = sep + config.root_name
    if path == "" or path == alias:
        return ""

    prefix = alias + sep
    if path.startswith(prefix):
        path = path[len(prefix):]

    if path.startswith(sep):
        path = path[len(sep):]

    return path


def normalize(path: str) -> str:
    """
    Normalize a path for resolution.

    Collapses doubled separators, strips one trailing separator, maps the
    empty path and the root alias to "", strips a leading root alias and
    separator, and lower-cases the result. The root alias is matched as
    written, before lower-casing, so "/DEFAULT/x" addresses a child named
    "default".

    Args:
        path: The path to normalize

    Returns:
        The normalized path ("" addresses the root)

    Example:
        >>> normalize("/default//Performance/")
        'performance'
    """
    return _clean(path).lower()


def split(path: str) -> List[str]:
    """Return the normalized segments of a path. The root yields no segments."""
    normalized = normalize(path)
    if not normalized:
        return []
    return normalized.split(get_config().separator)


def join(parent: str, name: str) -> str:
    """Address `name` directly beneath the node at `parent`."""
    sep = get_config().separator
    return f"{parent}{sep}{name}"


def split_leaf(path: str) -> Tuple[str, str]:
    """
    Split a path into its parent path and the original-case leaf name.

    Raises:
        InvalidPathError: If the path addresses the root (no leaf)
    """
    cleaned = _clean(path)
    if not cleaned:
        raise InvalidPathError(path)
    parent, _, leaf = cleaned.rpartition(get_config().separator)
    return parent, leaf
