#!/usr/bin/env python3
"""
Rule Tree Navigator

Resolves paths to rules, behaviors and criteria.

Each segment is compared against the lower-cased names at one level of the
tree. The scan over siblings does not stop at the first match: when several
siblings share a name, the last one in list order wins.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar

from .exceptions import (
    BehaviorNotFoundError,
    CriteriaNotFoundError,
    InvalidPathError,
    RuleNotFoundError,
)
from .models import Behavior, Criteria, Rule, RuleMember
from .traversal import TreeLike, iter_rules, root_of
from . import paths


N = TypeVar("N", Rule, Criteria, Behavior)


def _last_match(items: Sequence[N], segment: str) -> Optional[N]:
    found = None
    for item in items:
        if item.name.lower() == segment:
            found = item
    return found


def _descend(root: Rule, segments: Sequence[str], path: str) -> Rule:
    current = root
    for segment in segments:
        found = _last_match(current.children, segment)
        if found is None:
            raise RuleNotFoundError(path, segment)
        current = found
    return current


# ============================================================================
# Rules
# ============================================================================

def resolve_rule(tree: TreeLike, path: str) -> Rule:
    """
    Resolve a path to a rule.

    Args:
        tree: The tree (or root rule) to search
        path: Rule path; "", "/" and "/default" address the root

    Returns:
        The addressed rule

    Raises:
        RuleNotFoundError: If a segment matches no child at its level
    """
    return _descend(root_of(tree), paths.split(path), path)


def resolve_parent_rule(tree: TreeLike, path: str) -> Rule:
    """
    Resolve the rule containing the node addressed by `path`.

    The final segment is dropped and the remainder resolved as a rule path.

    Raises:
        InvalidPathError: If the path addresses the root, which has no parent
        RuleNotFoundError: If the parent path does not resolve
    """
    segments = paths.split(path)
    if not segments:
        raise InvalidPathError(path, f'Root rule has no parent: "{path}"')
    return _descend(root_of(tree), segments[:-1], path)


# ============================================================================
# Behaviors / Criteria
# ============================================================================

def _resolve_member(tree: TreeLike, path: str, attr: str, not_found) -> RuleMember:
    # A member path names at least a separator and one character
    if len(path) < 2 or not paths.normalize(path):
        raise InvalidPathError(path)

    segments = paths.split(path)
    parent = _descend(root_of(tree), segments[:-1], path)
    member = _last_match(getattr(parent, attr), segments[-1])
    if member is None:
        raise not_found(path, segments[-1])
    return member


def resolve_behavior(tree: TreeLike, path: str) -> Behavior:
    """
    Resolve a path to a behavior.

    The path must name both the containing rule and the behavior, e.g.
    "/cpCode" (a behavior on the root) or "/Performance/JPEG Images/adaptiveImageCompression".

    Raises:
        InvalidPathError: If the path addresses the root
        RuleNotFoundError: If the containing rule does not resolve
        BehaviorNotFoundError: If the rule has no behavior with the leaf name
    """
    return _resolve_member(tree, path, "behaviors", BehaviorNotFoundError)


def resolve_criteria(tree: TreeLike, path: str) -> Criteria:
    """Resolve a path to a criteria. Same rules as resolve_behavior."""
    return _resolve_member(tree, path, "criteria", CriteriaNotFoundError)


def find_rules(tree: TreeLike, name: str) -> List[Rule]:
    """Return every rule named `name` (case-insensitive), root first, depth-first."""
    wanted = name.lower()
    return [rule for rule in iter_rules(root_of(tree)) if rule.name.lower() == wanted]
