#!/usr/bin/env python3
"""
Rule Tree Traversal

Depth-first, pre-order enumeration of rules. get_children() and
get_all_rules() stamp each visited rule's `depth` as a side effect;
iter_rules() and iter_members() leave the tree untouched.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple, Union

from .models import Rule, RuleMember, RuleTree


TreeLike = Union[RuleTree, Rule]


def root_of(tree: TreeLike) -> Rule:
    """Return the root rule of a tree (a bare Rule is its own root)."""
    if isinstance(tree, RuleTree):
        return tree.rules
    return tree


def get_children(rule: Rule, depth: int = 0, limit: int = 0) -> List[Rule]:
    """
    Recursively collect every descendant of `rule`.

    Args:
        rule: The rule whose descendants are collected
        depth: The caller's current depth (0 when starting from the root)
        limit: Maximum depth to descend to; 0 means unlimited

    Returns:
        Descendants in depth-first pre-order, each with `depth` updated

    Example:
        For default -> Performance -> Compression:

        >>> [r.name for r in get_children(root, 0, 1)]
        ['Performance']
        >>> [r.name for r in get_children(root)]
        ['Performance', 'Compression']
    """
    depth += 1

    if limit and depth > limit:
        return []

    children: List[Rule] = []
    for child in rule.children:
        child.depth = depth
        children.append(child)
        children.extend(get_children(child, depth, limit))
    return children


def get_all_rules(tree: TreeLike) -> List[Rule]:
    """Return a flattened rule tree: the root (depth 0) followed by every descendant."""
    root = root_of(tree)
    root.depth = 0
    return [root] + get_children(root, 0, 0)


def iter_rules(rule: Rule) -> Iterator[Rule]:
    """Yield `rule` and its descendants, depth-first, without touching `depth`."""
    yield rule
    for child in rule.children:
        yield from iter_rules(child)


def iter_members(tree: TreeLike) -> Iterator[Tuple[Rule, RuleMember]]:
    """
    Yield (rule, member) pairs for every criteria and behavior in the tree.

    Members hold no reference to their rule; the owner is paired explicitly.
    Criteria of a rule come before its behaviors.
    """
    for rule in iter_rules(root_of(tree)):
        for criteria in rule.criteria:
            yield rule, criteria
        for behavior in rule.behaviors:
            yield rule, behavior
