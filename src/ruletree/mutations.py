#!/usr/bin/env python3
"""
Rule Tree Mutations

Add and Set operations for rules, behaviors, criteria and their options.

    add_* -> merge into the existing node if the path resolves, append otherwise
    set_* -> replace the existing node in place if the path resolves, append otherwise

Every operation addresses a parent by path. A parent that does not resolve
raises RuleNotFoundError. There is no rollback: a recursive add_child_rule
that fails part way leaves the earlier changes applied.

Option merges are shallow. Each top-level key of the new options replaces
the existing value wholesale, nested maps included.

Example:
    ```python
    tree = RuleTree.new()
    add_child_rule(tree, "", Rule(name="Performance"))
    add_behavior_options(tree, "/Performance/caching", {"behavior": "MAX_AGE"})
    add_behavior_options(tree, "/Performance/caching", {"ttl": "1d"})
    # caching.options == {"behavior": "MAX_AGE", "ttl": "1d"}
    ```
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Type

from pydantic import JsonValue

from .exceptions import (
    BehaviorNotFoundError,
    CriteriaNotFoundError,
    InvalidPathError,
    MemberNotFoundError,
    RuleNotFoundError,
)
from .config import get_config
from .models import Behavior, Criteria, OptionMap, Rule, RuleMember
from .navigator import resolve_behavior, resolve_criteria, resolve_rule
from .traversal import TreeLike
from . import paths


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _MemberKind:
    """How to reach one kind of rule member (behaviors or criteria)."""

    label: str
    model: Type[RuleMember]
    resolve: Callable[[TreeLike, str], RuleMember]
    not_found: Type[MemberNotFoundError]
    append: Callable[[Rule, RuleMember], RuleMember]


_BEHAVIORS = _MemberKind(
    label="behavior",
    model=Behavior,
    resolve=resolve_behavior,
    not_found=BehaviorNotFoundError,
    append=Rule.append_behavior,
)

_CRITERIA = _MemberKind(
    label="criteria",
    model=Criteria,
    resolve=resolve_criteria,
    not_found=CriteriaNotFoundError,
    append=Rule.append_criteria,
)


def _copy_options(options: Mapping[str, JsonValue]) -> OptionMap:
    return copy.deepcopy(dict(options))


def _child_path(parent_path: str, name: str) -> str:
    sep = get_config().separator
    if not name or sep in name:
        raise InvalidPathError(name, f"Cannot address a node named \"{name}\"")
    return paths.join(parent_path, name)


# ============================================================================
# Rules
# ============================================================================

def add_child_rule(tree: TreeLike, parent_path: str, rule: Rule) -> Rule:
    """
    Merge `rule` into the same-named child of `parent_path`, or append it.

    When the child exists, its name is overwritten with the incoming one,
    each incoming criteria and behavior is added with add_child_criteria /
    add_child_behavior (options merged, missing members appended), and each
    incoming child rule is merged recursively.

    Args:
        tree: The tree to mutate
        parent_path: Path of the parent rule
        rule: The rule to merge or append

    Returns:
        The merged existing rule, or `rule` itself when appended

    Raises:
        InvalidPathError: If the rule's name is empty or contains the separator
        RuleNotFoundError: If `parent_path` does not resolve
    """
    target_path = _child_path(parent_path, rule.name)
    try:
        existing = resolve_rule(tree, target_path)
    except RuleNotFoundError:
        parent = resolve_rule(tree, parent_path)
        logger.debug(f"Appending rule '{rule.name}' under '{parent.name}'")
        return parent.append_child(rule)

    logger.debug(f"Merging rule '{rule.name}' into existing '{existing.name}'")
    existing.name = rule.name

    for criteria in rule.criteria:
        add_child_criteria(tree, target_path, criteria)
    for behavior in rule.behaviors:
        add_child_behavior(tree, target_path, behavior)
    for child in rule.children:
        add_child_rule(tree, target_path, child)

    return existing


def set_child_rule(tree: TreeLike, parent_path: str, rule: Rule) -> Rule:
    """
    Replace the same-named child of `parent_path` with `rule`, or append it.

    A replaced rule keeps its identity; all of its fields, including its
    criteria, behaviors and children, are overwritten with copies of the
    incoming ones. An appended rule is attached as given.

    Raises:
        RuleNotFoundError: If `parent_path` does not resolve
    """
    target_path = _child_path(parent_path, rule.name)
    try:
        existing = resolve_rule(tree, target_path)
    except RuleNotFoundError:
        parent = resolve_rule(tree, parent_path)
        logger.debug(f"Appending rule '{rule.name}' under '{parent.name}'")
        return parent.append_child(rule)

    logger.debug(f"Replacing rule '{existing.name}'")
    existing.replace_contents(rule.model_copy(deep=True))
    return existing


# ============================================================================
# Behaviors / Criteria
# ============================================================================

def _add_member(kind: _MemberKind, tree: TreeLike, parent_path: str, member: RuleMember) -> RuleMember:
    try:
        existing = kind.resolve(tree, _child_path(parent_path, member.name))
    except kind.not_found:
        parent = resolve_rule(tree, parent_path)
        logger.debug(f"Appending {kind.label} '{member.name}' to '{parent.name}'")
        return kind.append(parent, member)

    _merge_options(kind, existing, member.options)
    return existing


def _set_member(kind: _MemberKind, tree: TreeLike, parent_path: str, member: RuleMember) -> RuleMember:
    try:
        existing = kind.resolve(tree, _child_path(parent_path, member.name))
    except kind.not_found:
        parent = resolve_rule(tree, parent_path)
        logger.debug(f"Appending {kind.label} '{member.name}' to '{parent.name}'")
        return kind.append(parent, member)

    logger.debug(f"Replacing {kind.label} '{existing.name}'")
    existing.replace_contents(member.model_copy(deep=True))
    return existing


def add_child_behavior(tree: TreeLike, parent_path: str, behavior: Behavior) -> Behavior:
    """
    Merge `behavior`'s options into the same-named behavior of the rule at
    `parent_path`, or append `behavior` to that rule.

    Raises:
        RuleNotFoundError: If `parent_path` does not resolve
    """
    return _add_member(_BEHAVIORS, tree, parent_path, behavior)


def set_child_behavior(tree: TreeLike, parent_path: str, behavior: Behavior) -> Behavior:
    """Replace the same-named behavior in place, or append `behavior`."""
    return _set_member(_BEHAVIORS, tree, parent_path, behavior)


def add_child_criteria(tree: TreeLike, parent_path: str, criteria: Criteria) -> Criteria:
    """Merge `criteria`'s options into the same-named criteria, or append it."""
    return _add_member(_CRITERIA, tree, parent_path, criteria)


def set_child_criteria(tree: TreeLike, parent_path: str, criteria: Criteria) -> Criteria:
    """Replace the same-named criteria in place, or append `criteria`."""
    return _set_member(_CRITERIA, tree, parent_path, criteria)


# ============================================================================
# Options
# ============================================================================

def _merge_options(kind: _MemberKind, member: RuleMember, new_options: Mapping[str, JsonValue]) -> None:
    logger.debug(
        f"Merging options {sorted(new_options)} into {kind.label} '{member.name}'"
    )
    for key, value in new_options.items():
        member.options[key] = copy.deepcopy(value)


def _resolve_or_create(kind: _MemberKind, tree: TreeLike, path: str) -> RuleMember:
    try:
        return kind.resolve(tree, path)
    except kind.not_found:
        parent_path, name = paths.split_leaf(path)
        logger.debug(f"Creating {kind.label} '{name}' at '{path}'")
        return _add_member(kind, tree, parent_path, kind.model(name=name))


def set_behavior_options(tree: TreeLike, path: str, new_options: Mapping[str, JsonValue]) -> Behavior:
    """
    Replace all options of the behavior at `path`.

    The path runs from the root to the behavior, e.g. "/cpCode" or
    "/Performance/JPEG Images/adaptiveImageCompression". A missing behavior
    is created under its rule first.

    Args:
        tree: The tree to mutate
        path: Path of the behavior
        new_options: The complete new option map

    Returns:
        The updated behavior

    Raises:
        InvalidPathError: If the path addresses the root
        RuleNotFoundError: If the behavior's rule does not resolve
    """
    behavior = _resolve_or_create(_BEHAVIORS, tree, path)
    behavior.options = _copy_options(new_options)
    return behavior


def add_behavior_options(tree: TreeLike, path: str, new_options: Mapping[str, JsonValue]) -> Behavior:
    """
    Add or overwrite individual options of the behavior at `path`.

    Keys absent from `new_options` are left untouched. A missing behavior
    is created under its rule first.

    Raises:
        InvalidPathError: If the path addresses the root
        RuleNotFoundError: If the behavior's rule does not resolve
    """
    behavior = _resolve_or_create(_BEHAVIORS, tree, path)
    _merge_options(_BEHAVIORS, behavior, new_options)
    return behavior


def set_criteria_options(tree: TreeLike, path: str, new_options: Mapping[str, JsonValue]) -> Criteria:
    """Replace all options of the criteria at `path`, creating it if missing."""
    criteria = _resolve_or_create(_CRITERIA, tree, path)
    criteria.options = _copy_options(new_options)
    return criteria


def add_criteria_options(tree: TreeLike, path: str, new_options: Mapping[str, JsonValue]) -> Criteria:
    """Add or overwrite individual options of the criteria at `path`, creating it if missing."""
    criteria = _resolve_or_create(_CRITERIA, tree, path)
    _merge_options(_CRITERIA, criteria, new_options)
    return criteria
