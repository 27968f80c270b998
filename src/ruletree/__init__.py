#!/usr/bin/env python3
"""
ruletree - Property Rule Tree Engine

In-memory model of a property's configuration rules. Each rule carries match
criteria, behaviors and child rules, and every node is addressed by a
slash-delimited, case-insensitive path.

Usage:
    from ruletree import (
        RuleTree, Rule, Behavior,
        add_child_rule, add_child_behavior, resolve_behavior,
    )

    tree = RuleTree.new()
    add_child_rule(tree, "", Rule(name="Static Content"))
    add_child_behavior(
        tree,
        "/Static Content",
        Behavior(name="caching", options={"behavior": "MAX_AGE", "ttl": "7d"}),
    )
    resolve_behavior(tree, "/static content/CACHING").options["ttl"]   # "7d"

Usage (fetch, edit, save):
    from ruletree import PropertyRef, RuleTreeSession
    from ruletree.store import FileRuleTreeStore

    session = RuleTreeSession(FileRuleTreeStore("rules/"), PropertyRef(property_id="prp_1", property_version=3))
    session.load()
    session.set_behavior_options("/origin", {"hostname": "origin.example.com"})
    issues = session.save()

Key Concepts:
    Rule - A named node carrying criteria, behaviors and child rules
    Criteria - A named match condition with an option map
    Behavior - A named configuration action with an option map
    Path - "/Section/Subsection/leaf"; "" or "/default" address the root

Operations:
    add_* - Merge into an existing node, append when absent
    set_* - Replace an existing node in place, append when absent
"""

from .config import EngineConfig, configure, get_config, reset_config
from .exceptions import (
    RuleTreeError,
    InvalidPathError,
    PathNotFoundError,
    RuleNotFoundError,
    MemberNotFoundError,
    BehaviorNotFoundError,
    CriteriaNotFoundError,
    RuleTreeDecodeError,
    StoreError,
)
from .models import (
    OptionMap,
    MustSatisfy,
    RuleMember,
    Criteria,
    Behavior,
    RuleOptions,
    RuleVariable,
    RuleCustomOverride,
    Rule,
    ValidationIssue,
    RuleWarning,
    PropertyRef,
    RuleTree,
)
from .paths import normalize, split, join, split_leaf
from .navigator import (
    resolve_rule,
    resolve_parent_rule,
    resolve_behavior,
    resolve_criteria,
    find_rules,
)
from .mutations import (
    add_child_rule,
    set_child_rule,
    add_child_behavior,
    set_child_behavior,
    add_child_criteria,
    set_child_criteria,
    set_behavior_options,
    add_behavior_options,
    set_criteria_options,
    add_criteria_options,
)
from .traversal import get_children, get_all_rules, iter_rules, iter_members
from .render import format_tree, to_mermaid
from .session import RuleTreeSession


__version__ = "0.1.0"

__all__ = [
    # Configuration
    'EngineConfig',
    'configure',
    'get_config',
    'reset_config',

    # Exceptions
    'RuleTreeError',
    'InvalidPathError',
    'PathNotFoundError',
    'RuleNotFoundError',
    'MemberNotFoundError',
    'BehaviorNotFoundError',
    'CriteriaNotFoundError',
    'RuleTreeDecodeError',
    'StoreError',

    # Models
    'OptionMap',
    'MustSatisfy',
    'RuleMember',
    'Criteria',
    'Behavior',
    'RuleOptions',
    'RuleVariable',
    'RuleCustomOverride',
    'Rule',
    'ValidationIssue',
    'RuleWarning',
    'PropertyRef',
    'RuleTree',

    # Paths
    'normalize',
    'split',
    'join',
    'split_leaf',

    # Navigation
    'resolve_rule',
    'resolve_parent_rule',
    'resolve_behavior',
    'resolve_criteria',
    'find_rules',

    # Mutation
    'add_child_rule',
    'set_child_rule',
    'add_child_behavior',
    'set_child_behavior',
    'add_child_criteria',
    'set_child_criteria',
    'set_behavior_options',
    'add_behavior_options',
    'set_criteria_options',
    'add_criteria_options',

    # Traversal
    'get_children',
    'get_all_rules',
    'iter_rules',
    'iter_members',

    # Rendering
    'format_tree',
    'to_mermaid',

    # Sessions
    'RuleTreeSession',
]
