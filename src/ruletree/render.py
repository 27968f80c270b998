#!/usr/bin/env python3
"""
Rule Tree Rendering

Human-readable views of a rule tree: a box-drawing text outline and a
Mermaid flowchart.

Usage:
    from ruletree.render import format_tree, to_mermaid

    print(format_tree(tree))
    diagram = to_mermaid(tree)
"""

from __future__ import annotations

import itertools
import json
from typing import List, NamedTuple

from .models import OptionMap, Rule
from .traversal import TreeLike, root_of


class _Entry(NamedTuple):
    label: str
    children: List["_Entry"]


def _option_entries(options: OptionMap) -> List[_Entry]:
    return [_Entry(f"{key}: {json.dumps(value)}", []) for key, value in options.items()]


def _rule_entries(rule: Rule) -> List[_Entry]:
    entries = [
        _Entry(f"Criteria: {criteria.name}", _option_entries(criteria.options))
        for criteria in rule.criteria
    ]
    entries.extend(
        _Entry(f"Behavior: {behavior.name}", _option_entries(behavior.options))
        for behavior in rule.behaviors
    )
    entries.extend(
        _Entry(f"Section: {child.name}", _rule_entries(child))
        for child in rule.children
    )
    return entries


def _draw(entries: List[_Entry], prefix: str, lines: List[str]) -> None:
    for index, entry in enumerate(entries):
        last = index == len(entries) - 1
        lines.append(f"{prefix}{'└── ' if last else '├── '}{entry.label}")
        _draw(entry.children, prefix + ("    " if last else "│   "), lines)


def format_tree(tree: TreeLike) -> str:
    """
    Render the tree as an indented outline.

    Each rule lists its criteria, then its behaviors, then its child
    sections; criteria and behaviors list their options as JSON.

    Example:
        >>> print(format_tree(tree))
        default
        ├── Behavior: cpCode
        │   └── value: {"id": 12345}
        └── Section: Performance
            └── Behavior: caching
                └── ttl: "1d"
    """
    root = root_of(tree)
    lines = [root.name]
    _draw(_rule_entries(root), "", lines)
    return "\n".join(lines)


def _mermaid_label(rule: Rule) -> str:
    label = rule.name.replace('"', "#quot;")
    label = f"{label}<br/>{len(rule.criteria)} criteria, {len(rule.behaviors)} behaviors"
    if rule.criteria_must_satisfy is not None:
        label = f"{label}<br/>match {rule.criteria_must_satisfy.value}"
    return label


def to_mermaid(tree: TreeLike) -> str:
    """
    Generate a Mermaid flowchart of the rule hierarchy.

    One node per rule, labelled with its name and member counts, and one
    edge from each rule to each of its children.

    Example:
        ```
        flowchart TD
            R1["default<br/>0 criteria, 1 behaviors"]
            R2["Performance<br/>1 criteria, 2 behaviors"]
            R1 --> R2
        ```
    """
    lines: List[str] = ["flowchart TD"]
    edges: List[str] = []
    counter = itertools.count(1)

    def walk(rule: Rule, node_id: str) -> None:
        lines.append(f'    {node_id}["{_mermaid_label(rule)}"]')
        for child in rule.children:
            child_id = f"R{next(counter)}"
            edges.append(f"    {node_id} --> {child_id}")
            walk(child, child_id)

    walk(root_of(tree), f"R{next(counter)}")
    return "\n".join(lines + edges)
