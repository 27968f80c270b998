#!/usr/bin/env python3
"""Tests for text and Mermaid rendering of rule trees."""

from ruletree import Rule, RuleTree, format_tree, to_mermaid


def test_format_tree(sample_tree):
    expected = "\n".join([
        "default",
        "├── Behavior: cpCode",
        '│   └── value: {"id": 1}',
        "├── Behavior: origin",
        '│   └── hostname: "origin.example.com"',
        "├── Section: Performance",
        "│   ├── Behavior: caching",
        '│   │   ├── behavior: "MAX_AGE"',
        '│   │   └── ttl: "1d"',
        "│   └── Section: JPEG Images",
        "│       ├── Criteria: fileExtension",
        '│       │   ├── matchOperator: "IS_ONE_OF"',
        '│       │   └── values: ["jpg", "jpeg"]',
        "│       └── Behavior: adaptiveImageCompression",
        "│           └── tier1MobileCompressionValue: 80",
        "└── Section: Offload",
        "    └── Criteria: path",
        '        └── values: ["/static/*"]',
    ])
    assert format_tree(sample_tree) == expected


def test_format_empty_tree():
    assert format_tree(RuleTree.new()) == "default"


def test_format_subtree(sample_tree):
    offload = sample_tree.rules.children[1]
    assert format_tree(offload).splitlines()[0] == "Offload"


def test_mermaid(sample_tree):
    expected = "\n".join([
        "flowchart TD",
        '    R1["default<br/>0 criteria, 2 behaviors"]',
        '    R2["Performance<br/>0 criteria, 1 behaviors"]',
        '    R3["JPEG Images<br/>1 criteria, 1 behaviors"]',
        '    R4["Offload<br/>1 criteria, 0 behaviors<br/>match any"]',
        "    R1 --> R2",
        "    R2 --> R3",
        "    R1 --> R4",
    ])
    assert to_mermaid(sample_tree) == expected


def test_mermaid_escapes_quotes():
    tree = RuleTree(rules=Rule(name="default", children=[Rule(name='Say "hi"')]))
    assert 'R2["Say #quot;hi#quot;<br/>' in to_mermaid(tree)
