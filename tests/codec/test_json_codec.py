#!/usr/bin/env python3
"""Tests for the rule tree JSON codec."""

import json

import pytest

from ruletree import (
    Behavior,
    Criteria,
    Rule,
    RuleOptions,
    RuleTree,
    RuleVariable,
    ValidationIssue,
    configure,
    get_config,
)
from ruletree.codec import JSONCodec
from ruletree.exceptions import RuleTreeDecodeError, RuleTreeError


def encode_to_dict(tree, codec=None):
    codec = codec or JSONCodec()
    return json.loads(codec.encode(tree).decode('utf-8'))


# ============================================================================
# Encoding
# ============================================================================

def test_encode_uses_camel_case_keys(sample_tree):
    """Test that metadata and rule fields use their wire names."""
    data = encode_to_dict(sample_tree)

    assert data["propertyId"] == "prp_1"
    assert data["propertyVersion"] == 3
    assert data["ruleFormat"] == "v2023-01-05"
    assert data["rules"]["children"][1]["criteriaMustSatisfy"] == "any"


def test_encode_is_compact_by_default(sample_tree):
    """Test that the default output has no insignificant whitespace."""
    text = JSONCodec().encode(sample_tree).decode('utf-8')
    assert '": ' not in text
    assert "\n" not in text


def test_encode_with_indent(sample_tree):
    """Test that an indent produces multi-line output."""
    text = JSONCodec(indent=2).encode(sample_tree).decode('utf-8')
    assert text.startswith('{\n  "')


def test_encode_prunes_empty_rule_fields():
    """Test that empty collections, false flags and None fields are left out."""
    tree = RuleTree.new()
    data = encode_to_dict(tree)

    assert data == {"rules": {"name": "default"}}


def test_encode_keeps_secure_flag_when_set():
    tree = RuleTree(rules=Rule(name="default", options=RuleOptions(is_secure=True)))
    assert encode_to_dict(tree)["rules"]["options"] == {"is_secure": True}


def test_encode_never_writes_depth(sample_tree):
    sample_tree.rules.children[0].depth = 4
    data = encode_to_dict(sample_tree)
    assert "depth" not in data["rules"]["children"][0]


def test_encode_member_shape():
    """Test that members always carry options and drop default flags."""
    tree = RuleTree(rules=Rule(
        name="default",
        criteria=[Criteria(name="hostname", locked=True)],
        behaviors=[Behavior(name="allowPost")],
    ))
    rules = encode_to_dict(tree)["rules"]

    assert rules["criteria"] == [{"name": "hostname", "options": {}, "locked": True}]
    assert rules["behaviors"] == [{"name": "allowPost", "options": {}}]


def test_encode_keeps_null_option_values():
    """Test that None inside an option payload is data, not an omitted field."""
    tree = RuleTree(rules=Rule(
        name="default",
        behaviors=[Behavior(name="origin", options={"customCertificates": None, "nested": {"a": None}})],
    ))
    options = encode_to_dict(tree)["rules"]["behaviors"][0]["options"]
    assert options == {"customCertificates": None, "nested": {"a": None}}


def test_encode_variables_drop_none():
    tree = RuleTree(rules=Rule(name="default", variables=[RuleVariable(name="PMUSER_X", value="1")]))
    variables = encode_to_dict(tree)["rules"]["variables"]
    assert variables == [{"name": "PMUSER_X", "value": "1", "hidden": False, "sensitive": False}]


def test_encode_errors_only_when_present(sample_tree):
    assert "errors" not in encode_to_dict(sample_tree)

    sample_tree.errors = [ValidationIssue(type="missing_option", detail="hostname is required")]
    errors = encode_to_dict(sample_tree)["errors"]
    assert errors == [{"type": "missing_option", "detail": "hostname is required"}]


def test_encode_preserves_order(sample_tree):
    data = encode_to_dict(sample_tree)
    assert [b["name"] for b in data["rules"]["behaviors"]] == ["cpCode", "origin"]
    assert [c["name"] for c in data["rules"]["children"]] == ["Performance", "Offload"]


# ============================================================================
# Decoding
# ============================================================================

def test_decode_restores_tree(sample_tree):
    """Test that decoding the encoded form yields an equal tree."""
    codec = JSONCodec()
    decoded = codec.decode(codec.encode(sample_tree))
    assert decoded == sample_tree


def test_decode_api_document():
    document = {
        "accountId": "act_1",
        "contractId": "ctr_1",
        "groupId": "grp_1",
        "propertyId": "prp_173136",
        "propertyVersion": 3,
        "etag": "a87dd0b3",
        "ruleFormat": "v2023-01-05",
        "rules": {
            "name": "default",
            "criteria": [],
            "children": [{
                "name": "Performance",
                "criteria": [],
                "behaviors": [{"name": "gzipResponse", "options": {"behavior": "ALWAYS"}}],
                "criteriaMustSatisfy": "all",
            }],
            "behaviors": [{"name": "cpCode", "options": {"value": {"id": 12345}}}],
        },
    }
    tree = JSONCodec().decode(json.dumps(document))

    assert tree.account_id == "act_1"
    assert tree.etag == "a87dd0b3"
    assert tree.rules.children[0].behaviors[0].options == {"behavior": "ALWAYS"}


def test_decode_accepts_str_and_bytes():
    codec = JSONCodec()
    assert codec.decode('{"rules": {"name": "default"}}').rules.name == "default"
    assert codec.decode(b'{"rules": {"name": "default"}}').rules.name == "default"


@pytest.mark.parametrize("data", [
    b"not json",
    b'{"rules": {"behaviors": []}}',
    b'{"ruleFormat": "v1", "rules": {"name": "default"}}',
    b'{"rules": {"name": "default", "behaviors": [{"options": {}}]}}',
])
def test_decode_errors(data):
    with pytest.raises(RuleTreeDecodeError):
        JSONCodec().decode(data)


def test_decode_error_is_rule_tree_error():
    with pytest.raises(RuleTreeError):
        JSONCodec().decode(b"[]")


# ============================================================================
# Content Type / Configuration
# ============================================================================

def test_content_type(sample_tree):
    codec = JSONCodec()
    assert codec.content_type() == "application/json"
    assert codec.content_type(RuleTree.new()) == "application/json"
    assert codec.content_type(sample_tree) == "application/vnd.akamai.papirules.v2023-01-05+json"


def test_default_codec_follows_configured_indent(sample_tree):
    configure(json_indent=4)
    codec = get_config().codec
    assert isinstance(codec, JSONCodec)
    assert codec.indent == 4
