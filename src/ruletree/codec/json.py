#!/usr/bin/env python3
"""
Rule Tree JSON Codec

JSON codec for property rule trees, in the shape served by the remote
property API.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..exceptions import RuleTreeDecodeError
from ..models import RuleTree


# Rule keys dropped from the output when empty, as the remote API omits them
_RULE_OMIT_EMPTY = (
    "criteria",
    "behaviors",
    "children",
    "comments",
    "criteriaLocked",
    "variables",
)

_MEMBER_OMIT_EMPTY = ("locked",)


def _drop_none(fields: Dict[str, Any]) -> Dict[str, Any]:
    # Only the model's own keys; None inside option payloads is data
    return {key: value for key, value in fields.items() if value is not None}


class JSONCodec:
    """
    JSON codec for RuleTrees.

    Example output (compact form shown indented):
        {
          "propertyId": "prp_173136",
          "propertyVersion": 3,
          "ruleFormat": "v2023-01-05",
          "rules": {
            "name": "default",
            "behaviors": [
              {"name": "cpCode", "options": {"value": {"id": 12345}}}
            ],
            "children": [
              {"name": "Performance", "criteriaMustSatisfy": "all"}
            ]
          }
        }

    None fields, empty rule collections, false flags and the transient
    rule depth are left out. Behavior and criteria `options` are always
    written, even when empty.
    """

    def __init__(self, indent: Optional[int] = None):
        self.indent = indent

    def encode(self, tree: RuleTree) -> bytes:
        """
        Encode a RuleTree to JSON bytes.

        Args:
            tree: The RuleTree to encode

        Returns:
            UTF-8 encoded JSON
        """
        data = _drop_none(tree.model_dump(mode="json", by_alias=True))
        data["rules"] = self._prune_rule(data["rules"])
        for key in ("errors", "warnings"):
            if data.get(key):
                data[key] = [_drop_none(item) for item in data[key]]
            else:
                data.pop(key, None)

        if self.indent is None:
            text = json.dumps(data, separators=(',', ':'))
        else:
            text = json.dumps(data, indent=self.indent)
        return text.encode('utf-8')

    def decode(self, data: bytes | str) -> RuleTree:
        """
        Decode JSON into a RuleTree.

        Raises:
            RuleTreeDecodeError: If the data is not JSON or does not describe a rule tree
        """
        try:
            return RuleTree.model_validate_json(data)
        except ValidationError as e:
            raise RuleTreeDecodeError(f"Invalid rule tree document: {e}") from e

    def content_type(self, tree: Optional[RuleTree] = None) -> str:
        """Return the versioned rule tree media type when the tree pins a rule format."""
        if tree is not None and tree.rule_format:
            return f"application/vnd.akamai.papirules.{tree.rule_format}+json"
        return "application/json"

    def _prune_rule(self, rule: Dict[str, Any]) -> Dict[str, Any]:
        """Drop empty fields from a dumped rule, recursing into its children."""
        rule = _drop_none(rule)
        for key in _RULE_OMIT_EMPTY:
            if key in rule and not rule[key]:
                del rule[key]

        options = rule.get("options")
        if options is not None and not any(options.values()):
            del rule["options"]

        for key in ("criteria", "behaviors"):
            members = [_drop_none(member) for member in rule.get(key, [])]
            for member in members:
                for member_key in _MEMBER_OMIT_EMPTY:
                    if member_key in member and not member[member_key]:
                        del member[member_key]
            if members:
                rule[key] = members

        if rule.get("variables"):
            rule["variables"] = [_drop_none(variable) for variable in rule["variables"]]

        rule["children"] = [self._prune_rule(child) for child in rule.get("children", [])]
        if not rule["children"]:
            del rule["children"]
        return rule
