#!/usr/bin/env python3
"""
Rule Tree Data Models

Pydantic models for a property rule tree: rules carrying criteria,
behaviors and child rules, plus the property-scoped metadata and the
validation issues returned by a remote save.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator
from pydantic.alias_generators import to_camel

from .config import get_config


# ============================================================================
# Option Maps
# ============================================================================

# Free-form, arbitrarily nested option payload. JsonValue is the tagged union
# str | int | float | bool | None | list | dict, validated recursively.
OptionMap = Dict[str, JsonValue]

RULE_FORMAT_PATTERN = re.compile(r"^(latest|v\d{4}-\d{2}-\d{2})$")


class WireModel(BaseModel):
    """Base for every model that crosses the JSON boundary."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def replace_contents(self, other: WireModel) -> None:
        """Overwrite every field with the values from `other`, keeping this object's identity."""
        for field_name in type(self).model_fields:
            setattr(self, field_name, getattr(other, field_name))


class MustSatisfy(str, Enum):
    """Whether ANY or ALL of a rule's criteria must match."""
    ANY = "any"
    ALL = "all"


# ============================================================================
# Criteria / Behaviors
# ============================================================================

class RuleMember(WireModel):
    """
    A named option-map holder attached to a rule.

    Attributes:
        name: Behavior or criteria name, matched case-insensitively by paths
        options: Free-form option payload
        locked: Whether the member is locked against edits in the remote UI
        uuid: Opaque identity for the remote system
        template_uuid: Template the member was instantiated from
    """
    name: str
    options: OptionMap = Field(default_factory=dict)
    locked: bool = False
    uuid: Optional[str] = None
    template_uuid: Optional[str] = None


class Criteria(RuleMember):
    """A match condition. Owned by exactly one rule."""


class Behavior(RuleMember):
    """A configuration action. Owned by exactly one rule."""


# ============================================================================
# Rules
# ============================================================================

class RuleOptions(WireModel):
    is_secure: bool = Field(default=False, alias="is_secure")


class RuleVariable(WireModel):
    name: str
    value: Optional[str] = None
    description: Optional[str] = None
    hidden: bool = False
    sensitive: bool = False


class RuleCustomOverride(WireModel):
    name: str
    override_id: str


class Rule(WireModel):
    """
    A node of the rule tree.

    Children, criteria and behaviors are plain ordered lists owned by this
    rule. Duplicate names are allowed; path resolution picks the last match.

    `depth` is transient: it is rewritten by traversal and never serialized.
    """
    name: str
    criteria: List[Criteria] = Field(default_factory=list)
    behaviors: List[Behavior] = Field(default_factory=list)
    children: List[Rule] = Field(default_factory=list)
    comments: str = ""
    criteria_locked: bool = False
    criteria_must_satisfy: Optional[MustSatisfy] = None
    uuid: Optional[str] = None
    options: RuleOptions = Field(default_factory=RuleOptions)
    variables: List[RuleVariable] = Field(default_factory=list)
    custom_override: Optional[RuleCustomOverride] = None
    advanced_override: Optional[str] = None
    template_uuid: Optional[str] = None
    template_link: Optional[str] = None
    depth: int = Field(default=0, exclude=True)

    def append_child(self, child: Rule) -> Rule:
        self.children.append(child)
        return child

    def append_criteria(self, criteria: Criteria) -> Criteria:
        self.criteria.append(criteria)
        return criteria

    def append_behavior(self, behavior: Behavior) -> Behavior:
        self.behaviors.append(behavior)
        return behavior


# ============================================================================
# Remote save results
# ============================================================================

class ValidationIssue(WireModel):
    """
    An error returned by the remote store for a saved rule tree.

    The engine never interprets these; they are surfaced as received.
    """
    type: str = ""
    title: Optional[str] = None
    detail: Optional[str] = None
    instance: Optional[str] = None
    behavior_name: Optional[str] = None
    error_location: Optional[str] = None


class RuleWarning(WireModel):
    type: str = ""
    title: Optional[str] = None
    detail: Optional[str] = None
    error_location: Optional[str] = None
    current_rule_format: Optional[str] = None
    suggested_rule_format: Optional[str] = None


# ============================================================================
# Rule Trees
# ============================================================================

def _check_rule_format(value: Optional[str]) -> Optional[str]:
    if value is not None and not RULE_FORMAT_PATTERN.match(value):
        raise ValueError(
            f"rule format must be 'latest' or 'vYYYY-MM-DD', got {value!r}"
        )
    return value


class PropertyRef(WireModel):
    """Identifies one version of a property's rule tree in a store."""
    property_id: str
    property_version: int
    contract_id: Optional[str] = None
    group_id: Optional[str] = None
    rule_format: Optional[str] = None

    @field_validator("rule_format")
    @classmethod
    def validate_rule_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_rule_format(value)


def _default_root() -> Rule:
    return Rule(name=get_config().root_name)


class RuleTree(WireModel):
    """
    A property's rule tree: one root rule plus property metadata.

    Attributes:
        rules: The root rule, the only entry point for path addressing
        errors: Validation issues attached by the last save
        warnings: Warnings attached by the last save
    """
    account_id: Optional[str] = None
    contract_id: Optional[str] = None
    group_id: Optional[str] = None
    property_id: Optional[str] = None
    property_version: Optional[int] = None
    etag: Optional[str] = None
    rule_format: Optional[str] = None
    comments: Optional[str] = None
    rules: Rule = Field(default_factory=_default_root)
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[RuleWarning] = Field(default_factory=list)

    @field_validator("rule_format")
    @classmethod
    def validate_rule_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_rule_format(value)

    @classmethod
    def new(cls, **metadata) -> RuleTree:
        """Build an empty tree whose root is named after the configured root name."""
        return cls(rules=_default_root(), **metadata)

    @property
    def root(self) -> Rule:
        return self.rules

    def ref(self) -> PropertyRef:
        """Return the store identity of this tree."""
        if self.property_id is None or self.property_version is None:
            raise ValueError("rule tree has no property_id/property_version")
        return PropertyRef(
            property_id=self.property_id,
            property_version=self.property_version,
            contract_id=self.contract_id,
            group_id=self.group_id,
            rule_format=self.rule_format,
        )
