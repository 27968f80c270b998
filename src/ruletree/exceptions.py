#!/usr/bin/env python3
"""
Rule tree exceptions.

All ruletree exceptions inherit from RuleTreeError for easy catching.
Resolution failures carry the path that failed to resolve.
"""

from __future__ import annotations

from typing import Optional


class RuleTreeError(Exception):
    """Base exception for all ruletree errors."""


class InvalidPathError(RuleTreeError):
    """Path is empty or malformed where a leaf name is required."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f'Invalid path: "{path}"')


class PathNotFoundError(RuleTreeError):
    """A path did not resolve to a node in the tree."""

    kind = "node"

    def __init__(self, path: str, segment: Optional[str] = None):
        self.path = path
        self.segment = segment
        message = f'{self.kind.capitalize()} not found: "{path}"'
        if segment is not None:
            message += f' (no match for segment "{segment}")'
        super().__init__(message)


class RuleNotFoundError(PathNotFoundError):
    """A path segment does not match any child rule at that level."""

    kind = "rule"


class MemberNotFoundError(PathNotFoundError):
    """The parent rule resolved but has no criteria/behavior with the leaf name."""


class BehaviorNotFoundError(MemberNotFoundError):
    kind = "behavior"


class CriteriaNotFoundError(MemberNotFoundError):
    kind = "criteria"


class RuleTreeDecodeError(RuleTreeError):
    """A document could not be decoded into a RuleTree."""


class StoreError(RuleTreeError):
    """A persistence store could not fetch or save a rule tree."""
