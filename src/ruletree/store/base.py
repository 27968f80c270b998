#!/usr/bin/env python3
"""
Rule Tree Store Interface

Protocol for the persistence port the engine is driven through:
fetch a tree, mutate it in memory, save it back.
"""

from __future__ import annotations

import hashlib
from typing import Callable, List, Protocol, Tuple

from ..config import get_config
from ..models import PropertyRef, RuleTree, ValidationIssue


# Checks a tree before it is stored and reports issues; never raises for bad rules
Validator = Callable[[RuleTree], List[ValidationIssue]]


class RuleTreeStore(Protocol):
    """
    Protocol for stores holding whole rule trees.

    Stores are synchronous. A save may be accepted with validation issues;
    those are returned verbatim and also attached to the returned tree.
    """

    def fetch(self, ref: PropertyRef) -> RuleTree:
        """
        Fetch the rule tree for one property version.

        Raises:
            StoreError: If the store has no tree for `ref`
        """
        ...

    def save(self, tree: RuleTree) -> Tuple[RuleTree, List[ValidationIssue]]:
        """
        Save a rule tree.

        Args:
            tree: The tree to save; it must carry property_id and property_version

        Returns:
            The tree as stored (with a fresh etag) and its validation issues
        """
        ...


def compute_etag(tree: RuleTree) -> str:
    """Digest of the tree's rules and metadata, ignoring any previous etag and issues."""
    stripped = tree.model_copy(update={"etag": None, "errors": [], "warnings": []})
    return hashlib.sha1(get_config().codec.encode(stripped)).hexdigest()
