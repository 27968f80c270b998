#!/usr/bin/env python3
"""
Rule Tree Sessions

One logical edit of a property's rules: fetch the tree from a store, apply
any number of path-addressed mutations, then save it back.

    session = RuleTreeSession(store, PropertyRef(property_id="prp_1", property_version=3))
    session.load()
    session.add_behavior_options("/cpCode", {"value": {"id": 12345}})
    issues = session.save()

A session is not thread-safe; one workflow should own it at a time.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from pydantic import JsonValue

from .models import Behavior, Criteria, PropertyRef, Rule, RuleTree, ValidationIssue
from .store import RuleTreeStore
from . import mutations, navigator, traversal


logger = logging.getLogger(__name__)


class RuleTreeSession:
    """
    Fetch/mutate/save workflow around a RuleTreeStore.

    Args:
        store: Where the tree is fetched from and saved to
        ref: Which property version to edit
        tree: Start from this tree instead of fetching one
    """

    def __init__(self, store: RuleTreeStore, ref: PropertyRef, tree: Optional[RuleTree] = None):
        self.store = store
        self.ref = ref
        self._tree = tree
        self.issues: List[ValidationIssue] = []

    @property
    def tree(self) -> RuleTree:
        if self._tree is None:
            raise RuntimeError("Session has no tree; call load() first")
        return self._tree

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    def load(self) -> RuleTree:
        """Fetch the tree from the store, discarding any unsaved changes."""
        self._tree = self.store.fetch(self.ref)
        self.issues = []
        return self._tree

    def save(self) -> List[ValidationIssue]:
        """
        Save the tree and adopt the stored copy (fresh etag, attached issues).

        Returns:
            The validation issues reported by the store, unchanged
        """
        saved, issues = self.store.save(self.tree)
        self._tree = saved
        self.issues = list(issues)
        if issues:
            logger.warning(
                f"Rule tree for {self.ref.property_id} saved with {len(issues)} issue(s)"
            )
        return self.issues

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def resolve_rule(self, path: str) -> Rule:
        return navigator.resolve_rule(self.tree, path)

    def resolve_parent_rule(self, path: str) -> Rule:
        return navigator.resolve_parent_rule(self.tree, path)

    def resolve_behavior(self, path: str) -> Behavior:
        return navigator.resolve_behavior(self.tree, path)

    def resolve_criteria(self, path: str) -> Criteria:
        return navigator.resolve_criteria(self.tree, path)

    def get_all_rules(self) -> List[Rule]:
        return traversal.get_all_rules(self.tree)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_child_rule(self, parent_path: str, rule: Rule) -> Rule:
        return mutations.add_child_rule(self.tree, parent_path, rule)

    def set_child_rule(self, parent_path: str, rule: Rule) -> Rule:
        return mutations.set_child_rule(self.tree, parent_path, rule)

    def add_child_behavior(self, parent_path: str, behavior: Behavior) -> Behavior:
        return mutations.add_child_behavior(self.tree, parent_path, behavior)

    def set_child_behavior(self, parent_path: str, behavior: Behavior) -> Behavior:
        return mutations.set_child_behavior(self.tree, parent_path, behavior)

    def add_child_criteria(self, parent_path: str, criteria: Criteria) -> Criteria:
        return mutations.add_child_criteria(self.tree, parent_path, criteria)

    def set_child_criteria(self, parent_path: str, criteria: Criteria) -> Criteria:
        return mutations.set_child_criteria(self.tree, parent_path, criteria)

    def set_behavior_options(self, path: str, options: Mapping[str, JsonValue]) -> Behavior:
        return mutations.set_behavior_options(self.tree, path, options)

    def add_behavior_options(self, path: str, options: Mapping[str, JsonValue]) -> Behavior:
        return mutations.add_behavior_options(self.tree, path, options)

    def set_criteria_options(self, path: str, options: Mapping[str, JsonValue]) -> Criteria:
        return mutations.set_criteria_options(self.tree, path, options)

    def add_criteria_options(self, path: str, options: Mapping[str, JsonValue]) -> Criteria:
        return mutations.add_criteria_options(self.tree, path, options)
