#!/usr/bin/env python3
"""
In-Memory Rule Tree Store

Dict-backed store, keyed by (property_id, property_version). Trees are
deep-copied on the way in and out so callers never share nodes with the store.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import StoreError
from ..models import PropertyRef, RuleTree, ValidationIssue
from .base import Validator, compute_etag


logger = logging.getLogger(__name__)


class MemoryRuleTreeStore:
    """
    In-memory store, mainly for tests and offline editing.

    Args:
        trees: Trees to preload
        validator: Optional check run on every save; its issues are
            attached to the stored tree and returned unchanged
    """

    def __init__(
        self,
        trees: Optional[Iterable[RuleTree]] = None,
        validator: Optional[Validator] = None,
    ):
        self._trees: Dict[Tuple[str, int], RuleTree] = {}
        self._validator = validator
        for tree in trees or ():
            self.put(tree)

    @staticmethod
    def _key(ref: PropertyRef) -> Tuple[str, int]:
        return ref.property_id, ref.property_version

    def put(self, tree: RuleTree) -> None:
        """Store a copy of `tree` without validation or etag changes."""
        self._trees[self._key(tree.ref())] = tree.model_copy(deep=True)

    def fetch(self, ref: PropertyRef) -> RuleTree:
        try:
            stored = self._trees[self._key(ref)]
        except KeyError:
            raise StoreError(
                f"No rule tree for {ref.property_id} version {ref.property_version}"
            ) from None
        logger.info(f"Fetched rule tree {ref.property_id} v{ref.property_version}")
        return stored.model_copy(deep=True)

    def save(self, tree: RuleTree) -> Tuple[RuleTree, List[ValidationIssue]]:
        ref = tree.ref()
        issues = list(self._validator(tree)) if self._validator else []

        saved = tree.model_copy(deep=True)
        saved.errors = [issue.model_copy() for issue in issues]
        saved.warnings = []
        saved.etag = compute_etag(saved)
        self._trees[self._key(ref)] = saved

        if issues:
            logger.warning(
                f"Saved rule tree {ref.property_id} v{ref.property_version} "
                f"with {len(issues)} validation issue(s)"
            )
        else:
            logger.info(f"Saved rule tree {ref.property_id} v{ref.property_version}")
        return saved.model_copy(deep=True), issues

    def digest(self, ref: PropertyRef) -> Optional[str]:
        """Return the etag of the stored tree, or None if there is none."""
        stored = self._trees.get(self._key(ref))
        return stored.etag if stored is not None else None
