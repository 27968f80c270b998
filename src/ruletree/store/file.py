#!/usr/bin/env python3
"""
File Rule Tree Store

Stores each property version as one JSON document on disk:

    <directory>/<propertyId>_v<propertyVersion>.json
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..codec import Codec
from ..config import get_config
from ..exceptions import RuleTreeDecodeError, StoreError
from ..models import PropertyRef, RuleTree, ValidationIssue
from .base import Validator, compute_etag


logger = logging.getLogger(__name__)


class FileRuleTreeStore:
    """
    Directory-backed store using blocking file I/O.

    Args:
        directory: Where documents are kept. Created if it doesn't exist.
        codec: Codec for documents (defaults to the configured codec)
        validator: Optional check run on every save
    """

    def __init__(
        self,
        directory: str | Path,
        codec: Optional[Codec] = None,
        validator: Optional[Validator] = None,
    ):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.codec = codec or get_config().codec
        self._validator = validator

    def path_for(self, ref: PropertyRef) -> Path:
        return self.directory / f"{ref.property_id}_v{ref.property_version}.json"

    def fetch(self, ref: PropertyRef) -> RuleTree:
        path = self.path_for(ref)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise StoreError(
                f"No rule tree for {ref.property_id} version {ref.property_version} at {path}"
            ) from None
        except OSError as e:
            raise StoreError(f"Could not read {path}: {e}") from e

        try:
            tree = self.codec.decode(data)
        except RuleTreeDecodeError as e:
            raise StoreError(f"Could not decode {path}: {e}") from e

        logger.info(f"Fetched rule tree {ref.property_id} v{ref.property_version} from {path}")
        return tree

    def save(self, tree: RuleTree) -> Tuple[RuleTree, List[ValidationIssue]]:
        ref = tree.ref()
        issues = list(self._validator(tree)) if self._validator else []

        saved = tree.model_copy(deep=True)
        saved.errors = [issue.model_copy() for issue in issues]
        saved.warnings = []
        saved.etag = compute_etag(saved)

        path = self.path_for(ref)
        try:
            path.write_bytes(self.codec.encode(saved))
        except OSError as e:
            raise StoreError(f"Could not write {path}: {e}") from e

        if issues:
            logger.warning(
                f"Saved rule tree {ref.property_id} v{ref.property_version} "
                f"with {len(issues)} validation issue(s)"
            )
        else:
            logger.info(f"Saved rule tree {ref.property_id} v{ref.property_version} to {path}")
        return saved, issues

    def digest(self, ref: PropertyRef) -> Optional[str]:
        """Return the etag of the stored document, or None if there is none."""
        if not self.path_for(ref).exists():
            return None
        return self.fetch(ref).etag
