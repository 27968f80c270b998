#!/usr/bin/env python3
"""
Rule Tree Codec Interface

Protocol for converting RuleTrees to and from bytes.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..models import RuleTree


class Codec(Protocol):
    """
    Protocol for codecs that serialize RuleTrees.

    Stores use a codec to persist trees; the engine itself never does I/O.
    """

    def encode(self, tree: RuleTree) -> bytes:
        """
        Encode a RuleTree to bytes.

        Args:
            tree: The RuleTree to encode

        Returns:
            Serialized bytes representation
        """
        ...

    def decode(self, data: bytes | str) -> RuleTree:
        """
        Decode bytes into a RuleTree.

        Raises:
            RuleTreeDecodeError: If the data is not a valid rule tree document
        """
        ...

    def content_type(self, tree: Optional[RuleTree] = None) -> str:
        """
        Return the MIME content type for this encoding.

        Returns:
            Content type string (e.g., "application/json")
        """
        ...
