#!/usr/bin/env python3
"""
Rule Tree Configuration

Global configuration for path addressing and serialization.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .codec import Codec


logger = logging.getLogger(__name__)


# ============================================================================
# Global Configuration
# ============================================================================

@dataclass
class EngineConfig:
    """
    Global configuration for the rule tree engine.

    Attributes:
        root_name: Conventional name of the root rule, also accepted as a
            leading path alias ("/default/...")
        separator: Path segment separator
        codec: Codec used by stores to (de)serialize trees
        json_indent: Indentation for the default JSON codec (None = compact)
    """
    root_name: str = "default"
    separator: str = "/"
    codec: Optional[Codec] = None
    json_indent: Optional[int] = None

    def __post_init__(self):
        """Validate the separator and set the default codec if not provided."""
        if not self.separator:
            raise ValueError("separator cannot be empty")
        if not self.root_name:
            raise ValueError("root_name cannot be empty")
        if self.codec is None:
            from .codec import JSONCodec
            self.codec = JSONCodec(indent=self.json_indent)


_config: Optional[EngineConfig] = None


def configure(
    root_name: str = "default",
    separator: str = "/",
    codec: Optional[Codec] = None,
    json_indent: Optional[int] = None,
) -> EngineConfig:
    """
    Configure the rule tree engine.

    This should be called once at application startup, before any trees
    are addressed. Calling it again replaces the whole configuration.

    Args:
        root_name: Name of the root rule (default: "default")
        separator: Path separator (default: "/")
        codec: Codec instance (defaults to JSONCodec)
        json_indent: Indentation for the default JSON codec

    Returns:
        The new active configuration

    Example:
        ```python
        from ruletree import configure

        configure(json_indent=2)
        ```
    """
    global _config

    _config = EngineConfig(
        root_name=root_name,
        separator=separator,
        codec=codec,
        json_indent=json_indent,
    )
    logger.debug(
        f"Configured rule tree engine: root_name={root_name!r} separator={separator!r}"
    )
    return _config


def get_config() -> EngineConfig:
    """Return the active configuration, creating the default one on first use."""
    global _config
    if _config is None:
        _config = EngineConfig()
    return _config


def reset_config() -> None:
    """Drop the active configuration so the next get_config() uses defaults."""
    global _config
    _config = None
