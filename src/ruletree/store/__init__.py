#!/usr/bin/env python3
"""
Rule Tree Stores

Persistence ports for fetching and saving whole rule trees.
"""

from .base import RuleTreeStore, Validator
from .memory import MemoryRuleTreeStore
from .file import FileRuleTreeStore

__all__ = [
    'RuleTreeStore',
    'Validator',
    'MemoryRuleTreeStore',
    'FileRuleTreeStore',
]
