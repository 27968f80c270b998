#!/usr/bin/env python3
"""
Rule Tree Codecs

Codecs for serializing rule trees to and from their wire format.
"""

from .base import Codec
from .json import JSONCodec

__all__ = ['Codec', 'JSONCodec']
