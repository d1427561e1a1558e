"""Utility functions for lcicodec.

This module provides encoded size calculation.
"""

from __future__ import annotations

from .sizing import HEADER_LENGTH, encoded_size, subelement_size, subelement_sizes

__all__ = [
    "HEADER_LENGTH",
    "encoded_size",
    "subelement_size",
    "subelement_sizes",
]
