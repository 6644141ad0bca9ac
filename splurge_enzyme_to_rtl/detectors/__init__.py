"""Syntax-tree based detection of enzyme test files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .enzyme_detector import EnzymeFileDetector

__all__ = ["EnzymeFileDetector"]
