"""
Extractors package: one strategy per source kind.
"""

from .markup_extractor import MarkupExtractor
from .pattern_extractor import FAMILY_BY_KIND, PATTERN_FAMILIES, PatternExtractor, PatternFamily

__all__ = [
    'MarkupExtractor',
    'PatternExtractor',
    'PatternFamily',
    'PATTERN_FAMILIES',
    'FAMILY_BY_KIND',
]
