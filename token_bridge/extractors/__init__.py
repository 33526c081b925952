"""Extractors for reading design tokens from source formats.

This package provides extractors for:
- Tailwind CSS config (tailwind.py)
- CSS custom properties (css_vars.py)
- Figma variables exports (figma.py)
- DTCG token JSON (dtcg.py)
"""

from .base import ExtractorRegistry, TokenExtractor, get_default_registry
from .css_vars import CSSVariablesExtractor
from .dtcg import DTCGExtractor
from .figma import FigmaVariablesExtractor
from .tailwind import TailwindConfigExtractor

__all__ = [
    "TokenExtractor",
    "ExtractorRegistry",
    "get_default_registry",
    "TailwindConfigExtractor",
    "CSSVariablesExtractor",
    "FigmaVariablesExtractor",
    "DTCGExtractor",
]
