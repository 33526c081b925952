"""Generators for platform-native theme sources.

This package provides generators for:
- Jetpack Compose Material 3 (material3.py)
- SwiftUI (swiftui.py)
- Tailwind CSS config (tailwind.py)
- CSS custom properties (css_vars.py)
"""

from .base import ThemeGenerator
from .css_vars import CSSVariablesGenerator
from .material3 import Material3Config, Material3Generator
from .swiftui import SwiftUIConfig, SwiftUIGenerator
from .tailwind import TailwindConfigGenerator, TailwindConfigOptions

__all__ = [
    "ThemeGenerator",
    "CSSVariablesGenerator",
    "Material3Config",
    "Material3Generator",
    "SwiftUIConfig",
    "SwiftUIGenerator",
    "TailwindConfigGenerator",
    "TailwindConfigOptions",
]
