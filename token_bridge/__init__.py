"""Design token bridge between design tools and platform themes.

This package reads design tokens from design-tool formats and writes
platform-native theme sources.

Main components:
- tokens: Canonical token model (ColorToken, TypographyToken, TokenSet, ...)
- schema: Validation of untrusted token JSON
- extractors: Tailwind, CSS custom properties, Figma variables, DTCG
- generators: Material 3, SwiftUI, Tailwind config, CSS custom properties
- contrast: WCAG contrast checks
- operations: The nine operations and their tool registry
- server: JSON-RPC transport over stdio
"""

__version__ = "1.0.0"

from .contrast import ContrastReport, ContrastResult, validate_contrast
from .errors import (
    BridgeError,
    ConfigurationError,
    ErrorCategory,
    ExtractionError,
    TokenValidationError,
    UnresolvedReferenceError,
)
from .operations import TOOLS, TokenBridge, call_tool
from .schema import ValidationResult, parse_tokens_from_string, validate_tokens
from .tokens import (
    ColorCategory,
    ColorToken,
    ElevationToken,
    MotionToken,
    ShadowOffset,
    TokenSet,
    TypographyToken,
)

__all__ = [
    "__version__",
    "BridgeError",
    "ColorCategory",
    "ColorToken",
    "ConfigurationError",
    "ContrastReport",
    "ContrastResult",
    "ElevationToken",
    "ErrorCategory",
    "ExtractionError",
    "MotionToken",
    "ShadowOffset",
    "TOOLS",
    "TokenBridge",
    "TokenSet",
    "TokenValidationError",
    "TypographyToken",
    "UnresolvedReferenceError",
    "ValidationResult",
    "call_tool",
    "parse_tokens_from_string",
    "validate_contrast",
    "validate_tokens",
]
