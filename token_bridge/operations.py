"""The nine token-bridge operations and the tool registry.

TokenBridge holds the configuration and exposes one method per
operation. Extraction methods raise ExtractionError; generation and
contrast methods validate their token input first and return an
{"error", "details"} payload instead of raising when it is invalid.

TOOLS describes each operation for the transport and CLI: its wire
name, description and a pydantic model for its arguments.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .bridge_logging import get_logger
from .config import BridgeConfig
from .contrast import ContrastReport, validate_contrast
from .errors import BridgeError, ErrorCategory
from .extractors import (
    CSSVariablesExtractor,
    DTCGExtractor,
    FigmaVariablesExtractor,
    TailwindConfigExtractor,
)
from .generators import (
    CSSVariablesGenerator,
    Material3Config,
    Material3Generator,
    SwiftUIConfig,
    SwiftUIGenerator,
    TailwindConfigGenerator,
    TailwindConfigOptions,
)
from .schema import parse_tokens_from_string, sanitize_tokens
from .tokens import TokenSet

logger = get_logger()

ErrorPayload = dict[str, Any]


def error_payload(error: str, details: list[str]) -> ErrorPayload:
    """Validation failure payload returned instead of generated output."""
    return {"error": error, "details": list(details)}


class ToolArgumentError(BridgeError):
    """Arguments for a tool call are missing or have the wrong type."""

    def __init__(self, tool_name: str, problems: list[str]):
        super().__init__(
            category=ErrorCategory.INPUT_MALFORMED,
            message=f"Invalid arguments for {tool_name}: " + "; ".join(problems),
            details={"problems": list(problems)},
        )
        self.problems = list(problems)


class TokenBridge:
    """Entry point for extraction, generation and contrast checks.

    Args:
        config: Operation defaults; BridgeConfig() when omitted.
    """

    def __init__(self, config: BridgeConfig | None = None):
        self.config = config or BridgeConfig()

    # Extraction

    def extract_tokens_from_tailwind(self, config: str) -> TokenSet:
        """Extract tokens from tailwind.config.js/ts source."""
        return TailwindConfigExtractor().extract(config)

    def extract_tokens_from_css(self, css: str) -> TokenSet:
        """Extract tokens from CSS custom properties."""
        return CSSVariablesExtractor().extract(css)

    def extract_tokens_from_figma_variables(self, variables: str) -> TokenSet:
        """Extract tokens from a Figma variables export."""
        return FigmaVariablesExtractor(self.config.max_alias_depth).extract(variables)

    def extract_tokens_from_json(self, json_text: str) -> TokenSet:
        """Extract tokens from DTCG token JSON."""
        return DTCGExtractor(self.config.max_alias_depth).extract(json_text)

    # Generation

    def _load(self, tokens: str, label: str = "Invalid tokens") -> TokenSet | ErrorPayload:
        result = parse_tokens_from_string(tokens)
        if not result.valid or result.tokens is None:
            logger.debug(f"{label}: {len(result.errors)} violation(s)")
            return error_payload(label, result.errors)
        return sanitize_tokens(result.tokens)

    def generate_material3_theme(self, tokens: str) -> str | ErrorPayload:
        """Generate a Kotlin Compose Material 3 theme."""
        loaded = self._load(tokens)
        if isinstance(loaded, dict):
            return loaded
        generator = Material3Generator(Material3Config(package=self.config.kotlin_package))
        return generator.generate(loaded)

    def generate_swiftui_theme(
        self, tokens: str, liquid_glass: bool | None = None
    ) -> str | ErrorPayload:
        """Generate a SwiftUI theme, optionally with Liquid Glass helpers."""
        loaded = self._load(tokens)
        if isinstance(loaded, dict):
            return loaded
        if liquid_glass is None:
            liquid_glass = self.config.liquid_glass
        return SwiftUIGenerator(SwiftUIConfig(liquid_glass=liquid_glass)).generate(loaded)

    def generate_tailwind_config(
        self, tokens: str, format: Literal["esm", "cjs"] | None = None
    ) -> str | ErrorPayload:
        """Generate a tailwind.config.js in the esm or cjs dialect."""
        loaded = self._load(tokens)
        if isinstance(loaded, dict):
            return loaded
        options = TailwindConfigOptions(format=format or self.config.tailwind_format)
        return TailwindConfigGenerator(options).generate(loaded)

    def generate_css_variables(
        self, tokens: str, dark_tokens: str | None = None
    ) -> str | ErrorPayload:
        """Generate CSS custom properties, with dark mode blocks when given."""
        loaded = self._load(tokens)
        if isinstance(loaded, dict):
            return loaded
        dark = None
        if dark_tokens:
            dark = self._load(dark_tokens, "Invalid dark tokens")
            if isinstance(dark, dict):
                return dark
        return CSSVariablesGenerator(dark_tokens=dark).generate(loaded)

    # Contrast

    def validate_contrast(
        self, tokens: str, level: Literal["AA", "AAA"] | None = None
    ) -> ContrastReport | ErrorPayload:
        """Check WCAG contrast for the token set's color pairs."""
        loaded = self._load(tokens)
        if isinstance(loaded, dict):
            return loaded
        return validate_contrast(loaded, level or self.config.contrast_level)


# Tool argument models; field names are the wire names


class _Arguments(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TailwindArguments(_Arguments):
    config: str = Field(description="The contents of a tailwind.config.js or tailwind.config.ts file")


class CSSArguments(_Arguments):
    css: str = Field(description="The contents of a CSS file with custom properties")


class FigmaArguments(_Arguments):
    variables: str = Field(description="Figma Variables REST API JSON export as a string")


class DTCGArguments(_Arguments):
    json_text: str = Field(alias="json", description="W3C DTCG format JSON string")


class TokensArguments(_Arguments):
    tokens: str = Field(description="Universal design tokens JSON string")


class SwiftUIArguments(TokensArguments):
    liquidGlass: bool | None = Field(
        default=None, description="Include iOS 26+ Liquid Glass modifiers (default false)"
    )


class TailwindOutputArguments(TokensArguments):
    format: Literal["esm", "cjs"] | None = Field(
        default=None, description="Output format: ES modules or CommonJS (default esm)"
    )


class CSSOutputArguments(TokensArguments):
    darkTokens: str | None = Field(
        default=None, description="Optional dark mode universal design tokens JSON string"
    )


class ContrastArguments(TokensArguments):
    level: Literal["AA", "AAA"] | None = Field(
        default=None, description="WCAG compliance level to check (default AA)"
    )


@dataclass
class ToolResult:
    """Text result of a tool call."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}


@dataclass(frozen=True)
class ToolSpec:
    """Wire description of one operation."""

    name: str
    description: str
    arguments: type[_Arguments]
    handler: Callable[[TokenBridge, Any], Any]

    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema(by_alias=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


TOOLS: dict[str, ToolSpec] = {
    tool.name: tool
    for tool in [
        ToolSpec(
            "extract_tokens_from_tailwind",
            "Parse a Tailwind config and extract theme values into universal design tokens",
            TailwindArguments,
            lambda bridge, args: bridge.extract_tokens_from_tailwind(args.config),
        ),
        ToolSpec(
            "extract_tokens_from_css",
            "Parse CSS custom properties (variables) and extract design tokens",
            CSSArguments,
            lambda bridge, args: bridge.extract_tokens_from_css(args.css),
        ),
        ToolSpec(
            "extract_tokens_from_figma_variables",
            "Parse Figma variables export JSON and extract design tokens",
            FigmaArguments,
            lambda bridge, args: bridge.extract_tokens_from_figma_variables(args.variables),
        ),
        ToolSpec(
            "extract_tokens_from_json",
            "Parse W3C Design Tokens Community Group (DTCG) format JSON into universal tokens",
            DTCGArguments,
            lambda bridge, args: bridge.extract_tokens_from_json(args.json_text),
        ),
        ToolSpec(
            "generate_material3_theme",
            "Generate Kotlin Jetpack Compose Material 3 theme files from universal design tokens",
            TokensArguments,
            lambda bridge, args: bridge.generate_material3_theme(args.tokens),
        ),
        ToolSpec(
            "generate_swiftui_theme",
            "Generate SwiftUI theme files from universal design tokens, "
            "with optional Liquid Glass support",
            SwiftUIArguments,
            lambda bridge, args: bridge.generate_swiftui_theme(args.tokens, args.liquidGlass),
        ),
        ToolSpec(
            "generate_tailwind_config",
            "Generate a tailwind.config.js theme from universal design tokens",
            TailwindOutputArguments,
            lambda bridge, args: bridge.generate_tailwind_config(args.tokens, args.format),
        ),
        ToolSpec(
            "generate_css_variables",
            "Generate CSS custom properties from universal design tokens "
            "with light/dark mode support",
            CSSOutputArguments,
            lambda bridge, args: bridge.generate_css_variables(args.tokens, args.darkTokens),
        ),
        ToolSpec(
            "validate_contrast",
            "Check color combinations in design tokens for WCAG AA/AAA accessibility compliance",
            ContrastArguments,
            lambda bridge, args: bridge.validate_contrast(args.tokens, args.level),
        ),
    ]
}


def render_result(value: Any) -> str:
    """Render an operation's return value as tool text."""
    if isinstance(value, str):
        return value
    if isinstance(value, TokenSet):
        return json.dumps(value.to_dict(), indent=2)
    if isinstance(value, ContrastReport):
        return json.dumps(value.to_dict(), indent=2)
    return json.dumps(value)


def call_tool(bridge: TokenBridge, name: str, arguments: dict[str, Any] | None) -> ToolResult:
    """Run a tool by wire name.

    Validation failures of the token input come back as a normal
    result holding the {"error", "details"} payload. Extraction and
    other BridgeErrors come back with is_error set.

    Raises:
        KeyError: If no tool has the given name.
        ToolArgumentError: If the arguments don't match the tool.
    """
    tool = TOOLS.get(name)
    if tool is None:
        raise KeyError(name)

    try:
        args = tool.arguments.model_validate(arguments or {})
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc']) or '(root)'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ToolArgumentError(name, problems) from e

    try:
        value = tool.handler(bridge, args)
    except BridgeError as e:
        logger.debug(f"{name} failed: {e.message}", extra={"operation": name})
        return ToolResult(json.dumps({"error": e.message}), is_error=True)

    return ToolResult(render_result(value))
