"""W3C Design Tokens Community Group (DTCG) token extractor.

DTCG files are nested groups whose leaves carry $value (plus optional
$type and $description). $type set on a group applies to everything
below it. Aliases are strings of the form "{path.to.token}".
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from ..bridge_logging import LogCategory, get_category_logger
from ..errors import ExtractionError, UnresolvedReferenceError
from ..normalizers.color import css_color_to_hex, is_hex_like, normalize_hex, rgb_to_hex
from ..normalizers.length import format_number, parse_duration, parse_to_pixels
from ..normalizers.shadow import parse_shadow
from ..resolution import DEFAULT_MAX_DEPTH, AliasResolver, Resolution, ResolutionStatus
from ..tokens import ColorToken, ElevationToken, MotionToken, ShadowOffset, TokenSet, TypographyToken
from .base import TokenExtractor

logger = get_category_logger(LogCategory.EXTRACT)

DEFAULT_FONT_SIZE_PX = 16.0
DEFAULT_DURATION_MS = 300.0
DEFAULT_EASING = "ease"

ALIAS_PATTERN = re.compile(r"^\{([^{}]+)\}$")
_DIMENSION_VALUE = re.compile(r"^\d+(?:\.\d+)?(?:px|rem|em)$")
_DURATION_VALUE = re.compile(r"^\d+(?:\.\d+)?ms$")

FONT_WEIGHT_NAMES = {
    "thin": 100,
    "hairline": 100,
    "extralight": 200,
    "ultralight": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "book": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
    "extrablack": 950,
    "ultrablack": 950,
}

INVALID_JSON_MESSAGE = "Invalid JSON: could not parse DTCG token file."
NO_TOKENS_MESSAGE = "No DTCG tokens found (no objects with $value)."
EMPTY_MESSAGE = "DTCG tokens found but none could be mapped to design tokens."


@dataclass(frozen=True)
class FlatToken:
    """A DTCG token with its group type already applied."""

    path: str
    value: Any
    type: str | None = None
    description: str | None = None

    @property
    def name(self) -> str:
        return self.path.split(".")[-1]


def flatten_tokens(
    node: dict[str, Any],
    path: tuple[str, ...] = (),
    inherited_type: str | None = None,
) -> dict[str, FlatToken]:
    """Flatten a DTCG tree into dot-joined paths.

    Keys starting with "$" are metadata and are never treated as groups.
    """
    group_type = node.get("$type") if isinstance(node.get("$type"), str) else inherited_type
    result: dict[str, FlatToken] = {}

    for key, value in node.items():
        if key.startswith("$") or not isinstance(value, dict):
            continue
        child_path = (*path, key)
        if "$value" in value:
            token_type = value.get("$type")
            description = value.get("$description")
            dotted = ".".join(child_path)
            result[dotted] = FlatToken(
                path=dotted,
                value=value["$value"],
                type=token_type if isinstance(token_type, str) else group_type,
                description=description if isinstance(description, str) else None,
            )
        else:
            result.update(flatten_tokens(value, child_path, group_type))

    return result


def alias_path(value: Any) -> str | None:
    """Token path referenced by an alias string, else None."""
    if isinstance(value, str):
        match = ALIAS_PATTERN.match(value.strip())
        if match:
            return match.group(1)
    return None


def infer_type(value: Any) -> str | None:
    """Guess a token type from its (resolved) value."""
    if isinstance(value, str):
        if is_hex_like(value) or re.match(r"^(rgba?|hsla?)\(", value):
            return "color"
        if _DIMENSION_VALUE.match(value):
            return "dimension"
        if _DURATION_VALUE.match(value):
            return "duration"
    if isinstance(value, dict) and "color" in value and "offsetX" in value:
        return "shadow"
    return None


def parse_dimension(value: Any) -> float | None:
    """Dimension in px from a string, a number, or a {value, unit} object."""
    if isinstance(value, dict) and "value" in value:
        unit = value.get("unit", "px")
        return parse_to_pixels(f"{value['value']}{unit}")
    return parse_to_pixels(value)


def parse_duration_value(value: Any) -> float | None:
    """Duration in ms from a string, a number, or a {value, unit} object."""
    if isinstance(value, dict) and "value" in value:
        return parse_duration(f"{value['value']}{value.get('unit', 'ms')}")
    return parse_duration(value)


def parse_font_weight(value: Any) -> int | None:
    """Numeric font weight from a number or a named weight ("semi-bold")."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
        return FONT_WEIGHT_NAMES.get(re.sub(r"[\s_-]", "", stripped.lower()))
    return None


def parse_color(value: Any) -> str | None:
    """Hex from a hex/rgb()/hsl() string or a DTCG color object."""
    if isinstance(value, str):
        if is_hex_like(value):
            normalized = normalize_hex(value)
            return normalized if len(normalized) in (7, 9) else None
        return css_color_to_hex(value)
    if isinstance(value, dict):
        if isinstance(value.get("hex"), str):
            return parse_color(value["hex"])
        components = value.get("components")
        if isinstance(components, list) and len(components) >= 3:
            r, g, b = (float(c) * 255 for c in components[:3])
            return rgb_to_hex(r, g, b)
    return None


def parse_cubic_bezier(value: Any) -> str | None:
    if isinstance(value, list) and len(value) == 4:
        if all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value):
            return f"cubic-bezier({', '.join(format_number(v) for v in value)})"
    return None


def _line_height(value: Any, font_size: float) -> float | None:
    """Line height in px; unitless numbers multiply the font size."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) * font_size
    if isinstance(value, str) and re.match(r"^\d+(?:\.\d+)?$", value.strip()):
        return float(value) * font_size
    return parse_dimension(value)


def parse_elevation(value: Any) -> ElevationToken | None:
    """Elevation from a shadow composite, a list of layers, or a string."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, str):
        return parse_shadow(value)
    if not isinstance(value, dict):
        return None

    color = parse_color(value.get("color")) if "color" in value else None
    return ElevationToken(
        shadow_color=color or "#000000",
        shadow_offset=ShadowOffset(
            x=parse_dimension(value.get("offsetX")) or 0.0,
            y=parse_dimension(value.get("offsetY")) or 0.0,
        ),
        shadow_radius=parse_dimension(value.get("blur")) or 0.0,
        shadow_opacity=1.0,
    )


class DTCGExtractor(TokenExtractor):
    """Extractor for DTCG token JSON.

    Handles color, dimension, typography (composite or standalone
    fontSize/fontWeight/fontFamily tokens), shadow, duration,
    cubicBezier and transition tokens. Dimensions whose path mentions
    "radius" or "corner" become radii; all other dimensions are spacing.

    Args:
        max_alias_depth: Hop limit when following aliases.
    """

    def __init__(self, max_alias_depth: int = DEFAULT_MAX_DEPTH):
        self.max_alias_depth = max_alias_depth

    @property
    def format_name(self) -> str:
        return "dtcg"

    @property
    def supported_extensions(self) -> list[str]:
        return [".json", ".tokens"]

    def extract(self, content: str) -> TokenSet:
        try:
            data = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            raise ExtractionError.malformed(self.format_name, INVALID_JSON_MESSAGE) from e

        flat = flatten_tokens(data) if isinstance(data, dict) else {}
        if not flat:
            raise ExtractionError.malformed(
                self.format_name,
                NO_TOKENS_MESSAGE,
                suggestion="Each token must be an object with a $value field",
            )

        resolver = AliasResolver(
            flat, alias_path, lambda token: token.value, self.max_alias_depth
        )

        colors: dict[str, ColorToken] = {}
        typography: dict[str, dict[str, Any]] = {}
        spacing: dict[str, float] = {}
        radii: dict[str, float] = {}
        elevation: dict[str, ElevationToken] = {}
        motion: dict[str, dict[str, Any]] = {}

        for path, token in flat.items():
            resolution = resolver.resolve(token.value, origin=path)
            if not resolution.is_resolved:
                self._warn_unresolved(path, resolution)
                continue
            try:
                value = self._resolve_members(
                    resolver, path, resolution.value, frozenset(resolution.trail)
                )
            except UnresolvedReferenceError as e:
                logger.warning(str(e), extra={"source_format": self.format_name})
                continue
            token_type = token.type or infer_type(value)
            name = token.name

            if token_type == "color":
                hex_value = parse_color(value)
                if hex_value:
                    colors[name] = ColorToken(value=hex_value, description=token.description)

            elif token_type == "dimension":
                px = parse_dimension(value)
                if px is not None:
                    lowered = path.lower()
                    if "radius" in lowered or "corner" in lowered:
                        radii[name] = px
                    else:
                        spacing[name] = px

            elif token_type == "typography" and isinstance(value, dict):
                typography[name] = self._typography_composite(value)

            elif token_type == "fontSize":
                px = parse_dimension(value)
                if px is not None:
                    typography.setdefault(name, {})["font_size"] = px

            elif token_type == "fontWeight":
                weight = parse_font_weight(value)
                if weight is not None:
                    typography.setdefault(name, {})["font_weight"] = weight

            elif token_type == "fontFamily":
                family = value[0] if isinstance(value, list) and value else value
                if isinstance(family, str) and family:
                    typography.setdefault(name, {})["font_family"] = family

            elif token_type == "shadow":
                shadow = parse_elevation(value)
                if shadow is not None:
                    elevation[name] = shadow

            elif token_type == "duration":
                ms = parse_duration_value(value)
                if ms is not None:
                    motion.setdefault(name, {})["duration"] = ms

            elif token_type == "cubicBezier":
                easing = parse_cubic_bezier(value)
                if easing is not None:
                    motion.setdefault(name, {})["easing"] = easing

            elif token_type == "transition" and isinstance(value, dict):
                partial: dict[str, Any] = {}
                ms = parse_duration_value(value.get("duration"))
                if ms is not None:
                    partial["duration"] = ms
                timing = value.get("timingFunction")
                easing = parse_cubic_bezier(timing) or (
                    timing if isinstance(timing, str) and timing else None
                )
                if easing is not None:
                    partial["easing"] = easing
                if partial:
                    motion.setdefault(name, {}).update(partial)

        tokens = TokenSet.from_collections(
            colors=colors,
            typography={n: self._build_typography(p) for n, p in typography.items()},
            spacing=spacing,
            radii=radii,
            elevation=elevation,
            motion={
                n: MotionToken(
                    duration=p.get("duration", DEFAULT_DURATION_MS),
                    easing=p.get("easing", DEFAULT_EASING),
                )
                for n, p in motion.items()
            },
        )
        return self._finish(tokens, EMPTY_MESSAGE)

    def _resolve_members(
        self,
        resolver: AliasResolver,
        path: str,
        value: Any,
        chain: frozenset[str] = frozenset(),
    ) -> Any:
        """Resolve aliases nested inside composite values.

        chain holds the keys already followed to reach value. A member
        alias that loops back into it, or runs past the hop limit,
        raises UnresolvedReferenceError. A missing target is only
        logged and the member keeps its alias text.
        """
        if isinstance(value, dict):
            return {k: self._resolve_member(resolver, path, v, chain) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_member(resolver, path, v, chain) for v in value]
        return value

    def _resolve_member(
        self, resolver: AliasResolver, path: str, value: Any, chain: frozenset[str]
    ) -> Any:
        resolution = resolver.resolve(value, origin=path, exclude=chain)
        if resolution.status in (ResolutionStatus.CYCLE, ResolutionStatus.DEPTH_EXCEEDED):
            raise UnresolvedReferenceError(
                path, resolution.unresolved_ref, resolution.status.value
            )
        if not resolution.is_resolved:
            self._warn_unresolved(path, resolution)
        return self._resolve_members(
            resolver, path, resolution.value, chain.union(resolution.trail)
        )

    def _warn_unresolved(self, path: str, resolution: Resolution) -> None:
        logger.warning(
            f"Could not resolve alias in token '{path}': "
            f"{resolution.status.value} at '{resolution.unresolved_ref}'",
            extra={"source_format": self.format_name},
        )

    def _typography_composite(self, value: dict[str, Any]) -> dict[str, Any]:
        font_size = parse_dimension(value.get("fontSize"))
        partial: dict[str, Any] = {
            "font_size": font_size if font_size is not None else DEFAULT_FONT_SIZE_PX
        }
        family = value.get("fontFamily")
        if isinstance(family, list):
            family = family[0] if family else None
        if family:
            partial["font_family"] = str(family)
        weight = parse_font_weight(value.get("fontWeight"))
        if weight is not None:
            partial["font_weight"] = weight
        if value.get("lineHeight") is not None:
            line_height = _line_height(value["lineHeight"], partial["font_size"])
            if line_height is not None:
                partial["line_height"] = line_height
        if value.get("letterSpacing") is not None:
            spacing = parse_dimension(value["letterSpacing"])
            if spacing is not None:
                partial["letter_spacing"] = spacing
        return partial

    def _build_typography(self, partial: dict[str, Any]) -> TypographyToken:
        return TypographyToken(
            font_size=partial.get("font_size", DEFAULT_FONT_SIZE_PX),
            font_family=partial.get("font_family"),
            line_height=partial.get("line_height"),
            font_weight=partial.get("font_weight"),
            letter_spacing=partial.get("letter_spacing"),
        )
