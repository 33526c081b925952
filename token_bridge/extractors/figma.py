"""Figma variables export token extractor.

Reads the JSON returned by Figma's local variables endpoint (variables
and variableCollections, either at the top level or under "meta").
COLOR variables become colors; FLOAT variables become radii or spacing
depending on their name. STRING and BOOLEAN variables have no canonical
counterpart and are skipped.
"""

import json
import re
from pathlib import Path
from typing import Any

from ..bridge_logging import LogCategory, get_category_logger
from ..errors import ExtractionError
from ..normalizers.color import unit_color_to_hex
from ..resolution import DEFAULT_MAX_DEPTH, AliasResolver
from ..tokens import ColorCategory, ColorToken, TokenSet
from .base import TokenExtractor

logger = get_category_logger(LogCategory.EXTRACT)

ALIAS_TYPE = "VARIABLE_ALIAS"

# Checked in order against the full variable name
CATEGORY_KEYWORDS: list[tuple[ColorCategory, tuple[str, ...]]] = [
    (ColorCategory.PRIMARY, ("primary",)),
    (ColorCategory.SECONDARY, ("secondary",)),
    (ColorCategory.TERTIARY, ("tertiary",)),
    (ColorCategory.NEUTRAL, ("neutral", "gray", "grey")),
    (ColorCategory.ERROR, ("error", "danger", "destructive")),
    (ColorCategory.SURFACE, ("surface",)),
    (ColorCategory.BACKGROUND, ("background", "bg")),
]

INVALID_JSON_MESSAGE = "Invalid JSON: could not parse Figma variables export."
NO_VARIABLES_MESSAGE = "No variables found in the Figma export."
EMPTY_MESSAGE = "Figma variables found but none could be mapped to design tokens."


def normalize_variable_name(name: str) -> str:
    """Turn a variable path into a token name.

    >>> normalize_variable_name("Colors/Primary Container")
    'primary-container'
    >>> normalize_variable_name("Colors/onSurface")
    'on-surface'
    """
    last = name.split("/")[-1]
    last = re.sub(r"\s+", "-", last.strip())
    last = re.sub(r"([a-z])([A-Z])", r"\1-\2", last)
    return last.lower()


def infer_color_category(name: str) -> ColorCategory | None:
    """Guess a color's semantic role from keywords in its name."""
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return None


def alias_target(value: Any) -> str | None:
    """Variable id referenced by an alias value, else None."""
    if isinstance(value, dict) and value.get("type") == ALIAS_TYPE:
        target = value.get("id")
        return str(target) if target is not None else None
    return None


def is_color_value(value: Any) -> bool:
    return isinstance(value, dict) and all(channel in value for channel in ("r", "g", "b"))


def _first_mode_value(variable: dict[str, Any]) -> Any:
    values = variable.get("valuesByMode") or {}
    return next(iter(values.values()), None)


class FigmaVariablesExtractor(TokenExtractor):
    """Extractor for Figma variable-graph exports.

    Each variable is read in its collection's default mode. Aliases are
    followed through the variable graph in the same mode; a chain that
    dead-ends (missing target, cycle, hop limit) is logged and the
    variable is skipped.

    Args:
        max_alias_depth: Hop limit when following aliases.
    """

    def __init__(self, max_alias_depth: int = DEFAULT_MAX_DEPTH):
        self.max_alias_depth = max_alias_depth

    @property
    def format_name(self) -> str:
        return "figma"

    @property
    def supported_extensions(self) -> list[str]:
        return [".json"]

    def can_handle(self, file_path: Path) -> bool:
        if file_path.suffix.lower() not in self.supported_extensions:
            return False
        stem = file_path.stem.lower()
        return "figma" in stem or "variables" in stem

    def extract(self, content: str) -> TokenSet:
        try:
            data = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            raise ExtractionError.malformed(self.format_name, INVALID_JSON_MESSAGE) from e

        if not isinstance(data, dict):
            raise ExtractionError.malformed(self.format_name, NO_VARIABLES_MESSAGE)

        meta = data.get("meta") if isinstance(data.get("meta"), dict) else {}
        variables = data.get("variables") or meta.get("variables") or {}
        collections = data.get("variableCollections") or meta.get("variableCollections") or {}

        if not isinstance(variables, dict) or not variables:
            raise ExtractionError.malformed(
                self.format_name,
                NO_VARIABLES_MESSAGE,
                suggestion="Export local variables (GET /v1/files/:key/variables/local)",
            )
        if not isinstance(collections, dict):
            collections = {}

        # Index by the map key and by each variable's own id
        nodes: dict[str, dict[str, Any]] = {}
        for key, variable in variables.items():
            if isinstance(variable, dict):
                nodes[str(key)] = variable
                if variable.get("id") is not None:
                    nodes.setdefault(str(variable["id"]), variable)

        fallback_mode = next(
            (
                c.get("defaultModeId")
                for c in collections.values()
                if isinstance(c, dict) and c.get("defaultModeId")
            ),
            None,
        )

        colors: dict[str, ColorToken] = {}
        spacing: dict[str, float] = {}
        radii: dict[str, float] = {}

        for key, variable in variables.items():
            if not isinstance(variable, dict):
                continue
            raw_name = str(variable.get("name", key))
            value = self._resolve(variable, str(key), nodes, collections, fallback_mode)
            if value is None:
                continue

            name = normalize_variable_name(raw_name)
            resolved_type = variable.get("resolvedType")

            if resolved_type == "COLOR" and is_color_value(value):
                colors[name] = ColorToken(
                    value=unit_color_to_hex(value),
                    description=variable.get("description") or None,
                    category=infer_color_category(raw_name),
                )
            elif (
                resolved_type == "FLOAT"
                and isinstance(value, (int, float))
                and not isinstance(value, bool)
            ):
                lowered = raw_name.lower()
                if "radius" in lowered or "corner" in lowered:
                    radii[name] = float(value)
                else:
                    spacing[name] = float(value)

        tokens = TokenSet.from_collections(colors=colors, spacing=spacing, radii=radii)
        return self._finish(tokens, EMPTY_MESSAGE)

    def _mode_for(
        self,
        variable: dict[str, Any],
        collections: dict[str, Any],
        fallback_mode: str | None,
    ) -> str | None:
        values = variable.get("valuesByMode") or {}
        collection = collections.get(str(variable.get("variableCollectionId")))
        candidates = [
            collection.get("defaultModeId") if isinstance(collection, dict) else None,
            fallback_mode,
        ]
        for mode in candidates:
            if mode is not None and mode in values:
                return mode
        return next(iter(values), None)

    def _resolve(
        self,
        variable: dict[str, Any],
        key: str,
        nodes: dict[str, dict[str, Any]],
        collections: dict[str, Any],
        fallback_mode: str | None,
    ) -> Any:
        mode = self._mode_for(variable, collections, fallback_mode)
        if mode is None:
            return None

        def value_in_mode(target: dict[str, Any]) -> Any:
            values = target.get("valuesByMode") or {}
            if mode in values:
                return values[mode]
            return _first_mode_value(target)

        resolver = AliasResolver(nodes, alias_target, value_in_mode, self.max_alias_depth)
        resolution = resolver.resolve(variable["valuesByMode"][mode], origin=key)
        if not resolution.is_resolved:
            logger.warning(
                f"Could not resolve alias for variable '{variable.get('name', key)}': "
                f"{resolution.status.value} at '{resolution.unresolved_ref}'",
                extra={"source_format": self.format_name},
            )
            return None
        return resolution.value
