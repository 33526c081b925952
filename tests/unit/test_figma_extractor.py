"""Unit tests for the Figma variables extractor."""

import json
import logging
import re
from pathlib import Path

import pytest

from token_bridge.errors import ErrorCategory, ExtractionError
from token_bridge.extractors.figma import (
    EMPTY_MESSAGE,
    INVALID_JSON_MESSAGE,
    NO_VARIABLES_MESSAGE,
    FigmaVariablesExtractor,
    alias_target,
    infer_color_category,
    normalize_variable_name,
)
from token_bridge.tokens import ColorCategory

DEFAULT_COLLECTIONS = {
    "collection:1": {
        "id": "collection:1",
        "name": "Design System",
        "modes": [{"modeId": "mode:1", "name": "Light"}],
        "defaultModeId": "mode:1",
    }
}


def make_export(variables: dict, collections: dict | None = None) -> str:
    """Build a variables export JSON string."""
    return json.dumps(
        {
            "variables": variables,
            "variableCollections": DEFAULT_COLLECTIONS if collections is None else collections,
        }
    )


def color_variable(var_id: str, name: str, value: dict, **extra) -> dict:
    """A COLOR variable in mode:1."""
    return {
        "id": var_id,
        "name": name,
        "resolvedType": "COLOR",
        "valuesByMode": {"mode:1": value},
        **extra,
    }


def alias(var_id: str) -> dict:
    return {"type": "VARIABLE_ALIAS", "id": var_id}


@pytest.fixture
def extractor() -> FigmaVariablesExtractor:
    """Create a Figma extractor."""
    return FigmaVariablesExtractor()


class TestHelpers:
    """Tests for name and value helpers."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Colors/Primary", "primary"),
            ("Colors/Primary Container", "primary-container"),
            ("Colors/onSurface", "on-surface"),
            ("Spacing/xs", "xs"),
        ],
    )
    def test_normalize_variable_name(self, raw, expected):
        """Only the last path segment is kept, kebab-cased."""
        assert normalize_variable_name(raw) == expected

    def test_infer_color_category(self):
        """Keywords in the name pick a category."""
        assert infer_color_category("Colors/Primary") == ColorCategory.PRIMARY
        assert infer_color_category("Palette/Grey 100") == ColorCategory.NEUTRAL
        assert infer_color_category("Colors/Danger") == ColorCategory.ERROR
        assert infer_color_category("Colors/Brand") is None

    def test_alias_target(self):
        """Only VARIABLE_ALIAS objects are aliases."""
        assert alias_target(alias("var:1")) == "var:1"
        assert alias_target({"r": 0, "g": 0, "b": 0}) is None
        assert alias_target(4) is None


class TestFigmaExtraction:
    """Tests for FigmaVariablesExtractor.extract."""

    def test_colors(self, extractor):
        """COLOR variables become uppercase hex colors."""
        tokens = extractor.extract(
            make_export(
                {
                    "var:1": color_variable("var:1", "Colors/Primary", {"r": 0.404, "g": 0.314, "b": 0.643, "a": 1}),
                    "var:2": color_variable("var:2", "Colors/Surface", {"r": 0.996, "g": 0.969, "b": 1, "a": 1}),
                }
            )
        )
        assert re.match(r"^#[0-9A-F]{6}$", tokens.colors["primary"].value)
        assert tokens.colors["surface"].value == "#FEF7FF"

    def test_float_spacing_and_radii(self, extractor):
        """FLOAT variables split into spacing and radii by name."""
        tokens = extractor.extract(
            make_export(
                {
                    "var:1": {"id": "var:1", "name": "Spacing/xs", "resolvedType": "FLOAT", "valuesByMode": {"mode:1": 4}},
                    "var:2": {"id": "var:2", "name": "Spacing/md", "resolvedType": "FLOAT", "valuesByMode": {"mode:1": 16}},
                    "var:3": {"id": "var:3", "name": "Corner Radius/sm", "resolvedType": "FLOAT", "valuesByMode": {"mode:1": 8}},
                }
            )
        )
        assert tokens.spacing == {"xs": 4, "md": 16}
        assert tokens.radii == {"sm": 8}

    def test_alias_resolution(self, extractor):
        """Aliases resolve through the variable graph."""
        tokens = extractor.extract(
            make_export(
                {
                    "var:1": color_variable("var:1", "Primitives/Blue500", {"r": 0, "g": 0, "b": 1, "a": 1}),
                    "var:2": color_variable("var:2", "Colors/Primary", alias("var:1")),
                }
            )
        )
        assert tokens.colors["primary"].value == "#0000FF"
        assert tokens.colors["blue500"].value == "#0000FF"

    def test_unresolvable_alias_is_skipped(self, extractor, caplog):
        """Cycles and missing targets are logged and skipped."""
        with caplog.at_level(logging.WARNING):
            tokens = extractor.extract(
                make_export(
                    {
                        "var:1": color_variable("var:1", "Colors/Loop A", alias("var:2")),
                        "var:2": color_variable("var:2", "Colors/Loop B", alias("var:1")),
                        "var:3": color_variable("var:3", "Colors/Dangling", alias("var:99")),
                        "var:4": color_variable("var:4", "Colors/Ok", {"r": 1, "g": 1, "b": 1}),
                    }
                )
            )
        assert list(tokens.colors) == ["ok"]
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "cycle" in messages
        assert "missing" in messages

    def test_alias_depth_limit(self):
        """Chains longer than the limit are skipped."""
        variables = {
            f"var:{i}": color_variable(f"var:{i}", f"Colors/Step {i}", alias(f"var:{i + 1}"))
            for i in range(3)
        }
        variables["var:3"] = color_variable("var:3", "Colors/Base", {"r": 0, "g": 0, "b": 0})
        tokens = FigmaVariablesExtractor(max_alias_depth=2).extract(make_export(variables))
        assert "step-0" not in tokens.colors
        assert tokens.colors["step-1"].value == "#000000"

    def test_categories_and_descriptions(self, extractor):
        """Categories are inferred and descriptions kept."""
        tokens = extractor.extract(
            make_export(
                {
                    "var:1": color_variable("var:1", "Colors/Primary", {"r": 1, "g": 0, "b": 0}, description="Main brand color"),
                    "var:2": color_variable("var:2", "Colors/Error", {"r": 1, "g": 0, "b": 0}),
                }
            )
        )
        assert tokens.colors["primary"].category == ColorCategory.PRIMARY
        assert tokens.colors["primary"].description == "Main brand color"
        assert tokens.colors["error"].category == ColorCategory.ERROR
        assert tokens.colors["error"].description is None

    def test_meta_wrapped(self, extractor):
        """Exports wrapped in meta are read."""
        content = json.dumps(
            {
                "meta": {
                    "variables": {
                        "var:1": color_variable("var:1", "Colors/Brand", {"r": 0.5, "g": 0.5, "b": 0.5}),
                    },
                    "variableCollections": {},
                }
            }
        )
        assert extractor.extract(content).colors["brand"].value == "#808080"

    def test_collection_default_mode(self, extractor):
        """The variable's own collection picks the mode."""
        collections = {
            "c:1": {"id": "c:1", "defaultModeId": "light"},
            "c:2": {"id": "c:2", "defaultModeId": "dark"},
        }
        variable = {
            "id": "v:1",
            "name": "Colors/Surface",
            "resolvedType": "COLOR",
            "variableCollectionId": "c:2",
            "valuesByMode": {
                "light": {"r": 1, "g": 1, "b": 1},
                "dark": {"r": 0, "g": 0, "b": 0},
            },
        }
        tokens = extractor.extract(make_export({"v:1": variable}, collections))
        assert tokens.colors["surface"].value == "#000000"

    def test_string_and_boolean_skipped(self, extractor):
        """Types without a canonical counterpart produce no tokens."""
        content = make_export(
            {
                "v:1": {"id": "v:1", "name": "Flags/Beta", "resolvedType": "BOOLEAN", "valuesByMode": {"mode:1": True}},
                "v:2": {"id": "v:2", "name": "Copy/Title", "resolvedType": "STRING", "valuesByMode": {"mode:1": "Hi"}},
            }
        )
        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract(content)
        assert exc_info.value.message == EMPTY_MESSAGE
        assert exc_info.value.category == ErrorCategory.INPUT_EMPTY

    def test_invalid_json(self, extractor):
        """Unparseable text is malformed."""
        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract("{bad}")
        assert exc_info.value.message == INVALID_JSON_MESSAGE

    def test_no_variables(self, extractor):
        """An export with no variables is malformed."""
        with pytest.raises(ExtractionError, match="No variables found") as exc_info:
            extractor.extract(json.dumps({"variables": {}}))
        assert exc_info.value.message == NO_VARIABLES_MESSAGE
        assert exc_info.value.category == ErrorCategory.INPUT_MALFORMED

    def test_can_handle(self, extractor):
        """JSON files named for Figma or variables are claimed."""
        assert extractor.can_handle(Path("figma-variables.json"))
        assert extractor.can_handle(Path("variables.json"))
        assert not extractor.can_handle(Path("package.json"))
