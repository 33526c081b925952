"""Canonical token schema validation and sanitization.

validate_tokens() checks an arbitrary structure (usually parsed JSON)
against the canonical schema and reports every violation in one pass as
"path: message" strings. sanitize_tokens() normalizes an already-valid
set: hex colors are uppercased and widened, shadow opacity is clamped.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)

from .bridge_logging import LogCategory, get_category_logger
from .normalizers.color import is_valid_hex, normalize_hex
from .tokens import ColorCategory, TokenSet

logger = get_category_logger(LogCategory.VALIDATE)

HEX_MESSAGE = "Must be a valid hex color (#RGB, #RRGGBB, or #RRGGBBAA)"
EMPTY_MESSAGE = "Token object must contain at least one token category"

FONT_WEIGHT_MIN = 1
FONT_WEIGHT_MAX = 1000


_JSON_TYPES = {bool: "boolean", str: "string", list: "array", dict: "object", type(None): "null"}


def _number(value: Any) -> Any:
    # No coercion: "16" and true are violations, not 16 and 1
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        received = _JSON_TYPES.get(type(value), type(value).__name__)
        raise ValueError(f"Expected number, received {received}")
    return value


def _hex_color(value: str) -> str:
    if not is_valid_hex(value):
        raise ValueError(HEX_MESSAGE)
    return value


def _non_negative(label: str):
    def check(value: float) -> float:
        if value < 0:
            raise ValueError(f"{label} cannot be negative")
        return value

    return check


HexColor = Annotated[str, AfterValidator(_hex_color)]
Number = Annotated[float, BeforeValidator(_number)]
WholeNumber = Annotated[int, BeforeValidator(_number)]
SpacingValue = Annotated[Number, AfterValidator(_non_negative("spacing"))]
RadiusValue = Annotated[Number, AfterValidator(_non_negative("radii"))]


class ColorTokenSchema(BaseModel):
    """Schema for a color token."""

    value: HexColor
    description: str | None = None
    category: ColorCategory | None = None


class TypographyTokenSchema(BaseModel):
    """Schema for a typography token."""

    fontFamily: str | None = None
    fontSize: Number
    lineHeight: Number | None = None
    fontWeight: WholeNumber | None = None
    letterSpacing: Number | None = None

    @field_validator("fontSize")
    @classmethod
    def font_size_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("fontSize must be positive")
        return value

    @field_validator("lineHeight")
    @classmethod
    def line_height_positive(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("lineHeight must be positive")
        return value

    @field_validator("fontWeight")
    @classmethod
    def font_weight_range(cls, value: int | None) -> int | None:
        # CSS Fonts Level 4 range, any integer step
        if value is None:
            return value
        if value < FONT_WEIGHT_MIN:
            raise ValueError(f"fontWeight minimum is {FONT_WEIGHT_MIN}")
        if value > FONT_WEIGHT_MAX:
            raise ValueError(f"fontWeight maximum is {FONT_WEIGHT_MAX}")
        return value


class ShadowOffsetSchema(BaseModel):
    """Schema for a shadow offset."""

    x: Number
    y: Number


class ElevationTokenSchema(BaseModel):
    """Schema for an elevation token."""

    shadowColor: HexColor
    shadowOffset: ShadowOffsetSchema
    shadowRadius: Number
    shadowOpacity: Number

    @field_validator("shadowRadius")
    @classmethod
    def radius_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("shadowRadius cannot be negative")
        return value

    @field_validator("shadowOpacity")
    @classmethod
    def opacity_range(cls, value: float) -> float:
        if value < 0:
            raise ValueError("shadowOpacity minimum is 0")
        if value > 1:
            raise ValueError("shadowOpacity maximum is 1")
        return value


class MotionTokenSchema(BaseModel):
    """Schema for a motion token."""

    duration: Number
    easing: str

    @field_validator("duration")
    @classmethod
    def duration_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("duration must be positive")
        return value

    @field_validator("easing")
    @classmethod
    def easing_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("easing cannot be empty")
        return value


class DesignTokensSchema(BaseModel):
    """Schema for the canonical token set."""

    model_config = ConfigDict(extra="ignore")

    colors: dict[str, ColorTokenSchema] | None = None
    typography: dict[str, TypographyTokenSchema] | None = None
    spacing: dict[str, SpacingValue] | None = None
    radii: dict[str, RadiusValue] | None = None
    elevation: dict[str, ElevationTokenSchema] | None = None
    motion: dict[str, MotionTokenSchema] | None = None

    @model_validator(mode="after")
    def at_least_one_collection(self) -> "DesignTokensSchema":
        if all(
            getattr(self, name) is None
            for name in ("colors", "typography", "spacing", "radii", "elevation", "motion")
        ):
            raise ValueError(EMPTY_MESSAGE)
        return self


@dataclass
class ValidationResult:
    """Result of token validation.

    Exactly one of tokens (valid) or errors (invalid) is meaningful.
    """

    valid: bool
    tokens: TokenSet | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        data: dict[str, Any] = {"valid": self.valid}
        if self.tokens is not None:
            data["tokens"] = self.tokens.to_dict()
        if self.errors:
            data["errors"] = list(self.errors)
        return data


def _format_error(error: dict[str, Any]) -> str:
    path = ".".join(str(part) for part in error["loc"]) if error["loc"] else "(root)"
    if error["type"] == "value_error":
        message = str(error["ctx"]["error"])
    else:
        message = error["msg"]
    return f"{path}: {message}"


def validate_tokens(value: Any) -> ValidationResult:
    """Validate an arbitrary structure against the canonical schema.

    Args:
        value: Parsed JSON (or any mapping) to check.

    Returns:
        ValidationResult holding the TokenSet, or every violation found.
    """
    if not isinstance(value, dict):
        return ValidationResult(
            valid=False,
            errors=[f"(root): Expected a token object, got {type(value).__name__}"],
        )

    try:
        model = DesignTokensSchema.model_validate(value)
    except ValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        logger.debug(f"Token validation failed with {len(errors)} error(s)")
        return ValidationResult(valid=False, errors=errors)

    tokens = TokenSet.from_dict(model.model_dump(exclude_none=True, mode="json"))
    return ValidationResult(valid=True, tokens=tokens)


def parse_tokens_from_string(json_string: str) -> ValidationResult:
    """Parse a JSON string into tokens, validating along the way.

    JSON syntax errors are reported the same way as schema violations.
    """
    try:
        parsed = json.loads(json_string)
    except (json.JSONDecodeError, TypeError) as e:
        return ValidationResult(valid=False, errors=[f"Invalid JSON: {e}"])
    return validate_tokens(parsed)


def sanitize_tokens(tokens: TokenSet) -> TokenSet:
    """Normalize hex colors and clamp shadow opacity.

    Assumes valid input; returns a new TokenSet and leaves the argument
    untouched. Collections without colors pass through unchanged.
    """
    colors = tokens.colors
    if colors is not None:
        colors = {
            name: replace(token, value=normalize_hex(token.value))
            for name, token in colors.items()
        }

    elevation = tokens.elevation
    if elevation is not None:
        elevation = {
            name: replace(
                token,
                shadow_color=normalize_hex(token.shadow_color),
                shadow_opacity=max(0.0, min(1.0, token.shadow_opacity)),
            )
            for name, token in elevation.items()
        }

    return replace(tokens, colors=colors, elevation=elevation)
