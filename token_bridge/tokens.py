"""Canonical design token models.

Every extractor produces a TokenSet and every generator consumes one.
Colors are uppercase hex (#RRGGBB or #RRGGBBAA once sanitized), every
dimension is in pixels, durations are in milliseconds.

Instances are frozen: generators and the contrast checker only read
them, and sanitization builds a new set.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class ColorCategory(str, Enum):
    """Semantic role of a color token."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    NEUTRAL = "neutral"
    ERROR = "error"
    SURFACE = "surface"
    BACKGROUND = "background"
    CUSTOM = "custom"


COLLECTIONS = ("colors", "typography", "spacing", "radii", "elevation", "motion")


def wire_number(value: float | int) -> float | int:
    """Render integral floats as ints, the way JSON token files write them."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class ColorToken:
    """A design token representing a color value."""

    value: str  # Hex, e.g. "#6750A4"
    description: str | None = None
    category: ColorCategory | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        data: dict[str, Any] = {"value": self.value}
        if self.description is not None:
            data["description"] = self.description
        if self.category is not None:
            data["category"] = self.category.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorToken":
        """Create from the wire format."""
        category = data.get("category")
        return cls(
            value=data["value"],
            description=data.get("description"),
            category=ColorCategory(category) if category is not None else None,
        )


@dataclass(frozen=True)
class TypographyToken:
    """A design token representing a text style."""

    font_size: float  # px
    font_family: str | None = None
    line_height: float | None = None  # px
    font_weight: int | None = None
    letter_spacing: float | None = None  # px

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        data: dict[str, Any] = {}
        if self.font_family is not None:
            data["fontFamily"] = self.font_family
        data["fontSize"] = wire_number(self.font_size)
        if self.line_height is not None:
            data["lineHeight"] = wire_number(self.line_height)
        if self.font_weight is not None:
            data["fontWeight"] = self.font_weight
        if self.letter_spacing is not None:
            data["letterSpacing"] = wire_number(self.letter_spacing)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypographyToken":
        """Create from the wire format."""
        return cls(
            font_size=data["fontSize"],
            font_family=data.get("fontFamily"),
            line_height=data.get("lineHeight"),
            font_weight=data.get("fontWeight"),
            letter_spacing=data.get("letterSpacing"),
        )


@dataclass(frozen=True)
class ShadowOffset:
    """Shadow offset in pixels."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class ElevationToken:
    """A design token representing a drop shadow."""

    shadow_color: str  # Hex
    shadow_offset: ShadowOffset
    shadow_radius: float  # Blur, px
    shadow_opacity: float  # 0-1

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "shadowColor": self.shadow_color,
            "shadowOffset": {
                "x": wire_number(self.shadow_offset.x),
                "y": wire_number(self.shadow_offset.y),
            },
            "shadowRadius": wire_number(self.shadow_radius),
            "shadowOpacity": wire_number(self.shadow_opacity),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElevationToken":
        """Create from the wire format."""
        offset = data.get("shadowOffset") or {}
        return cls(
            shadow_color=data["shadowColor"],
            shadow_offset=ShadowOffset(x=offset.get("x", 0), y=offset.get("y", 0)),
            shadow_radius=data["shadowRadius"],
            shadow_opacity=data["shadowOpacity"],
        )


@dataclass(frozen=True)
class MotionToken:
    """A design token representing an animation timing."""

    duration: float  # ms
    easing: str  # e.g. "ease-out" or "cubic-bezier(0.4, 0, 0.2, 1)"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {"duration": wire_number(self.duration), "easing": self.easing}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MotionToken":
        """Create from the wire format."""
        return cls(duration=data["duration"], easing=data["easing"])


@dataclass(frozen=True)
class TokenSet:
    """The canonical token set.

    A collection left as None is absent; an empty dict is present but
    empty. At least one collection must be present for the set to be
    valid (see token_bridge.schema).
    """

    colors: dict[str, ColorToken] | None = None
    typography: dict[str, TypographyToken] | None = None
    spacing: dict[str, float] | None = None
    radii: dict[str, float] | None = None
    elevation: dict[str, ElevationToken] | None = None
    motion: dict[str, MotionToken] | None = None
    source_files: list[str] = field(default_factory=list, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format, omitting absent collections."""
        data: dict[str, Any] = {}
        if self.colors is not None:
            data["colors"] = {k: v.to_dict() for k, v in self.colors.items()}
        if self.typography is not None:
            data["typography"] = {k: v.to_dict() for k, v in self.typography.items()}
        if self.spacing is not None:
            data["spacing"] = {k: wire_number(v) for k, v in self.spacing.items()}
        if self.radii is not None:
            data["radii"] = {k: wire_number(v) for k, v in self.radii.items()}
        if self.elevation is not None:
            data["elevation"] = {k: v.to_dict() for k, v in self.elevation.items()}
        if self.motion is not None:
            data["motion"] = {k: v.to_dict() for k, v in self.motion.items()}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenSet":
        """Create from the wire format.

        Does not validate; use token_bridge.schema.validate_tokens for
        untrusted input.
        """

        def _load(key: str, loader: Any) -> dict[str, Any] | None:
            if data.get(key) is None:
                return None
            return {name: loader(value) for name, value in data[key].items()}

        return cls(
            colors=_load("colors", ColorToken.from_dict),
            typography=_load("typography", TypographyToken.from_dict),
            spacing=_load("spacing", lambda v: v),
            radii=_load("radii", lambda v: v),
            elevation=_load("elevation", ElevationToken.from_dict),
            motion=_load("motion", MotionToken.from_dict),
        )

    @classmethod
    def from_collections(cls, **collections: dict[str, Any]) -> "TokenSet":
        """Build a set keeping only non-empty collections.

        Extractors use this so a category with nothing mapped is absent
        rather than present-and-empty.
        """
        unknown = set(collections) - set(COLLECTIONS)
        if unknown:
            raise TypeError(f"Unknown token collections: {sorted(unknown)}")
        return cls(**{k: v for k, v in collections.items() if v})

    def with_source(self, source_name: str) -> "TokenSet":
        """Return a copy tagged with a source file name."""
        return replace(self, source_files=[*self.source_files, source_name])

    @property
    def present_collections(self) -> list[str]:
        """Names of the collections that are present."""
        return [name for name in COLLECTIONS if getattr(self, name) is not None]

    @property
    def is_empty(self) -> bool:
        """True when no collection is present."""
        return not self.present_collections

    @property
    def total_tokens(self) -> int:
        """Total number of tokens across all collections."""
        return sum(len(getattr(self, name)) for name in self.present_collections)
