"""WCAG color contrast checking for token sets.

Pairs are chosen from color names only:
1. "on" companions: on-primary (or onPrimary) is checked against primary.
2. When there are none, text-like names (text, foreground, fg, on-surface,
   on-background) are checked against surface-like names (surface,
   background, bg, canvas).
3. When there are still none, every unordered combination is checked.
"""

import re
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Literal

from .bridge_logging import LogCategory, get_category_logger
from .normalizers.color import hex_to_rgb
from .normalizers.length import round_half_up
from .tokens import ColorToken, TokenSet

logger = get_category_logger(LogCategory.CONTRAST)

WCAGLevel = Literal["AA", "AAA"]

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

FOREGROUND_NAMES = re.compile(r"^(text|foreground|fg|on-surface|on-background)$", re.IGNORECASE)
BACKGROUND_NAMES = re.compile(r"^(surface|background|bg|canvas)$", re.IGNORECASE)


def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_value: str) -> float:
    """WCAG 2 relative luminance of a hex color (alpha ignored)."""
    r, g, b = (_linearize(c / 255) for c in hex_to_rgb(hex_value))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: str, second: str) -> float:
    """Contrast ratio between two hex colors, from 1 to 21.

    Symmetric in its arguments.
    """
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


@dataclass(frozen=True)
class ColorPair:
    """A foreground/background pair to check."""

    name: str
    foreground: str
    background: str


@dataclass
class ContrastResult:
    """Contrast check for one color pair."""

    pair: str
    foreground: str
    background: str
    ratio: float
    aa_normal: bool
    aa_large: bool
    aaa_normal: bool
    aaa_large: bool

    def passes(self, level: WCAGLevel) -> bool:
        """Whether normal-size text passes at the given level."""
        return self.aa_normal if level == "AA" else self.aaa_normal

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "pair": self.pair,
            "foreground": self.foreground,
            "background": self.background,
            "ratio": self.ratio,
            "aa": {"normalText": self.aa_normal, "largeText": self.aa_large},
            "aaa": {"normalText": self.aaa_normal, "largeText": self.aaa_large},
        }


@dataclass
class ContrastReport:
    """Contrast results for a token set at one WCAG level."""

    level: WCAGLevel
    results: list[ContrastResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passing(self) -> int:
        return sum(1 for result in self.results if result.passes(self.level))

    @property
    def failing(self) -> int:
        return self.total - self.passing

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "level": self.level,
            "total": self.total,
            "passing": self.passing,
            "failing": self.failing,
            "results": [result.to_dict() for result in self.results],
        }


def find_pairs(colors: dict[str, ColorToken]) -> list[ColorPair]:
    """Choose the color pairs to check (see module docstring)."""
    entries = list(colors.items())
    pairs: list[ColorPair] = []

    for bg_name, bg_token in entries:
        companions = {f"on-{bg_name}", f"on{bg_name[:1].upper()}{bg_name[1:]}"}
        for fg_name, fg_token in entries:
            if fg_name in companions:
                pairs.append(ColorPair(f"{fg_name} on {bg_name}", fg_token.value, bg_token.value))
    if pairs:
        return pairs

    foregrounds = [(n, t) for n, t in entries if FOREGROUND_NAMES.match(n)]
    backgrounds = [(n, t) for n, t in entries if BACKGROUND_NAMES.match(n)]
    for fg_name, fg_token in foregrounds:
        for bg_name, bg_token in backgrounds:
            pairs.append(ColorPair(f"{fg_name} on {bg_name}", fg_token.value, bg_token.value))
    if pairs:
        return pairs

    return [
        ColorPair(f"{a_name}/{b_name}", a_token.value, b_token.value)
        for (a_name, a_token), (b_name, b_token) in combinations(entries, 2)
    ]


def check_pair(pair: ColorPair) -> ContrastResult:
    """Compute the ratio and pass flags for one pair.

    Thresholds apply to the unrounded ratio; the reported ratio is
    rounded to 2 decimals.
    """
    ratio = contrast_ratio(pair.foreground, pair.background)
    return ContrastResult(
        pair=pair.name,
        foreground=pair.foreground,
        background=pair.background,
        ratio=round_half_up(ratio, 2),
        aa_normal=ratio >= AA_NORMAL,
        aa_large=ratio >= AA_LARGE,
        aaa_normal=ratio >= AAA_NORMAL,
        aaa_large=ratio >= AAA_LARGE,
    )


def validate_contrast(tokens: TokenSet, level: WCAGLevel = "AA") -> ContrastReport:
    """Check WCAG contrast for the color pairs in a token set.

    Args:
        tokens: Valid token set.
        level: "AA" or "AAA"; decides which normal-text flag counts
            towards passing/failing. Both levels are always computed.

    Returns:
        ContrastReport; empty when the set has fewer than two colors.
    """
    if level not in ("AA", "AAA"):
        raise ValueError(f"Unknown WCAG level '{level}' (expected AA or AAA)")

    colors = tokens.colors or {}
    if len(colors) < 2:
        return ContrastReport(level=level)

    report = ContrastReport(level=level, results=[check_pair(p) for p in find_pairs(colors)])
    logger.debug(
        f"Checked {report.total} color pairs at {level}: {report.failing} failing",
        extra={"operation": "validate_contrast"},
    )
    return report
