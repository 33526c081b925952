"""Base class and shared helpers for platform theme generators.

Generators turn a validated TokenSet into complete source text for one
platform. Every collection is optional; a generator omits the section
for any collection that is absent or empty.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from ..bridge_logging import LogCategory, get_category_logger
from ..tokens import TokenSet

logger = get_category_logger(LogCategory.GENERATE)

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_CUBIC_BEZIER = re.compile(
    r"^cubic-bezier\(\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*,\s*(-?[\d.]+)\s*\)$"
)

# CSS easing keywords as cubic-bezier control points
EASING_KEYWORDS: dict[str, tuple[float, float, float, float]] = {
    "ease": (0.25, 0.1, 0.25, 1.0),
    "ease-in": (0.42, 0.0, 1.0, 1.0),
    "ease-out": (0.0, 0.0, 0.58, 1.0),
    "ease-in-out": (0.42, 0.0, 0.58, 1.0),
    "linear": (0.0, 0.0, 1.0, 1.0),
}

GENERIC_FONT_FAMILIES = {
    "serif",
    "sans-serif",
    "monospace",
    "cursive",
    "fantasy",
    "system-ui",
}


def split_words(name: str) -> list[str]:
    """Split a token name on separators and camelCase boundaries."""
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    return [w for w in _WORD_SPLIT.split(spaced) if w]


def _join(words: list[str]) -> str:
    # Keep adjacent numbers apart: "0.5" -> "0_5"
    out = ""
    for word in words:
        if out and out[-1].isdigit() and word[0].isdigit():
            out += "_"
        out += word
    return out


def to_pascal(name: str, prefix: str = "Token") -> str:
    """Token name as a PascalCase identifier.

    >>> to_pascal("on-primary")
    'OnPrimary'
    >>> to_pascal("72", prefix="Space")
    'Space72'
    """
    words = [w[0].upper() + w[1:].lower() for w in split_words(name)]
    ident = _join(words) or prefix
    return f"{prefix}{ident}" if ident[0].isdigit() else ident


def to_camel(name: str, prefix: str = "token") -> str:
    """Token name as a camelCase identifier.

    >>> to_camel("display-large")
    'displayLarge'
    >>> to_camel("2xl", prefix="space")
    'space2xl'
    """
    words = split_words(name)
    if not words:
        return prefix
    first = words[0].lower()
    rest = [w[0].upper() + w[1:].lower() for w in words[1:]]
    ident = _join([first, *rest])
    if ident[0].isdigit():
        return prefix + ident[0].upper() + ident[1:]
    return ident


def unique_identifiers(
    names: Iterable[str],
    make: Callable[[str], str],
    reserved: Iterable[str] = (),
) -> dict[str, str]:
    """Identifier for each token name, kept distinct within one scope.

    When two names map to the same identifier ("primary-50" and
    "primary50"), or to one of the reserved names, later ones get a
    "_2", "_3", ... suffix and a warning is logged.
    """
    result: dict[str, str] = {}
    taken: set[str] = set(reserved)
    for name in names:
        base = make(name)
        ident, n = base, 2
        while ident in taken:
            ident = f"{base}_{n}"
            n += 1
        if ident != base:
            logger.warning(f"Token '{name}' collides on identifier '{base}'; emitted as '{ident}'")
        taken.add(ident)
        result[name] = ident
    return result


def comment_text(text: str) -> str:
    """Single-line form of free text for a line comment."""
    return " ".join(text.split())


def easing_control_points(easing: str) -> tuple[float, float, float, float] | None:
    """Control points for a CSS easing keyword or cubic-bezier().

    Returns None for easings with no cubic-bezier form (steps(), ...).
    """
    normalized = easing.strip().lower()
    if normalized in EASING_KEYWORDS:
        return EASING_KEYWORDS[normalized]
    match = _CUBIC_BEZIER.match(normalized)
    if match:
        return tuple(float(match.group(i)) for i in range(1, 5))  # type: ignore[return-value]
    return None


class ThemeGenerator(ABC):
    """Abstract base class for theme generators."""

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Short name of the output platform (e.g. "swiftui")."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of the generated source file."""
        ...

    @abstractmethod
    def render(self, tokens: TokenSet) -> str:
        """Render the complete source text."""
        ...

    def generate(self, tokens: TokenSet) -> str:
        """Generate source text for a validated token set.

        Args:
            tokens: Valid, preferably sanitized, TokenSet.

        Returns:
            Complete source file contents.
        """
        output = self.render(tokens)
        logger.debug(
            f"Generated {self.target_name} output ({len(output)} chars)",
            extra={"operation": f"generate_{self.target_name}", "token_count": tokens.total_tokens},
        )
        return output
