"""Base class for design token extractors.

Extractors read one textual source format (Tailwind config, CSS custom
properties, variable-graph export, DTCG JSON) and convert it to the
canonical TokenSet.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..bridge_logging import LogCategory, get_category_logger
from ..errors import ExtractionError
from ..tokens import TokenSet

logger = get_category_logger(LogCategory.EXTRACT)


class TokenExtractor(ABC):
    """Abstract base class for design token extractors.

    Subclasses implement extract(); it either returns a TokenSet with at
    least one non-empty collection or raises ExtractionError.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short name of the source format (e.g. "css")."""
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this extractor can handle."""
        ...

    def can_handle(self, file_path: Path) -> bool:
        """Check if this extractor can handle the given file."""
        return file_path.suffix.lower() in self.supported_extensions

    @abstractmethod
    def extract(self, content: str) -> TokenSet:
        """Extract tokens from source text.

        Args:
            content: The full source text.

        Returns:
            TokenSet with only non-empty collections present.

        Raises:
            ExtractionError: If the text is malformed or yields no tokens.
        """
        ...

    def extract_file(self, file_path: Path) -> TokenSet:
        """Extract tokens from a file, tagging the result with its path.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ExtractionError: If the content is malformed or yields no tokens.
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Token source not found: {file_path}")

        content = file_path.read_text(encoding="utf-8")
        return self.extract(content).with_source(str(file_path))

    def _finish(self, tokens: TokenSet, empty_message: str) -> TokenSet:
        """Raise the input-empty failure, or log and return the set."""
        if tokens.is_empty:
            raise ExtractionError.empty(self.format_name, empty_message)
        logger.debug(
            f"Extracted {tokens.total_tokens} tokens "
            f"({', '.join(tokens.present_collections)})",
            extra={"source_format": self.format_name, "token_count": tokens.total_tokens},
        )
        return tokens


class ExtractorRegistry:
    """Registry for token extractors.

    Looks extractors up by format name or by file type.
    """

    def __init__(self) -> None:
        self._extractors: dict[str, TokenExtractor] = {}

    def register(self, extractor: TokenExtractor) -> None:
        """Register an extractor under its format name."""
        self._extractors[extractor.format_name] = extractor

    @property
    def formats(self) -> list[str]:
        """Registered format names, in registration order."""
        return list(self._extractors)

    def get(self, format_name: str) -> TokenExtractor:
        """Get the extractor for a format name.

        Raises:
            KeyError: If no extractor is registered under the name.
        """
        try:
            return self._extractors[format_name]
        except KeyError:
            raise KeyError(
                f"Unknown source format '{format_name}'. "
                f"Available: {', '.join(self._extractors)}"
            ) from None

    def get_for_file(self, file_path: Path) -> TokenExtractor | None:
        """Get an extractor that can handle the given file, if any."""
        for extractor in self._extractors.values():
            if extractor.can_handle(file_path):
                return extractor
        return None


_default_registry: ExtractorRegistry | None = None


def get_default_registry() -> ExtractorRegistry:
    """Get the registry with all built-in extractors.

    Returns:
        ExtractorRegistry with Tailwind, CSS, Figma and DTCG extractors.
    """
    global _default_registry
    if _default_registry is None:
        from .css_vars import CSSVariablesExtractor
        from .dtcg import DTCGExtractor
        from .figma import FigmaVariablesExtractor
        from .tailwind import TailwindConfigExtractor

        _default_registry = ExtractorRegistry()
        _default_registry.register(TailwindConfigExtractor())
        _default_registry.register(CSSVariablesExtractor())
        _default_registry.register(FigmaVariablesExtractor())
        _default_registry.register(DTCGExtractor())
    return _default_registry
