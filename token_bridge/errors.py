"""Error types raised by token-bridge.

Extraction failures come in two flavours: the text does not parse as the
claimed format (INPUT_MALFORMED), or it parses but nothing in it maps to
a token (INPUT_EMPTY). Schema violations are normally returned as data;
TokenValidationError is only raised where a non-zero exit is needed.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

RED = "\033[91m"
CYAN = "\033[96m"
DIM = "\033[2m"
RESET = "\033[0m"


def _paint(text: str, code: str, enabled: bool) -> str:
    return f"{code}{text}{RESET}" if enabled else text


class ErrorCategory(Enum):
    INPUT_MALFORMED = "input_malformed"
    INPUT_EMPTY = "input_empty"
    SCHEMA_VIOLATION = "schema_violation"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    CONFIGURATION = "configuration"
    RUNTIME = "runtime"


@dataclass
class BridgeError(Exception):
    """An error that knows how to present itself on the command line.

    ``details`` values that are lists render one item per line.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def _detail_lines(self, color: bool) -> Iterator[str]:
        for key, value in (self.details or {}).items():
            if isinstance(value, list):
                yield _paint(f"  {key}:", DIM, color)
                for item in value:
                    yield _paint(f"    - {item}", DIM, color)
            else:
                yield _paint(f"  {key}: {value}", DIM, color)

    def format(self, use_color: bool = True) -> str:
        """Multi-line rendering: message, suggestion, then details."""
        out = [f"{_paint('Error:', RED, use_color)} {self.message}"]
        if self.suggestion:
            out.append(f"{_paint('Suggestion:', CYAN, use_color)} {self.suggestion}")
        out.extend(self._detail_lines(use_color))
        return "\n".join(out)


class ExtractionError(BridgeError):
    """An extractor could not build a token set from its input."""

    def __init__(
        self,
        message: str,
        source_format: str,
        category: ErrorCategory = ErrorCategory.INPUT_MALFORMED,
        suggestion: str | None = None,
    ):
        super().__init__(category, message, suggestion, {"format": source_format})
        self.source_format = source_format

    @classmethod
    def malformed(
        cls, source_format: str, message: str, suggestion: str | None = None
    ) -> ExtractionError:
        return cls(message, source_format, ErrorCategory.INPUT_MALFORMED, suggestion)

    @classmethod
    def empty(
        cls, source_format: str, message: str, suggestion: str | None = None
    ) -> ExtractionError:
        return cls(message, source_format, ErrorCategory.INPUT_EMPTY, suggestion)

    @property
    def is_empty(self) -> bool:
        return self.category is ErrorCategory.INPUT_EMPTY


class UnresolvedReferenceError(BridgeError):
    """An alias chain ended in a cycle, a missing key or the hop limit."""

    def __init__(self, token_path: str, reference: str | None, status: str):
        super().__init__(
            ErrorCategory.UNRESOLVED_REFERENCE,
            f"Could not resolve alias in token '{token_path}': {status} at '{reference}'",
            details={"token": token_path, "reference": reference},
        )
        self.token_path = token_path
        self.reference = reference
        self.status = status


class TokenValidationError(BridgeError):
    """A token set failed schema validation. Exits with status 2."""

    def __init__(self, errors: list[str], label: str = "tokens"):
        self.errors = list(errors)
        super().__init__(
            ErrorCategory.SCHEMA_VIOLATION,
            f"Invalid {label}: {len(self.errors)} schema violation(s)",
            "Fix the listed fields, or re-extract the tokens from source",
            {"violations": self.errors},
            exit_code=2,
        )


class ConfigurationError(BridgeError):
    """Bad config file or field value."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            ErrorCategory.CONFIGURATION,
            message,
            suggestion or "See `token-bridge --help` for the accepted keys and values",
            {"config_file": config_file} if config_file else None,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Render an exception for stderr and pick the exit status.

    Unknown exception types exit 1. With verbose, the active traceback
    is appended.
    """
    if isinstance(error, BridgeError):
        text, code = error.format(use_color=use_color), error.exit_code
    else:
        text, code = f"{_paint('Error:', RED, use_color)} {error}", 1

    if verbose:
        text = f"{text}\n\nTraceback:\n{traceback.format_exc()}"
    return text, code
