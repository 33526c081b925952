"""Restricted JavaScript object-literal parser.

Reads JS/TS config source without executing it. The grammar covers
what theme objects are made of: objects, arrays, strings (single,
double, and backtick without interpolation), numbers, true/false/null,
line and block comments, and trailing commas.

Anything else (identifiers, function calls, spreads, arrow functions,
computed keys, template interpolation) is skipped as an opaque
expression: object properties holding one are dropped, array slots
hold the UNSUPPORTED sentinel. Braces inside string literals are
tokenized as strings, so they never affect nesting.
"""

from dataclasses import dataclass
from typing import Any


class JSParseError(ValueError):
    """Raised when the source can't be tokenized or parsed."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at offset {position}")
        self.position = position


class _Unsupported:
    """Placeholder for expressions the parser does not evaluate."""

    _instance: "_Unsupported | None" = None

    def __new__(cls) -> "_Unsupported":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSUPPORTED"

    def __bool__(self) -> bool:
        return False


UNSUPPORTED = _Unsupported()

PUNCT = "punct"
STRING = "string"
TEMPLATE = "template"  # Backtick string with ${} interpolation
NUMBER = "number"
IDENT = "ident"
OTHER = "other"

_PUNCTUATION = set("{}[]():,;=.")
_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = set(_OPENERS.values())
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


@dataclass(frozen=True)
class Token:
    """A lexical token."""

    kind: str
    value: Any
    pos: int


def tokenize(source: str) -> list[Token]:
    """Split JS source into tokens, dropping whitespace and comments.

    Raises:
        JSParseError: On an unterminated string or block comment.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]

        if ch.isspace():
            i += 1
            continue

        if source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end == -1 else end + 1
            continue

        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise JSParseError("Unterminated block comment", i)
            i = end + 2
            continue

        if ch in ("'", '"', "`"):
            start = i
            value, i, interpolated = _read_string(source, i)
            tokens.append(Token(TEMPLATE if interpolated else STRING, value, start))
            continue

        if ch.isdigit() or (ch == "." and i + 1 < n and source[i + 1].isdigit()):
            value, end = _read_number(source, i)
            tokens.append(Token(NUMBER, value, i))
            i = end
            continue

        if ch.isalpha() or ch in "_$":
            start = i
            while i < n and (source[i].isalnum() or source[i] in "_$"):
                i += 1
            tokens.append(Token(IDENT, source[start:i], start))
            continue

        if source.startswith("...", i):
            tokens.append(Token(OTHER, "...", i))
            i += 3
            continue

        if source.startswith("=>", i):
            tokens.append(Token(OTHER, "=>", i))
            i += 2
            continue

        if ch in _PUNCTUATION:
            tokens.append(Token(PUNCT, ch, i))
        else:
            tokens.append(Token(OTHER, ch, i))
        i += 1

    return tokens


def _read_string(source: str, start: int) -> tuple[str, int, bool]:
    quote = source[start]
    chars: list[str] = []
    interpolated = False
    i = start + 1
    n = len(source)

    while i < n:
        ch = source[i]
        if ch == "\\" and i + 1 < n:
            nxt = source[i + 1]
            if nxt == "\n":
                i += 2
                continue
            chars.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        if ch == quote:
            return "".join(chars), i + 1, interpolated
        if quote != "`" and ch == "\n":
            break
        if quote == "`" and source.startswith("${", i):
            interpolated = True
        chars.append(ch)
        i += 1

    raise JSParseError("Unterminated string literal", start)


def _read_number(source: str, start: int) -> tuple[int | float, int]:
    i = start
    n = len(source)

    if source.startswith(("0x", "0X"), i):
        i += 2
        while i < n and (source[i] in "0123456789abcdefABCDEF_"):
            i += 1
        return int(source[start + 2 : i].replace("_", ""), 16), i

    while i < n and (source[i].isdigit() or source[i] in "._"):
        i += 1
    if i < n and source[i] in "eE":
        j = i + 1
        if j < n and source[j] in "+-":
            j += 1
        if j < n and source[j].isdigit():
            i = j
            while i < n and source[i].isdigit():
                i += 1

    text = source[start:i].replace("_", "")
    try:
        if any(c in text for c in ".eE"):
            return float(text), i
        return int(text), i
    except ValueError as e:
        raise JSParseError(f"Invalid number literal {text!r}", start) from e


class ObjectLiteralParser:
    """Recursive-descent parser over a token list.

    Example:
        >>> tokens = tokenize("{ colors: { primary: '#fff', }, }")
        >>> ObjectLiteralParser(tokens).parse_value(0)[0]
        {'colors': {'primary': '#fff'}}
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens

    def _peek(self, index: int) -> Token | None:
        return self.tokens[index] if index < len(self.tokens) else None

    def _is(self, index: int, kind: str, value: Any = None) -> bool:
        token = self._peek(index)
        if token is None or token.kind != kind:
            return False
        return value is None or token.value == value

    def _end_position(self) -> int:
        return self.tokens[-1].pos if self.tokens else 0

    def parse_value(self, index: int) -> tuple[Any, int]:
        """Parse one value starting at index.

        Returns:
            (value, index of the next unconsumed token)
        """
        token = self._peek(index)
        if token is None:
            raise JSParseError("Unexpected end of input", self._end_position())

        if token.kind == PUNCT and token.value == "{":
            return self._parse_object(index)
        if token.kind == PUNCT and token.value == "[":
            return self._parse_array(index)
        if token.kind == STRING:
            if self._is(index + 1, PUNCT, "."):
                return UNSUPPORTED, self.skip_expression(index)
            return token.value, index + 1
        if token.kind == NUMBER:
            return token.value, index + 1
        if (
            token.kind == OTHER
            and token.value in ("-", "+")
            and self._is(index + 1, NUMBER)
            and self._ends_value(index + 2)
        ):
            number = self.tokens[index + 1].value
            return (-number if token.value == "-" else number), index + 2
        if token.kind == IDENT and self._ends_value(index + 1):
            literals = {"true": True, "false": False, "null": None, "undefined": None}
            if token.value in literals:
                return literals[token.value], index + 1

        return UNSUPPORTED, self.skip_expression(index)

    def _ends_value(self, index: int) -> bool:
        token = self._peek(index)
        return token is None or (token.kind == PUNCT and token.value in ",}])")

    def skip_expression(self, index: int) -> int:
        """Skip tokens up to the next top-level ',' or closing bracket."""
        depth = 0
        while index < len(self.tokens):
            token = self.tokens[index]
            if token.kind == PUNCT:
                if token.value in _OPENERS:
                    depth += 1
                elif token.value in _CLOSERS:
                    if depth == 0:
                        return index
                    depth -= 1
                elif token.value == "," and depth == 0:
                    return index
            index += 1
        if depth:
            raise JSParseError("Unbalanced brackets in expression", self._end_position())
        return index

    def _parse_object(self, index: int) -> tuple[dict[str, Any], int]:
        result: dict[str, Any] = {}
        open_pos = self.tokens[index].pos
        index += 1

        while True:
            token = self._peek(index)
            if token is None:
                raise JSParseError("Unclosed object literal", open_pos)
            if token.kind == PUNCT and token.value == "}":
                return result, index + 1
            if token.kind == PUNCT and token.value == ",":
                index += 1
                continue

            if token.kind == OTHER and token.value == "...":
                index = self.skip_expression(index + 1)
                continue

            if token.kind == PUNCT and token.value == "[":
                # Computed key: skip key and value
                index = self.skip_expression(index)
                continue

            if token.kind in (IDENT, STRING, NUMBER):
                key = token.value if token.kind != NUMBER else self._number_key(token)
                index += 1
                if self._is(index, PUNCT, ":"):
                    value, index = self.parse_value(index + 1)
                    if value is not UNSUPPORTED:
                        result[str(key)] = value
                else:
                    # Shorthand property or method definition
                    index = self.skip_expression(index)
                if not self._ends_value(index):
                    # Trailing expression, e.g. "as const"
                    index = self.skip_expression(index)
                continue

            raise JSParseError(f"Unexpected token {token.value!r} in object", token.pos)

    def _number_key(self, token: Token) -> str:
        value = token.value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def _parse_array(self, index: int) -> tuple[list[Any], int]:
        result: list[Any] = []
        open_pos = self.tokens[index].pos
        index += 1

        while True:
            token = self._peek(index)
            if token is None:
                raise JSParseError("Unclosed array literal", open_pos)
            if token.kind == PUNCT and token.value == "]":
                return result, index + 1
            if token.kind == PUNCT and token.value == ",":
                index += 1
                continue
            if token.kind == PUNCT and token.value in "})":
                raise JSParseError(f"Unexpected token {token.value!r} in array", token.pos)
            if token.kind == OTHER and token.value == "...":
                index = self.skip_expression(index + 1)
                continue

            start = index
            value, index = self.parse_value(index)
            if index == start:
                raise JSParseError(f"Unexpected token {token.value!r} in array", token.pos)
            result.append(value)
            if not self._ends_value(index):
                index = self.skip_expression(index)


def parse_object_literal(source: str) -> dict[str, Any]:
    """Parse source that starts with an object literal.

    Raises:
        JSParseError: If the text is not a well-formed object literal.
    """
    tokens = tokenize(source)
    if not tokens or tokens[0].kind != PUNCT or tokens[0].value != "{":
        raise JSParseError("Expected '{'", 0)
    value, _ = ObjectLiteralParser(tokens).parse_value(0)
    return value
