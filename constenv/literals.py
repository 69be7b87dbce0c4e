# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Literal classification and rewriting.

This module is the core of constenv. It defines the tagged literal
types used throughout the package:

- ConstantLiteral: an `ast.Constant` together with its `LiteralKind`
- NegatedLiteral: a unary minus wrapped around a numeric literal

`classify` turns an initializer node into one of those, and `rewrite`
parses an override string as the same kind and produces a new literal
that keeps the source position of the original.
"""

from __future__ import annotations

import ast
import copy
import enum
import io
import logging
import tokenize
import warnings
from dataclasses import dataclass
from typing import Callable, TypeAlias, cast

from constenv.constants import (
    BYTE_ANNOTATION,
    CHAR_ANNOTATION,
    FALSE_VALUE,
    FINAL_ANNOTATION,
    NEGATIVE_SIGN,
    TRUE_VALUE,
)
from constenv.exceptions import UnsupportedLiteralError, ValueParseError

__all__ = [
    "LiteralKind",
    "ConstantLiteral",
    "NegatedLiteral",
    "LiteralExpr",
    "annotation_name",
    "classify",
    "rewrite",
]

logger = logging.getLogger(__name__)

_ConstantValue: TypeAlias = str | bytes | bool | int | float


class LiteralKind(enum.Enum):
    """Closed set of literal kinds that can be overridden."""

    STRING = "string"
    BYTE_STRING = "byte string"
    BYTE = "byte"
    CHARACTER = "character"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self in (LiteralKind.INTEGER, LiteralKind.FLOAT)


@dataclass(frozen=True)
class ConstantLiteral:
    """A literal constant of a known kind."""

    kind: LiteralKind
    node: ast.Constant

    @property
    def value(self) -> _ConstantValue:
        return self.node.value  # type: ignore[no-any-return]


@dataclass(frozen=True)
class NegatedLiteral:
    """A unary minus around a numeric literal (or another negation)."""

    operand: LiteralExpr
    node: ast.UnaryOp

    @property
    def kind(self) -> LiteralKind:
        return self.operand.kind

    @property
    def value(self) -> _ConstantValue:
        return -cast(int | float, self.operand.value)


LiteralExpr: TypeAlias = ConstantLiteral | NegatedLiteral


def annotation_name(annotation: ast.expr | None) -> str | None:
    """Return the name a declaration annotation narrows to.

    ``Final[X]`` is unwrapped to ``X``; dotted names such as
    ``constenv.Char`` yield their last component.
    """
    if annotation is None:
        return None
    if isinstance(annotation, ast.Subscript):
        if annotation_name(annotation.value) == FINAL_ANNOTATION:
            return annotation_name(annotation.slice)
        return None
    if isinstance(annotation, ast.Name):
        return annotation.id
    if isinstance(annotation, ast.Attribute):
        return annotation.attr
    return None


def classify(
    node: ast.expr, annotation: ast.expr | None = None
) -> LiteralExpr:
    """Detect the literal kind of an initializer node.

    Args:
        node: The initializer expression.
        annotation: The declaration annotation, used to tell characters
            and bytes apart from strings and byte strings.

    Raises:
        UnsupportedLiteralError: If the node is not a supported literal.
    """
    if isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.USub):
        operand = classify(node.operand, annotation)
        if not operand.kind.is_numeric:
            raise UnsupportedLiteralError(
                f"original initializer {ast.unparse(node)} negates a "
                f"{operand.kind.label} literal"
            )
        return NegatedLiteral(operand, node)
    if isinstance(node, ast.Constant):
        kind = _constant_kind(node.value, annotation_name(annotation))
        if kind is not None:
            return ConstantLiteral(kind, node)
    raise UnsupportedLiteralError(
        f"original initializer {ast.unparse(node)} is not a supported "
        f"literal expression"
    )


def _constant_kind(value: object, marker: str | None) -> LiteralKind | None:
    # bool is checked first since it is a subclass of int
    if isinstance(value, bool):
        return LiteralKind.BOOLEAN
    if isinstance(value, int):
        return LiteralKind.INTEGER
    if isinstance(value, float):
        return LiteralKind.FLOAT
    if isinstance(value, str):
        if marker == CHAR_ANNOTATION:
            return LiteralKind.CHARACTER
        return LiteralKind.STRING
    if isinstance(value, bytes):
        if marker == BYTE_ANNOTATION:
            return LiteralKind.BYTE
        return LiteralKind.BYTE_STRING
    return None


def rewrite(original: LiteralExpr, raw_value: str) -> LiteralExpr:
    """Parse `raw_value` as the kind of `original` and build a new literal.

    The returned literal has the same kind, the same wrapper structure
    and the same source position as `original`. `original` is left
    untouched.

    Raises:
        ValueParseError: If `raw_value` is not a valid literal of the
            required kind.
    """
    logger.debug(f"Original expression: {ast.dump(original.node)}")
    if isinstance(original, NegatedLiteral):
        return _rewrite_negated(original, raw_value)
    return _rewrite_constant(original, raw_value)


def _rewrite_negated(original: NegatedLiteral, raw_value: str) -> LiteralExpr:
    text = raw_value.strip()
    if not text.startswith(NEGATIVE_SIGN):
        raise ValueParseError(
            original.kind, raw_value, reason="expected a negative value"
        )
    try:
        operand = rewrite(original.operand, text[len(NEGATIVE_SIGN) :])
    except ValueParseError as exc:
        raise ValueParseError(
            original.kind, raw_value, reason=exc.reason
        ) from exc
    node = copy.copy(original.node)
    node.operand = operand.node
    return NegatedLiteral(operand, node)


def _rewrite_constant(
    original: ConstantLiteral, raw_value: str
) -> ConstantLiteral:
    value = _PARSERS[original.kind](raw_value)
    # Keep the `u` prefix marker along with the original position
    node = ast.Constant(value=value, kind=original.node.kind)
    ast.copy_location(node, original.node)
    return ConstantLiteral(original.kind, node)


_LAYOUT_TOKENS = frozenset(
    {
        tokenize.NEWLINE,
        tokenize.NL,
        tokenize.INDENT,
        tokenize.DEDENT,
        tokenize.ENDMARKER,
    }
)


def _eval_token(
    kind: LiteralKind, raw_value: str, text: str, token_type: int
) -> object:
    """Evaluate `text`, which must be exactly one token of `token_type`.

    Invalid escape sequences are errors, not warnings.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        try:
            tokens = [
                tok
                for tok in tokenize.generate_tokens(io.StringIO(text).readline)
                if tok.type not in _LAYOUT_TOKENS
            ]
        except (
            tokenize.TokenError,
            SyntaxError,
            SyntaxWarning,
            ValueError,
        ) as exc:
            raise ValueParseError(kind, raw_value, reason=str(exc)) from exc
        if len(tokens) != 1 or tokens[0].type != token_type:
            raise ValueParseError(
                kind, raw_value, reason="not a single literal token"
            )
        try:
            return ast.literal_eval(tokens[0].string)
        except (ValueError, SyntaxError, SyntaxWarning) as exc:
            raise ValueParseError(kind, raw_value, reason=str(exc)) from exc


def _escape_line_breaks(raw_value: str) -> str:
    # Line breaks may not appear inside a single-quoted literal
    return raw_value.replace("\r", "\\r").replace("\n", "\\n")


def _parse_string(raw_value: str) -> str:
    text = f'"{_escape_line_breaks(raw_value)}"'
    value = _eval_token(LiteralKind.STRING, raw_value, text, tokenize.STRING)
    if not isinstance(value, str):
        raise ValueParseError(LiteralKind.STRING, raw_value)
    return value


def _parse_byte_string(raw_value: str) -> bytes:
    text = f'b"{_escape_line_breaks(raw_value)}"'
    value = _eval_token(
        LiteralKind.BYTE_STRING, raw_value, text, tokenize.STRING
    )
    if not isinstance(value, bytes):
        raise ValueParseError(LiteralKind.BYTE_STRING, raw_value)
    return value


def _parse_byte(raw_value: str) -> bytes:
    value = _eval_token(
        LiteralKind.BYTE, raw_value, f"b'{raw_value}'", tokenize.STRING
    )
    if not isinstance(value, bytes) or len(value) != 1:
        raise ValueParseError(
            LiteralKind.BYTE, raw_value, reason="expected exactly one byte"
        )
    return value


def _parse_character(raw_value: str) -> str:
    value = _eval_token(
        LiteralKind.CHARACTER, raw_value, f"'{raw_value}'", tokenize.STRING
    )
    if not isinstance(value, str) or len(value) != 1:
        raise ValueParseError(
            LiteralKind.CHARACTER,
            raw_value,
            reason="expected exactly one character",
        )
    return value


def _parse_integer(raw_value: str) -> int:
    value = _eval_token(
        LiteralKind.INTEGER, raw_value, raw_value.strip(), tokenize.NUMBER
    )
    if not isinstance(value, int):
        raise ValueParseError(LiteralKind.INTEGER, raw_value)
    return value


def _parse_float(raw_value: str) -> float:
    value = _eval_token(
        LiteralKind.FLOAT, raw_value, raw_value.strip(), tokenize.NUMBER
    )
    if not isinstance(value, float):
        raise ValueParseError(LiteralKind.FLOAT, raw_value)
    return value


def _parse_boolean(raw_value: str) -> bool:
    if raw_value == TRUE_VALUE:
        return True
    if raw_value == FALSE_VALUE:
        return False
    raise ValueParseError(
        LiteralKind.BOOLEAN,
        raw_value,
        reason=f"expected '{TRUE_VALUE}' or '{FALSE_VALUE}'",
    )


_PARSERS: dict[LiteralKind, Callable[[str], _ConstantValue]] = {
    LiteralKind.STRING: _parse_string,
    LiteralKind.BYTE_STRING: _parse_byte_string,
    LiteralKind.BYTE: _parse_byte,
    LiteralKind.CHARACTER: _parse_character,
    LiteralKind.INTEGER: _parse_integer,
    LiteralKind.FLOAT: _parse_float,
    LiteralKind.BOOLEAN: _parse_boolean,
}
