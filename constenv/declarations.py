# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Marked declarations.

A declaration is a module-level assignment of a literal to a single
name, marked with a ``from_env`` pragma comment either on the line
above it or at the end of its last line::

    # from_env
    LIMIT: Final[int] = 10

    NAME: str = "default"  # from_env("APP_NAME")
"""

from __future__ import annotations

import ast
import copy
import dataclasses
import enum
import io
import logging
import re
import tokenize
from dataclasses import dataclass
from typing import NamedTuple, TypeAlias, cast

from constenv.constants import FINAL_ANNOTATION, PRAGMA_NAME, PRAGMA_PATTERN
from constenv.exceptions import (
    DeclarationError,
    KeyResolutionError,
    LocatedError,
    ValueParseError,
)
from constenv.keys import parse_key_argument, resolve_key
from constenv.literals import LiteralExpr, annotation_name, classify, rewrite
from constenv.providers import ValueProvider

__all__ = [
    "Declaration",
    "DeclarationShape",
    "find_declarations",
    "rewrite_declaration",
]

logger = logging.getLogger(__name__)

_PRAGMA_REGEX = re.compile(PRAGMA_PATTERN)

_Statement: TypeAlias = ast.AnnAssign | ast.Assign


class DeclarationShape(enum.Enum):
    """Whether a declaration is a ``Final`` constant or a plain binding."""

    CONSTANT = "constant"
    STATIC = "static"


class _Pragma(NamedTuple):
    """A ``from_env`` comment found in the source."""

    lineno: int
    argument: str | None
    standalone: bool


@dataclass(frozen=True)
class Declaration:
    """A single-name assignment of a literal, subject to override."""

    name: str
    statement: _Statement
    key_argument: ast.expr | None = None

    @classmethod
    def from_statement(
        cls, statement: ast.stmt, key_argument: ast.expr | None = None
    ) -> Declaration:
        """Build a declaration from a parsed statement.

        Raises:
            DeclarationError: If the statement does not bind a single name
                to a value.
        """
        if (
            isinstance(statement, ast.AnnAssign)
            and isinstance(statement.target, ast.Name)
            and statement.value is not None
        ):
            return cls(statement.target.id, statement, key_argument)
        if (
            isinstance(statement, ast.Assign)
            and len(statement.targets) == 1
            and isinstance(statement.targets[0], ast.Name)
        ):
            return cls(statement.targets[0].id, statement, key_argument)
        raise DeclarationError(
            f"{PRAGMA_NAME} must mark a single-name assignment, "
            f"found {type(statement).__name__}",
            statement.lineno,
        )

    @property
    def annotation(self) -> ast.expr | None:
        if isinstance(self.statement, ast.AnnAssign):
            return self.statement.annotation
        return None

    @property
    def value(self) -> ast.expr:
        # from_statement only accepts statements with a value
        return cast(ast.expr, self.statement.value)

    @property
    def shape(self) -> DeclarationShape:
        annotation = self.annotation
        if isinstance(annotation, ast.Subscript):
            annotation = annotation.value
        if annotation_name(annotation) == FINAL_ANNOTATION:
            return DeclarationShape.CONSTANT
        return DeclarationShape.STATIC

    @property
    def span(self) -> tuple[int, int, int | None, int | None]:
        """Position of the whole statement as reported by `ast`."""
        node = self.statement
        return (
            node.lineno,
            node.col_offset,
            node.end_lineno,
            node.end_col_offset,
        )

    @property
    def key(self) -> str:
        return resolve_key(self.key_argument, self.name)

    def literal(self) -> LiteralExpr:
        """Classify the initializer of this declaration."""
        return classify(self.value, self.annotation)

    def with_value(self, value: ast.expr) -> Declaration:
        """Return a declaration whose statement holds a new initializer."""
        statement = copy.copy(self.statement)
        statement.value = value
        return dataclasses.replace(self, statement=statement)


def _find_pragmas(source: str) -> list[_Pragma]:
    pragmas: list[_Pragma] = []
    readline = io.StringIO(source).readline
    for tok in tokenize.generate_tokens(readline):
        if tok.type != tokenize.COMMENT:
            continue
        match = _PRAGMA_REGEX.match(tok.string)
        if match is None:
            continue
        lineno, col = tok.start
        standalone = not tok.line[:col].strip()
        argument = _pragma_argument(match.group("rest"), lineno)
        pragmas.append(_Pragma(lineno, argument, standalone))
    return pragmas


_OPENING = frozenset("([{")
_CLOSING = frozenset(")]}")


def _pragma_argument(rest: str, lineno: int) -> str | None:
    """Return the text between the parentheses that follow the pragma.

    A comment may follow the pragma name or the closing parenthesis.
    Anything else after the pragma name is malformed.
    """
    text = rest.strip()
    if not text or text.startswith("#"):
        return None
    malformed = KeyResolutionError(
        f"malformed pragma {PRAGMA_NAME + rest.rstrip()!r}, expected "
        f"{PRAGMA_NAME} or {PRAGMA_NAME}(\"KEY\")",
        lineno=lineno,
    )
    if not text.startswith("("):
        raise malformed
    readline = io.StringIO(text).readline
    depth = 0
    try:
        for tok in tokenize.generate_tokens(readline):
            if tok.type != tokenize.OP:
                continue
            if tok.string in _OPENING:
                depth += 1
            elif tok.string in _CLOSING:
                depth -= 1
                if depth == 0:
                    if tok.string != ")":
                        raise malformed
                    end = tok.end[1]
                    break
        else:
            raise malformed
    except (tokenize.TokenError, SyntaxError) as exc:
        raise malformed from exc
    trailing = text[end:].strip()
    if trailing and not trailing.startswith("#"):
        raise malformed
    return text[1 : end - 1]


def find_declarations(
    source: str, filename: str = "<unknown>"
) -> list[Declaration]:
    """Return the marked module-level declarations of `source`.

    Declarations are returned in source order.

    Raises:
        SyntaxError: If `source` is not valid Python.
        DeclarationError: If a pragma does not mark a declaration, or a
            declaration carries more than one pragma.
        KeyResolutionError: If a pragma is malformed or its argument is not
            an expression.
    """
    tree = ast.parse(source, filename)
    starts = {stmt.lineno: stmt for stmt in tree.body}
    ends = {stmt.end_lineno: stmt for stmt in tree.body}

    found: dict[int, Declaration] = {}
    for pragma in _find_pragmas(source):
        if pragma.standalone:
            statement = starts.get(pragma.lineno + 1)
        else:
            statement = ends.get(pragma.lineno)
        if statement is None:
            raise DeclarationError(
                f"{PRAGMA_NAME} pragma is not attached to a declaration",
                pragma.lineno,
            )
        if statement.lineno in found:
            raise DeclarationError(
                f"declaration has more than one {PRAGMA_NAME} pragma",
                statement.lineno,
            )
        try:
            key_argument = parse_key_argument(pragma.argument)
        except KeyResolutionError as exc:
            raise exc.located(None, pragma.lineno) from exc
        declaration = Declaration.from_statement(statement, key_argument)
        found[statement.lineno] = declaration
        logger.debug(
            f"Found {declaration.shape.value} declaration "
            f"{declaration.name} at line {statement.lineno}"
        )
    return [found[lineno] for lineno in sorted(found)]


def rewrite_declaration(
    declaration: Declaration, provider: ValueProvider
) -> Declaration:
    """Apply the override configured for `declaration`, if any.

    When the provider has no value for the key, `declaration` itself is
    returned. Otherwise a new declaration is returned whose initializer
    is a literal of the same kind, placed at the same source position.

    Raises:
        KeyResolutionError: If the explicit key is not a string literal.
        UnsupportedLiteralError: If the initializer is not a literal.
        ValueParseError: If the override does not parse as the kind of
            the initializer.
    """
    lineno = declaration.statement.lineno
    try:
        key = declaration.key
    except LocatedError as exc:
        raise exc.located(declaration.name, lineno) from exc
    raw_value = provider.lookup(key)
    if raw_value is None:
        logger.debug(f"No override for {declaration.name} (key {key})")
        return declaration
    try:
        original = declaration.literal()
    except LocatedError as exc:
        raise exc.located(declaration.name, lineno) from exc
    try:
        literal = rewrite(original, raw_value)
    except ValueParseError as exc:
        raise exc.with_name(declaration.name) from exc
    logger.debug(
        f"Rewrote {declaration.name} from {ast.unparse(original.node)} "
        f"to {ast.unparse(literal.node)} (key {key})"
    )
    return declaration.with_value(literal.node)
