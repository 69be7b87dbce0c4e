# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Override key resolution."""

from __future__ import annotations

import ast

from constenv.exceptions import KeyResolutionError

__all__ = ["parse_key_argument", "resolve_key"]


def parse_key_argument(text: str | None) -> ast.expr | None:
    """Parse the argument of a ``from_env(...)`` pragma.

    Returns None when there is no argument or it is blank, so the
    declared name is used as the key.

    Raises:
        KeyResolutionError: If the argument is not a valid expression.
    """
    if text is None or not text.strip():
        return None
    try:
        tree = ast.parse(text.strip(), mode="eval")
    except SyntaxError as exc:
        raise KeyResolutionError(
            f"pragma argument {text!r} is not a valid expression"
        ) from exc
    return tree.body


def resolve_key(explicit_arg: ast.AST | None, declared_name: str) -> str:
    """Return the override key for a declaration.

    Args:
        explicit_arg: Expression given as pragma argument, if any.
        declared_name: Identifier of the declaration.

    Raises:
        KeyResolutionError: If the explicit argument does not reduce to a
            non-empty string literal.
    """
    if explicit_arg is None:
        return declared_name
    return _key_from_expr(explicit_arg)


def _key_from_expr(node: ast.AST) -> str:
    # Parentheses are folded by the parser, only container nodes remain
    if isinstance(node, ast.Expression):
        return _key_from_expr(node.body)
    if isinstance(node, ast.Expr):
        return _key_from_expr(node.value)
    if isinstance(node, ast.Constant):
        if isinstance(node.value, str) and node.value:
            return node.value
        raise KeyResolutionError(
            f"pragma argument {ast.unparse(node)} is not a valid "
            f"string literal"
        )
    raise KeyResolutionError(
        f"pragma argument {ast.unparse(node)} is not a valid string "
        f"literal expression"
    )
