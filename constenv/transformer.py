# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC


"""Source transformation.

Rewritten literals are spliced back into the original text, so every
byte outside an overridden literal (comments, formatting, other code)
is kept as written.
"""

from __future__ import annotations

import ast
import logging
from functools import cached_property
from typing import cast

from constenv.declarations import (
    Declaration,
    find_declarations,
    rewrite_declaration,
)
from constenv.exceptions import DeclarationError
from constenv.keys import parse_key_argument
from constenv.providers import EnvironmentProvider, ValueProvider

__all__ = ["ModuleRewriter", "from_env", "transform_source"]

logger = logging.getLogger(__name__)


class ModuleRewriter:
    """Rewrites the marked declarations of a Python module."""

    def __init__(self, source: str, *, filename: str = "<unknown>") -> None:
        self.source = source
        self.filename = filename

    @cached_property
    def declarations(self) -> list[Declaration]:
        return find_declarations(self.source, self.filename)

    def rewritten_declarations(
        self, provider: ValueProvider
    ) -> list[Declaration]:
        """Return each declaration, rewritten when an override exists."""
        return [
            rewrite_declaration(declaration, provider)
            for declaration in self.declarations
        ]

    def rewrite(self, provider: ValueProvider) -> str:
        """Return the module source with all overrides applied."""
        changes = [
            (original, rewritten)
            for original, rewritten in zip(
                self.declarations, self.rewritten_declarations(provider)
            )
            if rewritten is not original
        ]
        logger.debug(
            f"{self.filename}: {len(changes)} of "
            f"{len(self.declarations)} declarations overridden"
        )
        return _splice(self.source, changes)


def _splice(
    source: str, changes: list[tuple[Declaration, Declaration]]
) -> str:
    """Replace the initializer text of each changed declaration.

    `ast` columns are UTF-8 byte offsets, so the work is done on bytes.
    """
    data = source.encode("utf-8")
    line_starts = [0]
    for line in data.splitlines(keepends=True):
        line_starts.append(line_starts[-1] + len(line))

    edits: list[tuple[int, int, bytes]] = []
    for original, rewritten in changes:
        node = original.value
        end_lineno = cast(int, node.end_lineno)
        end_col_offset = cast(int, node.end_col_offset)
        start = line_starts[node.lineno - 1] + node.col_offset
        end = line_starts[end_lineno - 1] + end_col_offset
        edits.append((start, end, ast.unparse(rewritten.value).encode()))

    for start, end, text in sorted(edits, reverse=True):
        data = data[:start] + text + data[end:]
    return data.decode("utf-8")


def transform_source(
    source: str,
    provider: ValueProvider | None = None,
    *,
    filename: str = "<unknown>",
) -> str:
    """Apply overrides to every marked declaration of `source`.

    Args:
        source: Python module source.
        provider: Where override values come from. Defaults to the
            process environment.
        filename: Name used in syntax error messages.

    Returns:
        The rewritten source. It equals `source` when no override applies.
    """
    if provider is None:
        provider = EnvironmentProvider()
    return ModuleRewriter(source, filename=filename).rewrite(provider)


def from_env(
    attr: str | None, item: str, provider: ValueProvider | None = None
) -> str:
    """Rewrite a single declaration given as source text.

    Args:
        attr: Pragma argument text, e.g. ``'"APP_NAME"'``; None or blank
            to use the declared name as key.
        item: Source of exactly one declaration, e.g. ``"LIMIT: int = 10"``.
        provider: Where override values come from. Defaults to the
            process environment.

    Returns:
        `item` unchanged when there is no override, otherwise the
        declaration with its literal replaced.
    """
    if provider is None:
        provider = EnvironmentProvider()
    tree = ast.parse(item)
    if len(tree.body) != 1:
        raise DeclarationError(
            f"expected a single declaration, found {len(tree.body)} "
            f"statements"
        )
    declaration = Declaration.from_statement(
        tree.body[0], parse_key_argument(attr)
    )
    rewritten = rewrite_declaration(declaration, provider)
    if rewritten is declaration:
        return item
    return _splice(item, [(declaration, rewritten)])
