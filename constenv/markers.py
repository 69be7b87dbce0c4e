# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Annotation markers for single-unit literals.

Python has no character or byte literal. Annotating a declaration with
one of these aliases tells constenv that the override must be exactly
one character or one byte::

    SEPARATOR: Final[Char] = ","  # from_env
    TERMINATOR: Byte = b"\\n"  # from_env

They are plain aliases, so type checkers see ``str`` and ``bytes``.
"""

from typing import TypeAlias

__all__ = ["Byte", "Char"]

Char: TypeAlias = str
Byte: TypeAlias = bytes
