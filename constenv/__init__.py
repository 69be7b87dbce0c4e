# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Override literal constants from the environment at build time."""

from .declarations import (
    Declaration,
    DeclarationShape,
    find_declarations,
    rewrite_declaration,
)
from .exceptions import (
    DeclarationError,
    KeyResolutionError,
    LocatedError,
    OverrideError,
    UnsupportedLiteralError,
    ValueParseError,
)
from .keys import parse_key_argument, resolve_key
from .literals import (
    ConstantLiteral,
    LiteralExpr,
    LiteralKind,
    NegatedLiteral,
    classify,
    rewrite,
)
from .markers import Byte, Char
from .providers import (
    EnvironmentProvider,
    FixedProvider,
    FixedProviderBuilder,
    ValueProvider,
)
from .transformer import ModuleRewriter, from_env, transform_source

__all__ = [
    "Byte",
    "Char",
    "ConstantLiteral",
    "Declaration",
    "DeclarationError",
    "DeclarationShape",
    "EnvironmentProvider",
    "FixedProvider",
    "FixedProviderBuilder",
    "KeyResolutionError",
    "LiteralExpr",
    "LiteralKind",
    "LocatedError",
    "ModuleRewriter",
    "NegatedLiteral",
    "OverrideError",
    "UnsupportedLiteralError",
    "ValueParseError",
    "ValueProvider",
    "classify",
    "find_declarations",
    "from_env",
    "parse_key_argument",
    "resolve_key",
    "rewrite",
    "rewrite_declaration",
    "transform_source",
]
