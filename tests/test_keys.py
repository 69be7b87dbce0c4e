# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

import ast

import pytest

from constenv import KeyResolutionError, parse_key_argument, resolve_key


def test_resolve_key_defaults_to_declared_name() -> None:
    assert resolve_key(None, "LIMIT") == "LIMIT"


def test_resolve_key_uses_explicit_string() -> None:
    arg = parse_key_argument('"OTHER_KEY"')
    assert resolve_key(arg, "LIMIT") == "OTHER_KEY"


def test_resolve_key_through_parentheses() -> None:
    arg = parse_key_argument('((("OTHER_KEY")))')
    assert resolve_key(arg, "LIMIT") == "OTHER_KEY"


def test_resolve_key_unwraps_container_nodes() -> None:
    expression = ast.parse('"FROM_EXPRESSION"', mode="eval")
    statement = ast.parse('"FROM_STATEMENT"').body[0]
    assert resolve_key(expression, "LIMIT") == "FROM_EXPRESSION"
    assert resolve_key(statement, "LIMIT") == "FROM_STATEMENT"


def test_resolve_key_joins_implicit_concatenation() -> None:
    arg = parse_key_argument('("APP_" "LIMIT")')
    assert resolve_key(arg, "LIMIT") == "APP_LIMIT"


@pytest.mark.parametrize(
    "text",
    [
        "OTHER_KEY",
        "os.environ",
        'getenv("KEY")',
        '"A" + "B"',
        'f"KEY"',
        'b"KEY"',
        '""',
        "42",
        '("KEY",)',
    ],
)
def test_resolve_key_rejects_non_string_literals(text: str) -> None:
    arg = parse_key_argument(text)
    with pytest.raises(KeyResolutionError):
        resolve_key(arg, "LIMIT")


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_key_argument_blank(text: str | None) -> None:
    assert parse_key_argument(text) is None


def test_parse_key_argument_invalid_syntax() -> None:
    with pytest.raises(KeyResolutionError) as exc_info:
        parse_key_argument('"KEY')
    assert isinstance(exc_info.value.__cause__, SyntaxError)


def test_parse_key_argument_strips_whitespace() -> None:
    arg = parse_key_argument('  "KEY"  ')
    assert isinstance(arg, ast.Constant)
    assert arg.value == "KEY"
