# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Tests for literal classification and rewriting."""

import ast

import pytest

from constenv import (
    ConstantLiteral,
    LiteralKind,
    NegatedLiteral,
    UnsupportedLiteralError,
    ValueParseError,
    classify,
    rewrite,
)


def _parse(source: str) -> tuple[ast.expr, ast.expr | None]:
    """Return the value and annotation of a one-line declaration."""
    stmt = ast.parse(source).body[0]
    if isinstance(stmt, ast.AnnAssign):
        assert stmt.value is not None
        return stmt.value, stmt.annotation
    assert isinstance(stmt, ast.Assign)
    return stmt.value, None


def _rewrite(source: str, raw_value: str) -> object:
    value, annotation = _parse(source)
    return rewrite(classify(value, annotation), raw_value).value


@pytest.mark.parametrize(
    ("source", "kind"),
    [
        ('NAME: str = "default"', LiteralKind.STRING),
        ('DATA = b"abc"', LiteralKind.BYTE_STRING),
        ('END: Byte = b"x"', LiteralKind.BYTE),
        ('END: Final[Byte] = b"x"', LiteralKind.BYTE),
        ('SEP: Char = ","', LiteralKind.CHARACTER),
        ('SEP: constenv.Char = ","', LiteralKind.CHARACTER),
        ("LIMIT: int = 10", LiteralKind.INTEGER),
        ("RATIO: float = 0.5", LiteralKind.FLOAT),
        ("DEBUG: bool = False", LiteralKind.BOOLEAN),
        ("OFFSET: int = -5", LiteralKind.INTEGER),
        ("SCALE = -1.5", LiteralKind.FLOAT),
    ],
)
def test_classify_detects_kind(source: str, kind: LiteralKind) -> None:
    value, annotation = _parse(source)
    assert classify(value, annotation).kind is kind


def test_classify_negation_is_a_wrapper() -> None:
    value, _ = _parse("OFFSET = -5")
    literal = classify(value)
    assert isinstance(literal, NegatedLiteral)
    assert isinstance(literal.operand, ConstantLiteral)
    assert literal.operand.value == 5
    assert literal.value == -5


def test_classify_char_marker_needs_str() -> None:
    """A Char annotation on an int literal does not change its kind."""
    value, annotation = _parse("X: Char = 3")
    assert classify(value, annotation).kind is LiteralKind.INTEGER


@pytest.mark.parametrize(
    "source",
    [
        "X = None",
        "X = compute()",
        "X = OTHER",
        "X = 1j",
        "X = +5",
        "X = -True",
        "X = -'a'",
        'X = f"{OTHER}"',
        "X = [1, 2]",
    ],
)
def test_classify_rejects_non_literals(source: str) -> None:
    value, annotation = _parse(source)
    with pytest.raises(UnsupportedLiteralError):
        classify(value, annotation)


def test_rewrite_string() -> None:
    assert _rewrite('NAME: str = "default"', "prod") == "prod"
    assert _rewrite('NAME: str = "default"', "") == ""
    assert _rewrite('NAME: str = "default"', "a\\nb") == "a\nb"
    assert _rewrite('NAME: str = "default"', "héllo") == "héllo"


def test_rewrite_byte_string() -> None:
    assert _rewrite('DATA = b"abc"', "xyz") == b"xyz"
    assert _rewrite('DATA = b"abc"', "\\x00\\xff") == b"\x00\xff"


def test_rewrite_string_with_line_breaks() -> None:
    source = 'CERT: str = ""'
    assert _rewrite(source, "a\nb") == "a\nb"
    assert _rewrite(source, "a\r\nb\n") == "a\r\nb\n"


def test_rewrite_byte_string_with_line_breaks() -> None:
    assert _rewrite('DATA = b""', "a\r\nb") == b"a\r\nb"


@pytest.mark.parametrize(
    "source", ['NAME: str = "default"', 'DATA = b"abc"']
)
def test_rewrite_rejects_unknown_escapes(
    source: str, recwarn: pytest.WarningsRecorder
) -> None:
    value, annotation = _parse(source)
    with pytest.raises(ValueParseError):
        rewrite(classify(value, annotation), "a\\db")
    assert len(recwarn) == 0


def test_rewrite_byte() -> None:
    assert _rewrite('END: Byte = b"x"', "y") == b"y"
    assert _rewrite('END: Byte = b"x"', "\\n") == b"\n"


def test_rewrite_character() -> None:
    assert _rewrite('SEP: Char = ","', ";") == ";"
    assert _rewrite('SEP: Char = ","', "\\t") == "\t"
    assert _rewrite('SEP: Char = ","', "é") == "é"


def test_rewrite_integer() -> None:
    assert _rewrite("LIMIT: int = 10", "99") == 99
    assert _rewrite("LIMIT: int = 10", "0x1F") == 31
    assert _rewrite("LIMIT: int = 10", "1_000") == 1000
    assert _rewrite("LIMIT: int = 10", " 42 ") == 42


def test_rewrite_float() -> None:
    assert _rewrite("RATIO: float = 0.5", "2.25") == 2.25
    assert _rewrite("RATIO: float = 0.5", "1e3") == 1000.0
    assert _rewrite("RATIO: float = 0.5", ".5") == 0.5


def test_rewrite_boolean() -> None:
    assert _rewrite("DEBUG: bool = False", "true") is True
    assert _rewrite("DEBUG: bool = True", "false") is False


@pytest.mark.parametrize(
    ("source", "raw_value"),
    [
        ("DEBUG: bool = False", "yes"),
        ("DEBUG: bool = False", "True"),
        ("DEBUG: bool = False", " true"),
        ("LIMIT: int = 10", "abc"),
        ("LIMIT: int = 10", "4.2"),
        ("LIMIT: int = 10", "1 2"),
        ("LIMIT: int = 10", ""),
        ("LIMIT: int = 10", "-42"),
        ("LIMIT: int = 10", "+42"),
        ("LIMIT: int = 10", "3j"),
        ("RATIO: float = 0.5", "3"),
        ("RATIO: float = 0.5", "inf"),
        ('NAME: str = "default"', 'say "hi"'),
        ('NAME: str = "default"', 'a" "b'),
        ('DATA = b"abc"', "é"),
        ('END: Byte = b"x"', "xy"),
        ('END: Byte = b"x"', ""),
        ('SEP: Char = ","', "ab"),
        ('SEP: Char = ","', ""),
    ],
)
def test_rewrite_rejects_mismatched_values(
    source: str, raw_value: str
) -> None:
    value, annotation = _parse(source)
    original = classify(value, annotation)
    with pytest.raises(ValueParseError) as exc_info:
        rewrite(original, raw_value)
    assert exc_info.value.kind is original.kind
    assert exc_info.value.raw_value == raw_value


def test_rewrite_error_message_is_actionable() -> None:
    value, _ = _parse("DEBUG: bool = False")
    with pytest.raises(ValueParseError) as exc_info:
        rewrite(classify(value), "yes")
    assert str(exc_info.value) == (
        "'yes' is not a valid boolean literal "
        "(expected 'true' or 'false')"
    )


def test_rewrite_keeps_unary_wrapper() -> None:
    value, _ = _parse("OFFSET: int = -5")
    original = classify(value)

    result = rewrite(original, "-42")

    assert isinstance(result, NegatedLiteral)
    assert isinstance(result.node, ast.UnaryOp)
    assert isinstance(result.node.op, ast.USub)
    assert isinstance(result.node.operand, ast.Constant)
    assert result.node.operand.value == 42
    assert result.value == -42
    assert ast.unparse(result.node) == "-42"
    # The original is untouched
    assert ast.unparse(original.node) == "-5"


def test_rewrite_negated_float() -> None:
    value, _ = _parse("SCALE = -1.5")
    result = rewrite(classify(value), "-0.25")
    assert result.kind is LiteralKind.FLOAT
    assert result.value == -0.25


def test_rewrite_negated_ignores_surrounding_whitespace() -> None:
    value, _ = _parse("OFFSET = -5")
    assert rewrite(classify(value), "  -7\n").value == -7


@pytest.mark.parametrize("raw_value", ["42", "+42", "--42", "-", "-abc"])
def test_rewrite_negated_requires_single_minus(raw_value: str) -> None:
    value, _ = _parse("OFFSET = -5")
    with pytest.raises(ValueParseError) as exc_info:
        rewrite(classify(value), raw_value)
    assert exc_info.value.raw_value == raw_value
    assert exc_info.value.kind is LiteralKind.INTEGER


def test_rewrite_double_negation() -> None:
    value, _ = _parse("X = --5")
    result = rewrite(classify(value), "--8")
    assert isinstance(result, NegatedLiteral)
    assert isinstance(result.operand, NegatedLiteral)
    assert result.value == 8


def test_rewrite_preserves_position() -> None:
    tree = ast.parse("X = 1\nLIMIT: int = 10\n")
    stmt = tree.body[1]
    assert isinstance(stmt, ast.AnnAssign) and stmt.value is not None

    result = rewrite(classify(stmt.value), "12345")

    node = result.node
    position = (node.lineno, node.col_offset, node.end_lineno)
    assert position == (2, 13, 2)
    assert node.end_col_offset == stmt.value.end_col_offset == 15


def test_rewrite_preserves_position_of_negated_operand() -> None:
    tree = ast.parse("OFFSET = -5")
    stmt = tree.body[0]
    assert isinstance(stmt, ast.Assign)
    original = classify(stmt.value)

    result = rewrite(original, "-12345")

    assert isinstance(result, NegatedLiteral)
    assert result.node.col_offset == 9
    assert result.operand.node.col_offset == 10
    assert result.operand.node.end_col_offset == 11


def test_rewrite_preserves_u_prefix() -> None:
    value, _ = _parse('NAME = u"default"')
    result = rewrite(classify(value), "prod")
    assert isinstance(result.node, ast.Constant)
    assert result.node.kind == "u"
    assert ast.unparse(result.node) == "u'prod'"


def test_rewrite_returns_new_node() -> None:
    value, _ = _parse("LIMIT = 10")
    original = classify(value)
    result = rewrite(original, "99")
    assert result.node is not original.node
    assert isinstance(value, ast.Constant) and value.value == 10


def test_kind_labels() -> None:
    assert LiteralKind.BYTE_STRING.label == "byte string"
    assert LiteralKind.INTEGER.is_numeric
    assert LiteralKind.FLOAT.is_numeric
    assert not LiteralKind.BOOLEAN.is_numeric
