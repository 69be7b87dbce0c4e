# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Exception classes for constenv.

Every failure in constenv aborts the build: a malformed override must
never silently degrade the value of a constant. None of these exceptions
is caught inside the library.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from constenv.literals import LiteralKind


class OverrideError(ValueError):
    """Base class for all constenv build-time errors."""


class LocatedError(OverrideError):
    """An error that can be tied to a declaration once it is known.

    The declaration name and the line of its statement are prefixed to
    the message when set.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        lineno: int | None = None,
    ) -> None:
        self.message = message
        self.name = name
        self.lineno = lineno
        if name is not None:
            message = f"{name}: {message}"
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)

    def located(self, name: str | None, lineno: int | None) -> Self:
        """Return a copy of this error tied to a declaration."""
        return type(self)(self.message, name=name, lineno=lineno)


class KeyResolutionError(LocatedError):
    """Raised when a pragma argument is not a string literal.

    The key must be statically known, so names, calls, f-strings, any
    other expression shape and malformed pragmas are rejected.
    """


class UnsupportedLiteralError(LocatedError):
    """Raised when a declaration initializer is not a supported literal."""


class DeclarationError(OverrideError):
    """Raised when a pragma is attached to something that is not a
    single-name assignment with a value.
    """

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class ValueParseError(OverrideError):
    """Raised when an override value cannot be parsed as the literal kind
    of the original declaration.

    The expected kind, the offending value and, once known, the
    declaration name are kept as attributes so callers can report them.
    """

    def __init__(
        self,
        kind: LiteralKind,
        raw_value: str,
        name: str | None = None,
        reason: str | None = None,
    ) -> None:
        self.kind = kind
        self.raw_value = raw_value
        self.name = name
        self.reason = reason
        message = f"{raw_value!r} is not a valid {kind.label} literal"
        if name is not None:
            message = f"{name}: {message}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def with_name(self, name: str) -> ValueParseError:
        """Return a copy of this error that names the declaration."""
        return ValueParseError(self.kind, self.raw_value, name, self.reason)
