# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Value providers.

A value provider answers a single question: which override string, if
any, is configured for a key. The rewriting engine never reads the
process environment itself; it only talks to a provider.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable

__all__ = [
    "ValueProvider",
    "EnvironmentProvider",
    "FixedProvider",
    "FixedProviderBuilder",
]


@runtime_checkable
class ValueProvider(Protocol):
    """Protocol for read-only key/value lookups."""

    def lookup(self, key: str) -> str | None: ...


class EnvironmentProvider:
    """Provider backed by the live process environment.

    Every lookup re-reads the environment. Values that are not valid
    text are reported as absent.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: Mapping[str, str] = (
            os.environ if environ is None else environ
        )

    def lookup(self, key: str) -> str | None:
        value = self._environ.get(key)
        if value is None:
            return None
        try:
            # Undecodable bytes come back as lone surrogates
            value.encode("utf-8")
        except UnicodeEncodeError:
            return None
        return value


class FixedProvider:
    """Provider backed by an immutable in-memory table.

    Example:
        >>> provider = FixedProvider.builder().set("LIMIT", "99").build()
        >>> provider.lookup("LIMIT")
        '99'
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    @staticmethod
    def builder() -> FixedProviderBuilder:
        return FixedProviderBuilder()

    @classmethod
    def from_pairs(cls, pairs: Iterable[str]) -> FixedProvider:
        """Build a provider from ``KEY=VALUE`` strings.

        The value is everything after the first ``=`` and may be empty.

        Raises:
            ValueError: If a pair has no ``=`` or an empty key.
        """
        builder = cls.builder()
        for pair in pairs:
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise ValueError(
                    f"invalid pair '{pair}': expected 'KEY=VALUE'"
                )
            builder = builder.set(key, value)
        return builder.build()

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._values)!r})"


class FixedProviderBuilder:
    """Accumulates entries for a `FixedProvider`."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> FixedProviderBuilder:
        """Add or replace an entry and return the builder for chaining."""
        self._values[key] = value
        return self

    def build(self) -> FixedProvider:
        return FixedProvider(self._values)
