# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Command-line interface for constenv."""

import argparse
import sys
from importlib.metadata import version
from pathlib import Path

from constenv.exceptions import OverrideError
from constenv.providers import (
    EnvironmentProvider,
    FixedProvider,
    ValueProvider,
)
from constenv.transformer import transform_source


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="constenv",
        description="Override literal constants from the environment",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"constenv {version('constenv')}",
    )
    parser.add_argument(
        "source",
        help="Python module to transform, or '-' to read stdin",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="write the result here instead of stdout",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="pairs",
        metavar="KEY=VALUE",
        help="use this value instead of the environment (repeatable)",
    )

    args = parser.parse_args(argv)

    provider: ValueProvider
    if args.pairs:
        try:
            provider = FixedProvider.from_pairs(args.pairs)
        except ValueError as exc:
            parser.error(str(exc))
    else:
        provider = EnvironmentProvider()

    if args.source == "-":
        source = sys.stdin.read()
        filename = "<stdin>"
    else:
        source = Path(args.source).read_text(encoding="utf-8")
        filename = args.source

    try:
        result = transform_source(source, provider, filename=filename)
    except (OverrideError, SyntaxError) as exc:
        print(f"constenv: error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
