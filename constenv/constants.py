# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

"""Shared constants for the constenv package.

This module centralizes the pragma syntax and the marker names that the
rest of the codebase relies on.
"""

# Pragma constants
PRAGMA_NAME = "from_env"
"""Name of the comment pragma that marks a declaration for override."""

PRAGMA_PATTERN = r"^#\s*from_env\b(?P<rest>.*)$"
"""Regex pattern for detecting pragma comments.

Any comment starting with the pragma name is a pragma. What follows the
name (group ``rest``) must be empty or a parenthesized argument,
optionally followed by another comment:

- ``# from_env`` (the declared name is the key)
- ``# from_env()`` (same as above)
- ``# from_env("KEY")`` (the key is ``KEY``)
- ``# from_env("KEY")  # note``
"""

# Annotation marker constants
FINAL_ANNOTATION = "Final"
"""Annotation name that makes a declaration a constant."""

CHAR_ANNOTATION = "Char"
"""Annotation name that narrows a ``str`` literal to a single character."""

BYTE_ANNOTATION = "Byte"
"""Annotation name that narrows a ``bytes`` literal to a single byte."""

# Override value constants
TRUE_VALUE = "true"
"""Only accepted spelling for a true boolean override."""

FALSE_VALUE = "false"
"""Only accepted spelling for a false boolean override."""

NEGATIVE_SIGN = "-"
"""Sign an override must carry when the original literal is negated."""
