"""Canonical Python source rendering.

Formatting is delegated to black. Comments, shebangs and encoding cookies
survive; spacing, quoting and blank lines are normalised.
"""

import black


class ReformatError(Exception):
    """The source text is not valid Python"""


def reformat(source: str, filename: str = "<unknown>") -> str:
    """Return the canonical form of ``source`` or raise ReformatError."""
    mode = black.Mode(is_pyi=filename.endswith(".pyi"))
    try:
        return black.format_str(source, mode=mode)
    except black.InvalidInput as e:
        raise ReformatError(str(e)) from e
