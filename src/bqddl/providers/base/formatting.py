"""
Formatting primitives shared by DDL providers

Pure helpers for presence checks, name qualification, indentation,
string escaping and commenting out deactivated fragments.
"""

from collections.abc import Mapping
from typing import Any

BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"
QUALIFIER_SEPARATOR = "."


def is_present(value: Any) -> bool:
    """
    Check whether a value counts as "set".

    None, blank strings and empty collections are absent. Booleans and
    numbers are always present, including False and 0.

    Example:
        >>> is_present("")
        False
        >>> is_present(False)
        True
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) > 0
    return True


def get_full_name(*segments: str | None, separator: str = QUALIFIER_SEPARATOR) -> str:
    """
    Build a qualified name from the present segments only.

    Example:
        >>> get_full_name("proj", "", "orders")
        'proj.orders'
    """
    return separator.join(segment for segment in segments if is_present(segment))


def indent(text: str, prefix: str = "  ") -> str:
    """Indent every non-empty line of text"""
    return "\n".join(f"{prefix}{line}" if line else line for line in text.split("\n"))


def escape_string(value: str) -> str:
    """Escape a value for use inside a double-quoted string literal"""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def comment_if_deactivated(text: str, is_activated: bool, inline: bool = False) -> str:
    """
    Wrap text in a block comment when its owning element is deactivated.

    Args:
        text: Generated fragment
        is_activated: Activation flag of the element the fragment belongs to
        inline: Wrap on the same line (for suffixes appended to live text)
            instead of putting the delimiters on their own lines

    Returns:
        The fragment unchanged, or commented out
    """
    if is_activated or not text:
        return text
    if inline:
        return f"{BLOCK_COMMENT_START} {text} {BLOCK_COMMENT_END}"
    return f"{BLOCK_COMMENT_START}\n{text}\n{BLOCK_COMMENT_END}"
