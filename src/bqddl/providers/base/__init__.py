"""
Base Provider Module

Exports base classes, helpers and exceptions shared by providers.
"""

from bqddl.exceptions import BqDDLError, HydrationError, ModelFileError, UnsupportedTypeError

from .ddl_provider import DDLProvider
from .formatting import comment_if_deactivated, escape_string, get_full_name, indent, is_present

__all__ = [
    "DDLProvider",
    "BqDDLError",
    "HydrationError",
    "ModelFileError",
    "UnsupportedTypeError",
    "comment_if_deactivated",
    "escape_string",
    "get_full_name",
    "indent",
    "is_present",
]
