"""
Exception taxonomy for DDL generation
"""

from pathlib import Path


class BqDDLError(Exception):
    """Base exception for DDL generation errors"""


class UnsupportedTypeError(BqDDLError):
    """Raised when a column type tag has no dialect equivalent"""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unsupported column type: '{type_name}'")


class HydrationError(BqDDLError):
    """Raised when raw model data cannot be mapped to a spec record"""

    def __init__(self, kind: str, name: str | None, reason: str):
        self.kind = kind
        self.name = name
        label = f"{kind} '{name}'" if name else kind
        super().__init__(f"Invalid {label}: {reason}")


class ModelFileError(BqDDLError):
    """Raised when a model or delta file cannot be read"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")
