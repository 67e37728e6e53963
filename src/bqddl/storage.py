"""
Storage layer for reading bqddl model and delta files.
"""

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import ModelFileError
from .models import DeltaFile, ModelFile

DocumentT = TypeVar("DocumentT", bound=BaseModel)


def read_model(path: Path) -> ModelFile:
    """Read a schema model JSON file"""
    return _read_document(path, ModelFile)


def read_delta(path: Path) -> DeltaFile:
    """Read a delta JSON file"""
    return _read_document(path, DeltaFile)


def _read_document(path: Path, document: type[DocumentT]) -> DocumentT:
    if not path.exists():
        raise ModelFileError(path, "file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ModelFileError(path, f"invalid JSON ({e})") from e

    try:
        return document.model_validate(data)
    except ValidationError as e:
        raise ModelFileError(path, str(e)) from e
