"""
Generator configuration
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ModelFileError


class GeneratorConfig(BaseModel):
    """Formatting settings for generated DDL"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    indent: str = "  "  # Indentation of nested clauses
    quote_identifiers: bool = Field(False, alias="quoteIdentifiers")
    statement_terminator: str = Field(";", alias="statementTerminator")
    statement_separator: str = Field("\n\n", alias="statementSeparator")

    @classmethod
    def from_file(cls, path: Path) -> "GeneratorConfig":
        """Load configuration from a JSON file"""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ModelFileError(path, str(e)) from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ModelFileError(path, f"invalid configuration: {e}") from e
