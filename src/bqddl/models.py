"""
Pydantic models for bqddl input files

Model and delta documents keep the modeling tool's raw camelCase objects;
hydration turns them into provider spec records.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RawObject = dict[str, Any]


class FileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ModelFile(FileModel):
    """Full schema model used for create scripts"""

    model_data: list[RawObject] = Field(default_factory=list, alias="modelData")
    containers: list[RawObject] = []  # Each with optional `entities` and `views`


class DeltaSection(FileModel):
    """Objects added, deleted or modified since the previous model version"""

    added: list[RawObject] = []
    deleted: list[RawObject] = []
    modified: list[RawObject] = []


class ColumnDeltaSection(DeltaSection):
    type_changed: list[RawObject] = Field(default_factory=list, alias="typeChanged")
    dropped_not_null: list[RawObject] = Field(default_factory=list, alias="droppedNotNull")
    description_changed: list[RawObject] = Field(
        default_factory=list, alias="descriptionChanged"
    )


class DeltaFile(FileModel):
    """Precomputed delta used for alter scripts"""

    model_data: list[RawObject] = Field(default_factory=list, alias="modelData")
    containers: DeltaSection = Field(default_factory=DeltaSection)
    entities: DeltaSection = Field(default_factory=DeltaSection)
    columns: ColumnDeltaSection = Field(default_factory=ColumnDeltaSection)
    views: DeltaSection = Field(default_factory=DeltaSection)
