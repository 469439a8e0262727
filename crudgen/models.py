# File: crudgen/models.py
"""
crudgen - Core Data Models
==========================
Pydantic V2 models for the modules a CRUD can be generated into, the
introspected table schema, the generator configuration and the per-run
generation request.

Everything here is read-only once built: modules come from the config file,
columns from schema introspection, and a ``GenerationRequest`` is frozen as
soon as the interactive flow has collected its values.
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from crudgen.utils import camel2id, camelize

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.models")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ColumnType(str, Enum):
    """Abstract column types a table schema is normalised into."""

    # String
    STRING = "string"
    TEXT = "text"
    CHAR = "char"

    # Numeric
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    MONEY = "money"
    BOOLEAN = "boolean"

    # Date / Time
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"

    # Special
    BINARY = "binary"
    JSON = "json"


# PHP type used in the generated ``@property`` docblock
_PHP_TYPE_MAP: Dict[str, str] = {
    "string": "string",
    "text": "string",
    "char": "string",
    "tinyint": "integer",
    "smallint": "integer",
    "integer": "integer",
    "bigint": "integer",
    "float": "float",
    "double": "float",
    "decimal": "string",
    "money": "string",
    "boolean": "integer",
    "date": "string",
    "time": "string",
    "datetime": "string",
    "timestamp": "string",
    "binary": "resource",
    "json": "array",
}


def php_type_for(column_type: str) -> str:
    """Return the PHP docblock type for an abstract column type."""
    return _PHP_TYPE_MAP.get(column_type, "string")


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    use_enum_values=True,
    frozen=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Modules
# ---------------------------------------------------------------------------


class ModuleInfo(BaseModel):
    """
    A module of the host application that CRUD files can be written into.

    Only ``is_admin`` and ``is_core_module`` take part in module selection;
    ``base_path`` and ``namespace`` decide where files land and what the
    generated classes are called.
    """

    model_config = _FROZEN_CONFIG

    id: str = Field(..., min_length=1, description="Module id, e.g. 'cmsadmin'.")
    base_path: Path = Field(..., description="Directory of the module on disk.")
    namespace: str = Field(
        default="",
        description="Namespace of the module; defaults to 'app\\modules\\<id>'.",
    )
    is_admin: bool = Field(default=False, description="Is this an admin module?")
    is_core_module: bool = Field(
        default=False, description="Is this a module shipped by the framework?"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_namespace(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("namespace") and data.get("id"):
            data = dict(data)
            data["namespace"] = f"app\\modules\\{data['id']}"
        return data

    def __repr__(self) -> str:
        return f"<ModuleInfo {self.id} admin={self.is_admin} core={self.is_core_module}>"


# ---------------------------------------------------------------------------
# Table schema
# ---------------------------------------------------------------------------


class ColumnInfo(BaseModel):
    """A single column as reported by schema introspection."""

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1)
    type: ColumnType
    is_primary_key: bool = False
    allow_null: bool = True
    size: Optional[int] = Field(default=None, ge=1)
    default: Optional[Any] = None
    autoincrement: bool = False
    comment: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def php_type(self) -> str:
        return php_type_for(self.type)

    def __repr__(self) -> str:
        pk: str = " PK" if self.is_primary_key else ""
        return f"<ColumnInfo {self.name}: {self.type}{pk}>"


class TableSchema(BaseModel):
    """
    Ordered column list of one database table.

    Fetched once per run and passed down to the mapper and templates.
    """

    model_config = _FROZEN_CONFIG

    name: str = Field(..., min_length=1)
    columns: List[ColumnInfo] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def primary_keys(self) -> List[str]:
        return [c.name for c in self.columns if c.is_primary_key]

    @computed_field  # type: ignore[misc]
    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def get_column(self, name: str) -> Optional[ColumnInfo]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @field_validator("columns")
    @classmethod
    def _unique_column_names(cls, v: List[ColumnInfo]) -> List[ColumnInfo]:
        names: List[str] = [c.name for c in v]
        if len(names) != len(set(names)):
            dupes: List[str] = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate column names: {dupes}")
        return v


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class GeneratorConfig(BaseModel):
    """Settings loaded from the config file and CLI overrides."""

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )

    database_url: str = Field(
        default="sqlite:///app.db",
        description="SQLAlchemy database URL the tables are read from.",
    )
    framework_version: str = Field(
        default="1.0.0",
        description="Framework version written into generated file headers.",
    )
    encoding: str = Field(default="utf-8", description="Encoding of written files.")
    modules: List[ModuleInfo] = Field(default_factory=list)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {v!r}") from exc
        return v

    @field_validator("modules")
    @classmethod
    def _unique_module_ids(cls, v: List[ModuleInfo]) -> List[ModuleInfo]:
        ids: List[str] = [m.id for m in v]
        if len(ids) != len(set(ids)):
            dupes: List[str] = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"Duplicate module ids: {dupes}")
        return v

    def get_module(self, module_id: str) -> Optional[ModuleInfo]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None


# ---------------------------------------------------------------------------
# Generation request
# ---------------------------------------------------------------------------


class GenerationRequest(BaseModel):
    """Everything the emit step needs; immutable once the prompts are done."""

    model_config = _FROZEN_CONFIG

    module: ModuleInfo
    model_name: str = Field(..., min_length=1)
    api_endpoint: str = Field(..., min_length=1)
    db_table_name: str = Field(..., min_length=1)
    enable_i18n: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def class_name(self) -> str:
        return camelize(self.model_name)

    @property
    def namespace(self) -> str:
        return self.module.namespace

    @property
    def model_namespace(self) -> str:
        return f"{self.namespace}\\models\\{self.class_name}"

    @property
    def api_class_path(self) -> str:
        return f"{self.namespace}\\apis\\{self.class_name}Controller"

    @property
    def controller_route(self) -> str:
        """Route like ``module/controller/action`` for the build summary."""
        return f"{self.module.id.lower()}/{camel2id(self.class_name)}/index"


# ---------------------------------------------------------------------------
# Emitted file
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EmittedFile:
    """One rendered file waiting to be written."""

    key: str
    path: Path
    file_name: str
    content: str

    @property
    def target(self) -> Path:
        return self.path / self.file_name


__all__: List[str] = [
    "ColumnType",
    "ColumnInfo",
    "TableSchema",
    "ModuleInfo",
    "GeneratorConfig",
    "GenerationRequest",
    "EmittedFile",
    "php_type_for",
]
