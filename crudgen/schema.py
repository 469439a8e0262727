# File: crudgen/schema.py
"""
crudgen - Schema Introspection & Mapping
========================================
Reads table metadata from a live database through SQLAlchemy's inspector
and maps the column list onto the variables the model template consumes:

    * ``fields``       every non-primary-key column, in table order
    * ``text_fields``  string-typed fields (candidates for i18n)
    * ``field_types``  NgRest attribute type hint per field
    * ``properties``   every column (primary keys included) with its type

Validation rules and attribute labels are derived from the same columns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import inspect, types as sa_types
from sqlalchemy.engine import Engine

from crudgen.models import ColumnInfo, ColumnType, TableSchema
from crudgen.utils import camel2words, php_quote

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.schema")


# ---------------------------------------------------------------------------
# Type tables
# ---------------------------------------------------------------------------

# Order matters: subclasses (Text < String, BigInteger < Integer,
# Float < Numeric, TIMESTAMP < DateTime) must be tested first.
_SA_TYPE_MAP: Tuple[Tuple[type, ColumnType], ...] = (
    (sa_types.Boolean, ColumnType.BOOLEAN),
    (sa_types.Text, ColumnType.TEXT),
    (sa_types.Enum, ColumnType.STRING),
    (sa_types.CHAR, ColumnType.CHAR),
    (sa_types.String, ColumnType.STRING),
    (sa_types.SmallInteger, ColumnType.SMALLINT),
    (sa_types.BigInteger, ColumnType.BIGINT),
    (sa_types.Integer, ColumnType.INTEGER),
    (sa_types.Double, ColumnType.DOUBLE),
    (sa_types.Float, ColumnType.FLOAT),
    (sa_types.Numeric, ColumnType.DECIMAL),
    (sa_types.TIMESTAMP, ColumnType.TIMESTAMP),
    (sa_types.DateTime, ColumnType.DATETIME),
    (sa_types.Date, ColumnType.DATE),
    (sa_types.Time, ColumnType.TIME),
    (sa_types.LargeBinary, ColumnType.BINARY),
    (sa_types.BINARY, ColumnType.BINARY),
    (sa_types.VARBINARY, ColumnType.BINARY),
    (sa_types.JSON, ColumnType.JSON),
)

STRING_TYPES: frozenset = frozenset({ColumnType.STRING.value, ColumnType.CHAR.value})

# NgRest attribute type per column type; types missing here get no hint.
FIELD_TYPE_HINTS: Dict[str, str] = {
    "string": "text",
    "text": "textarea",
    "integer": "number",
    "bigint": "number",
    "smallint": "number",
    "decimal": "decimal",
    "boolean": "toggleStatus",
}

_INTEGER_TYPES: frozenset = frozenset({"tinyint", "smallint", "integer", "bigint"})
_NUMBER_TYPES: frozenset = frozenset({"float", "double", "decimal", "money"})
_SAFE_TYPES: frozenset = frozenset({"date", "time", "datetime", "timestamp"})


def normalize_type(sa_type: Any) -> ColumnType:
    """
    Map a reflected SQLAlchemy type instance onto a ``ColumnType``.

    MySQL's ``TINYINT(1)`` is the conventional boolean column and is reported
    as such; anything unrecognised falls back to ``string``.
    """
    if type(sa_type).__name__ == "TINYINT":
        if getattr(sa_type, "display_width", None) == 1:
            return ColumnType.BOOLEAN
        return ColumnType.TINYINT

    for sa_class, column_type in _SA_TYPE_MAP:
        if isinstance(sa_type, sa_class):
            return column_type

    logger.debug("Unmapped column type %r, treating as string.", sa_type)
    return ColumnType.STRING


# ---------------------------------------------------------------------------
# Schema inspector
# ---------------------------------------------------------------------------


class SchemaInspector:
    """
    Live view of the connected database.

    Usage::

        inspector = SchemaInspector(create_engine(url))
        if "cms_navitem" in inspector.table_names():
            schema = inspector.get_table_schema("cms_navitem")
    """

    def __init__(self, engine: Engine) -> None:
        self._engine: Engine = engine

    def table_names(self) -> List[str]:
        """Return the names of all tables currently in the database."""
        names: List[str] = list(inspect(self._engine).get_table_names())
        logger.debug("Database reports %d tables.", len(names))
        return names

    def get_table_schema(self, table_name: str) -> TableSchema:
        """
        Read the column list of *table_name*.

        Raises:
            LookupError: If the table does not exist.
        """
        inspector = inspect(self._engine)
        if not inspector.has_table(table_name):
            raise LookupError(f"Table '{table_name}' does not exist.")

        pk_columns: List[str] = list(
            inspector.get_pk_constraint(table_name).get("constrained_columns") or []
        )
        columns: List[ColumnInfo] = []

        for raw in inspector.get_columns(table_name):
            column_type: ColumnType = normalize_type(raw["type"])
            is_pk: bool = raw["name"] in pk_columns
            autoincrement: bool = raw.get("autoincrement") is True or (
                is_pk
                and len(pk_columns) == 1
                and column_type.value in _INTEGER_TYPES
            )
            size: Optional[int] = getattr(raw["type"], "length", None) or None
            columns.append(
                ColumnInfo(
                    name=raw["name"],
                    type=column_type,
                    is_primary_key=is_pk,
                    allow_null=bool(raw.get("nullable", True)) and not is_pk,
                    size=size,
                    default=raw.get("default"),
                    autoincrement=autoincrement,
                    comment=raw.get("comment"),
                )
            )

        logger.info(
            "Read schema of '%s': %d columns, primary key %s.",
            table_name,
            len(columns),
            pk_columns,
        )
        return TableSchema(name=table_name, columns=columns)


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """Template variables derived from a table's columns."""

    fields: List[str] = field(default_factory=list)
    text_fields: List[str] = field(default_factory=list)
    field_types: Dict[str, str] = field(default_factory=dict)
    properties: Dict[str, str] = field(default_factory=dict)


def map_columns(columns: Sequence[ColumnInfo]) -> FieldMapping:
    """
    Partition *columns* into fields, text fields and field-type hints.

    Primary keys are recorded in ``properties`` only.
    """
    fields: List[str] = []
    text_fields: List[str] = []
    field_types: Dict[str, str] = {}
    properties: Dict[str, str] = {}

    for column in columns:
        properties[column.name] = column.type
        if column.is_primary_key:
            continue

        fields.append(column.name)
        if column.type in STRING_TYPES:
            text_fields.append(column.name)

        hint: Optional[str] = FIELD_TYPE_HINTS.get(column.type)
        if hint is not None:
            field_types[column.name] = hint

    return FieldMapping(
        fields=fields,
        text_fields=text_fields,
        field_types=field_types,
        properties=properties,
    )


def _php_list(names: Sequence[str]) -> str:
    return "[" + ", ".join(php_quote(n) for n in names) + "]"


def generate_rules(columns: Sequence[ColumnInfo]) -> List[str]:
    """
    Build model validation rules as PHP array literals.

    Columns are grouped per validator; sized string columns are grouped by
    their maximum length. Autoincrement columns get no rule at all.
    """
    types: Dict[str, List[str]] = {}
    lengths: Dict[int, List[str]] = {}

    for column in columns:
        if column.autoincrement:
            continue
        if not column.allow_null and column.default is None:
            types.setdefault("required", []).append(column.name)

        if column.type in _INTEGER_TYPES:
            types.setdefault("integer", []).append(column.name)
        elif column.type == ColumnType.BOOLEAN.value:
            types.setdefault("boolean", []).append(column.name)
        elif column.type in _NUMBER_TYPES:
            types.setdefault("number", []).append(column.name)
        elif column.type in _SAFE_TYPES:
            types.setdefault("safe", []).append(column.name)
        elif column.size:
            lengths.setdefault(column.size, []).append(column.name)
        else:
            types.setdefault("string", []).append(column.name)

    rules: List[str] = [
        f"[{_php_list(names)}, '{validator}']" for validator, names in types.items()
    ]
    rules.extend(
        f"[{_php_list(names)}, 'string', 'max' => {length}]"
        for length, names in lengths.items()
    )
    return rules


def generate_labels(columns: Sequence[ColumnInfo]) -> Dict[str, str]:
    """Attribute labels: ``id`` becomes ``ID``, ``user_id`` becomes ``User ID``."""
    labels: Dict[str, str] = {}
    for column in columns:
        if column.name.lower() == "id":
            labels[column.name] = "ID"
            continue
        label: str = camel2words(column.name)
        if label.lower().endswith(" id"):
            label = label[:-3] + " ID"
        labels[column.name] = label
    return labels


__all__: List[str] = [
    "FIELD_TYPE_HINTS",
    "STRING_TYPES",
    "FieldMapping",
    "SchemaInspector",
    "generate_labels",
    "generate_rules",
    "map_columns",
    "normalize_type",
]
