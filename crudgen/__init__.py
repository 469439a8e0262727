# File: crudgen/__init__.py
"""
crudgen — NgRest CRUD Generator
===============================

Interactive generator that reads an existing database table and writes the
API controller, admin controller and model of an NgRest CRUD into a module.

Architecture overview::

    ┌──────────────┐     ┌───────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ CrudGenerator │────▶│ TemplateGenerator│
    │   (cli.py)   │     │ (generator.py)│     │  (templates.py)  │
    └──────────────┘     └───────┬───────┘     └──────────────────┘
                                 │
                ┌────────────┬───┴────────┬────────────┐
                ▼            ▼            ▼            ▼
           ┌─────────┐ ┌──────────┐ ┌──────────┐ ┌───────────┐
           │selector │ │  schema  │ │validators│ │ exporters │
           └─────────┘ └──────────┘ └──────────┘ └───────────┘

Usage::

    # As a library
    from crudgen import CrudGenerator, SchemaInspector, Console, load_config
    config = load_config(Path("crudgen.yaml"))
    CrudGenerator(config, SchemaInspector(engine), Console()).run()

    # From the command line
    crudgen -c crudgen.yaml --module cmsadmin
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from crudgen.models import (
    ColumnInfo,
    ColumnType,
    EmittedFile,
    GenerationRequest,
    GeneratorConfig,
    ModuleInfo,
    TableSchema,
)
from crudgen.utils import (
    camel2id,
    camel2words,
    camelize,
    create_class_name,
    humanize,
    suggest_api_endpoint,
    suggest_table_name,
)
from crudgen.console import Console
from crudgen.schema import FieldMapping, SchemaInspector, map_columns
from crudgen.selector import select_module, select_module_type
from crudgen.templates import TEMPLATES, TemplateGenerator
from crudgen.validators import ValidationResult, validate_presets
from crudgen.exporters import EmitResult, FileEmitter
from crudgen.generator import CrudGenerator, GenerationReport, load_config

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestrator
    "CrudGenerator",
    "GenerationReport",
    "load_config",
    # Models
    "ColumnInfo",
    "ColumnType",
    "EmittedFile",
    "GenerationRequest",
    "GeneratorConfig",
    "ModuleInfo",
    "TableSchema",
    # Naming
    "camel2id",
    "camel2words",
    "camelize",
    "create_class_name",
    "humanize",
    "suggest_api_endpoint",
    "suggest_table_name",
    # Collaborators
    "Console",
    "FieldMapping",
    "SchemaInspector",
    "map_columns",
    "select_module",
    "select_module_type",
    "TEMPLATES",
    "TemplateGenerator",
    "ValidationResult",
    "validate_presets",
    "EmitResult",
    "FileEmitter",
]
