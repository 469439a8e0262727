# File: crudgen/generator.py
"""
crudgen - Generator Orchestrator
================================
The interactive ``crud/create`` flow, from module selection to the build
summary::

    SelectModule -> EnterModelName -> EnterApiEndpoint
        -> SelectOrEnterTable -> ConfirmI18n -> Emit

Every step blocks on the console and is skipped when its value was given
up front. The module registry and the table schema are fetched once and
passed down explicitly.

Also home to the config loaders (JSON/YAML file -> ``GeneratorConfig``).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from crudgen.console import Console
from crudgen.exporters import EmitResult, FileEmitter
from crudgen.models import (
    EmittedFile,
    GenerationRequest,
    GeneratorConfig,
    ModuleInfo,
    TableSchema,
)
from crudgen.schema import SchemaInspector
from crudgen.selector import select_module
from crudgen.templates import TemplateGenerator
from crudgen.utils import camelize, humanize, suggest_api_endpoint, suggest_table_name
from crudgen.validators import ValidationResult, validate_presets

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.generator")

TABLE_LIST_TRIGGER: str = "?"


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """Outcome of one ``CrudGenerator.run()``."""

    success: bool = False
    request: Optional[GenerationRequest] = None
    emit_result: Optional[EmitResult] = None
    build_summary: str = ""
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)

    @property
    def export_errors(self) -> List[str]:
        return list(self.emit_result.errors) if self.emit_result else []


# ---------------------------------------------------------------------------
# Config loader helpers
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Load a config file (JSON or YAML), dispatching on the extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Config path is not a file: {path}")

    if path.suffix.lower() == ".json":
        return _load_json_file(path)
    # YAML is a superset of JSON, so it also covers unknown extensions
    return _load_yaml_file(path)


def parse_raw_config(
    raw: Dict[str, Any],
    *,
    base_dir: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GeneratorConfig:
    """
    Validate raw config data into a ``GeneratorConfig``.

    *overrides* are merged over the file values. Relative module paths are
    resolved against *base_dir* (the config file's directory).

    Raises:
        ValueError: If validation fails.
    """
    data: Dict[str, Any] = dict(raw)
    if overrides:
        data.update(overrides)

    try:
        config: GeneratorConfig = GeneratorConfig.model_validate(data)
    except PydanticValidationError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc

    if base_dir is not None:
        config.modules = [
            m if m.base_path.is_absolute()
            else m.model_copy(update={"base_path": base_dir / m.base_path})
            for m in config.modules
        ]

    logger.info(
        "Config parsed: %d module(s), database %s.",
        len(config.modules),
        config.database_url,
    )
    return config


def load_config(
    path: Path, overrides: Optional[Dict[str, Any]] = None
) -> GeneratorConfig:
    """Load and validate the config file at *path*."""
    raw: Dict[str, Any] = load_config_file(path)
    return parse_raw_config(raw, base_dir=path.resolve().parent, overrides=overrides)


# ---------------------------------------------------------------------------
# CrudGenerator — interactive flow
# ---------------------------------------------------------------------------


class CrudGenerator:
    """
    Runs the interactive CRUD generation for one request.

    Usage::

        generator = CrudGenerator(config, SchemaInspector(engine), Console())
        report = generator.run(module_name="cmsadmin")
    """

    def __init__(
        self,
        config: GeneratorConfig,
        inspector: SchemaInspector,
        console: Console,
    ) -> None:
        self._config: GeneratorConfig = config
        self._inspector: SchemaInspector = inspector
        self._console: Console = console
        self._templates: TemplateGenerator = TemplateGenerator(
            framework_version=config.framework_version
        )
        self._emitter: FileEmitter = FileEmitter(console, encoding=config.encoding)

    # -----------------------------------------------------------------
    # Public
    # -----------------------------------------------------------------

    def run(
        self,
        *,
        module_name: Optional[str] = None,
        model_name: Optional[str] = None,
        api_endpoint: Optional[str] = None,
        db_table_name: Optional[str] = None,
        enable_i18n: Optional[bool] = None,
    ) -> GenerationReport:
        """
        Collect the missing values interactively, then render and write.

        Any argument left as ``None`` is prompted for.
        """
        report: GenerationReport = GenerationReport()
        table_names: List[str] = self._inspector.table_names()

        validation: ValidationResult = validate_presets(
            self._config,
            table_names,
            module_name=module_name,
            model_name=model_name,
            api_endpoint=api_endpoint,
            db_table_name=db_table_name,
        )
        report.validation_errors = [str(e) for e in validation.errors]
        report.validation_warnings = [str(w) for w in validation.warnings]
        if not validation.is_valid:
            self._console.output_error(validation.format_report())
            return report

        module: ModuleInfo = self._step_select_module(module_name)
        model_name = self._step_model_name(model_name)
        api_endpoint = self._step_api_endpoint(module, model_name, api_endpoint)
        db_table_name = self._step_table(module, model_name, db_table_name, table_names)
        enable_i18n = self._step_i18n(enable_i18n)

        request: GenerationRequest = GenerationRequest(
            module=module,
            model_name=model_name,
            api_endpoint=api_endpoint,
            db_table_name=db_table_name,
            enable_i18n=enable_i18n,
        )
        report.request = request
        logger.info(
            "Generating %s into module '%s' from table '%s'.",
            request.class_name,
            module.id,
            db_table_name,
        )

        schema: TableSchema = self._inspector.get_table_schema(db_table_name)
        report.emit_result = self._emitter.emit(self.build_files(request, schema))

        report.build_summary = self._templates.render(
            "build_summary",
            api_endpoint=request.api_endpoint,
            api_class_path=request.api_class_path,
            humanize_model_name=humanize(request.class_name),
            controller_route=request.controller_route,
        )
        self._console.output_success(report.build_summary)

        report.success = report.emit_result.success
        return report

    def build_files(
        self, request: GenerationRequest, schema: TableSchema
    ) -> List[EmittedFile]:
        """Render the api, controller and model files for *request*."""
        base_path: Path = request.module.base_path
        class_name: str = request.class_name
        controller_name: str = f"{class_name}Controller"

        return [
            EmittedFile(
                key="api",
                path=base_path / "apis",
                file_name=f"{controller_name}.php",
                content=self._templates.render(
                    "api",
                    namespace=f"{request.namespace}\\apis",
                    class_name=controller_name,
                    model_class=request.model_namespace,
                ),
            ),
            EmittedFile(
                key="controller",
                path=base_path / "controllers",
                file_name=f"{controller_name}.php",
                content=self._templates.render(
                    "controller",
                    namespace=f"{request.namespace}\\controllers",
                    class_name=controller_name,
                    model_class=request.model_namespace,
                ),
            ),
            EmittedFile(
                key="model",
                path=base_path / "models",
                file_name=f"{class_name}.php",
                content=self._templates.render(
                    "model",
                    namespace=f"{request.namespace}\\models",
                    class_name=class_name,
                    api_endpoint=request.api_endpoint,
                    schema=schema,
                    enable_i18n=request.enable_i18n,
                ),
            ),
        ]

    # -----------------------------------------------------------------
    # Steps
    # -----------------------------------------------------------------

    def _step_select_module(self, module_name: Optional[str]) -> ModuleInfo:
        if module_name is not None:
            module: Optional[ModuleInfo] = self._config.get_module(module_name)
            if module is None:
                raise LookupError(f"Module '{module_name}' is not registered.")
            return module

        self._console.clear()
        return select_module(
            self._console,
            self._config.modules,
            only_admin=True,
            hide_core=True,
            text="Select the Module where the CRUD files should be saved:",
        )

    def _step_model_name(self, model_name: Optional[str]) -> str:
        if model_name is not None:
            return model_name

        while True:
            answer: str = self._console.prompt("Model Name (e.g. Album):", required=True)
            camelized: str = camelize(answer)
            if answer == camelized:
                return answer
            if self._console.confirm(
                f"We have camlized the model name to '{camelized}' "
                "do you want to continue with this name?"
            ):
                return camelized

    def _step_api_endpoint(
        self, module: ModuleInfo, model_name: str, api_endpoint: Optional[str]
    ) -> str:
        if api_endpoint is not None:
            return api_endpoint
        return self._console.prompt(
            "Api Endpoint:",
            required=True,
            default=suggest_api_endpoint(module.id, model_name),
        )

    def _step_table(
        self,
        module: ModuleInfo,
        model_name: str,
        db_table_name: Optional[str],
        table_names: List[str],
    ) -> str:
        if db_table_name is not None:
            return db_table_name

        suggestion: str = suggest_table_name(module.id, model_name)
        while True:
            answer: str = self._console.prompt(
                "Database Table name for the Model:",
                required=True,
                default=suggestion,
            )
            if answer == TABLE_LIST_TRIGGER:
                for table in table_names:
                    self._console.output_info(f"- {table}")
                continue
            if answer in table_names:
                return answer
            self._console.output_error(
                f"The selected database '{answer}' does not exists in the list of "
                f"tables. Type '{TABLE_LIST_TRIGGER}' to see all tables."
            )

    def _step_i18n(self, enable_i18n: Optional[bool]) -> bool:
        if enable_i18n is not None:
            return enable_i18n
        return self._console.confirm(
            "Would you like to enable i18n field input for text fields? "
            "Only required for multilingual pages."
        )


__all__: List[str] = [
    "CrudGenerator",
    "GenerationReport",
    "load_config",
    "load_config_file",
    "parse_raw_config",
]
