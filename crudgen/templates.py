# File: crudgen/templates.py
"""
crudgen - Code Template Engine
==============================
Turns a ``GenerationRequest`` and a ``TableSchema`` into the source of the
three NgRest files plus the human-readable build summary:

    1. ``api``            API controller exposing the model
    2. ``controller``     admin web controller rendering the CRUD
    3. ``model``          NgRest model with rules, labels, field types, scopes
    4. ``build_summary``  snippet telling the user how to register the API

Templates are looked up by id through ``TEMPLATES``; each entry is a plain
method, so an unknown id fails with ``KeyError`` instead of a missing file.

All string assembly uses the ``List[str]`` + ``"\\n".join()`` pattern.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

from crudgen.models import TableSchema, php_type_for
from crudgen.schema import FieldMapping, generate_labels, generate_rules, map_columns
from crudgen.utils import php_quote

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_INDENT: str = "    "
_DOUBLE_INDENT: str = "        "
_TRIPLE_INDENT: str = "            "

_API_BASE_CLASS: str = "\\luya\\admin\\ngrest\\base\\Api"
_CONTROLLER_BASE_CLASS: str = "\\luya\\admin\\ngrest\\base\\Controller"
_MODEL_BASE_CLASS: str = "NgRestModel"


def _php_string_list(names: Sequence[str]) -> str:
    """``['a', 'b']`` or ``[]`` for an empty sequence."""
    if not names:
        return "[]"
    return "[" + ", ".join(php_quote(n) for n in names) + "]"


def _inheritdoc(lines: List[str]) -> None:
    lines.append(f"{_INDENT}/**")
    lines.append(f"{_INDENT} * @inheritdoc")
    lines.append(f"{_INDENT} */")


# ---------------------------------------------------------------------------
# Template generator
# ---------------------------------------------------------------------------


class TemplateGenerator:
    """
    Renders the CRUD files for one framework version.

    Usage::

        templates = TemplateGenerator(framework_version="1.0.0")
        source = templates.render("api", namespace=..., class_name=..., model_class=...)
    """

    def __init__(self, framework_version: str = "1.0.0") -> None:
        self._framework_version: str = framework_version

    @property
    def framework_version(self) -> str:
        return self._framework_version

    def render(self, template_id: str, **variables: object) -> str:
        """
        Render the template registered under *template_id*.

        Raises:
            KeyError: If no template is registered under that id.
        """
        try:
            template: Callable[..., str] = TEMPLATES[template_id]
        except KeyError:
            raise KeyError(
                f"Unknown template '{template_id}'. "
                f"Available: {', '.join(sorted(TEMPLATES))}."
            ) from None
        logger.debug("Rendering template '%s'.", template_id)
        return template(self, **variables)

    # -----------------------------------------------------------------
    # Shared header
    # -----------------------------------------------------------------

    def _file_header(self, namespace: str, uses: Sequence[str] = ()) -> List[str]:
        lines: List[str] = ["<?php", "", f"namespace {namespace};", ""]
        if uses:
            lines.extend(f"use {use};" for use in uses)
            lines.append("")
        return lines

    def _class_docblock(self, title: str, extra: Sequence[str] = ()) -> List[str]:
        lines: List[str] = ["/**", f" * {title}.", " *"]
        lines.append(
            " * File has been created with `crud/create` command on LUYA version "
            f"{self._framework_version}."
        )
        if extra:
            lines.append(" *")
            lines.extend(extra)
        lines.append(" */")
        return lines

    # -----------------------------------------------------------------
    # API controller
    # -----------------------------------------------------------------

    def generate_api(self, namespace: str, class_name: str, model_class: str) -> str:
        """Generate the API controller exposing *model_class*."""
        lines: List[str] = self._file_header(namespace)
        lines.extend(self._class_docblock(f"{class_name}"))
        lines.append(f"class {class_name} extends {_API_BASE_CLASS}")
        lines.append("{")
        lines.append(f"{_INDENT}/**")
        lines.append(
            f"{_INDENT} * @var string The path to the model which is the provider "
            "for the rules and fields."
        )
        lines.append(f"{_INDENT} */")
        lines.append(f"{_INDENT}public $modelClass = '{model_class}';")
        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Web controller
    # -----------------------------------------------------------------

    def generate_controller(
        self, namespace: str, class_name: str, model_class: str
    ) -> str:
        """Generate the admin controller rendering the CRUD for *model_class*."""
        lines: List[str] = self._file_header(namespace)
        lines.extend(self._class_docblock(f"{class_name}"))
        lines.append(f"class {class_name} extends {_CONTROLLER_BASE_CLASS}")
        lines.append("{")
        lines.append(f"{_INDENT}/**")
        lines.append(f"{_INDENT} * @var string The path to the model class.")
        lines.append(f"{_INDENT} */")
        lines.append(f"{_INDENT}public $modelClass = '{model_class}';")
        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Model
    # -----------------------------------------------------------------

    def generate_model(
        self,
        namespace: str,
        class_name: str,
        api_endpoint: str,
        schema: TableSchema,
        enable_i18n: bool = False,
    ) -> str:
        """
        Generate the NgRest model for *schema*.

        The column mapping, rules and labels are all derived here from the
        one schema object the caller fetched.
        """
        mapping: FieldMapping = map_columns(schema.columns)
        rules: List[str] = generate_rules(schema.columns)
        labels: Dict[str, str] = generate_labels(schema.columns)

        properties: List[str] = [
            f" * @property {php_type_for(col_type)} ${name}"
            for name, col_type in mapping.properties.items()
        ]

        lines: List[str] = self._file_header(
            namespace, uses=("Yii", f"luya\\admin\\ngrest\\base\\{_MODEL_BASE_CLASS}")
        )
        lines.extend(self._class_docblock(class_name, extra=properties))
        lines.append(f"class {class_name} extends {_MODEL_BASE_CLASS}")
        lines.append("{")

        if enable_i18n and mapping.text_fields:
            _inheritdoc(lines)
            lines.append(f"{_INDENT}public $i18n = {_php_string_list(mapping.text_fields)};")
            lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public static function tableName()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return {php_quote(schema.name)};")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public static function ngRestApiEndpoint()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return {php_quote(api_endpoint)};")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public function attributeLabels()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return [")
        for name, label in labels.items():
            lines.append(
                f"{_TRIPLE_INDENT}{php_quote(name)} => Yii::t('app', {php_quote(label)}),"
            )
        lines.append(f"{_DOUBLE_INDENT}];")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public function rules()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return [")
        for rule in rules:
            lines.append(f"{_TRIPLE_INDENT}{rule},")
        lines.append(f"{_DOUBLE_INDENT}];")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public function genericSearchFields()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return {_php_string_list(mapping.text_fields)};")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        _inheritdoc(lines)
        lines.append(f"{_INDENT}public function ngRestAttributeTypes()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return [")
        for name, hint in mapping.field_types.items():
            lines.append(f"{_TRIPLE_INDENT}{php_quote(name)} => '{hint}',")
        lines.append(f"{_DOUBLE_INDENT}];")
        lines.append(f"{_INDENT}}}")
        lines.append("")

        fields: str = _php_string_list(mapping.fields)
        _inheritdoc(lines)
        lines.append(f"{_INDENT}public function ngRestScopes()")
        lines.append(f"{_INDENT}{{")
        lines.append(f"{_DOUBLE_INDENT}return [")
        lines.append(f"{_TRIPLE_INDENT}['list', {fields}],")
        lines.append(f"{_TRIPLE_INDENT}[['create', 'update'], {fields}],")
        lines.append(f"{_TRIPLE_INDENT}['delete', false],")
        lines.append(f"{_DOUBLE_INDENT}];")
        lines.append(f"{_INDENT}}}")
        lines.append("}")
        lines.append("")

        logger.debug(
            "Model %s: %d fields, %d text fields, %d rules.",
            class_name,
            len(mapping.fields),
            len(mapping.text_fields),
            len(rules),
        )
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Build summary
    # -----------------------------------------------------------------

    def generate_build_summary(
        self,
        api_endpoint: str,
        api_class_path: str,
        humanize_model_name: str,
        controller_route: str,
    ) -> str:
        """Summary printed after the files are written."""
        lines: List[str] = []
        lines.append(f"{'='*60}")
        lines.append("  CRUD Build Summary")
        lines.append(f"{'='*60}")
        lines.append(f"  API endpoint:     {api_endpoint}")
        lines.append(f"  API class:        {api_class_path}")
        lines.append(f"  Controller route: {controller_route}")
        lines.append(f"{'─'*60}")
        lines.append("  Register the API in the $apis property of your admin Module.php:")
        lines.append("")
        lines.append("    public $apis = [")
        lines.append(f"        {php_quote(api_endpoint)} => '{api_class_path}',")
        lines.append("    ];")
        lines.append("")
        lines.append("  and add the menu item in getMenu():")
        lines.append("")
        lines.append("    public function getMenu()")
        lines.append("    {")
        lines.append("        return (new \\luya\\admin\\components\\AdminMenuBuilder($this))")
        lines.append(f"            ->node({php_quote(humanize_model_name)}, 'extension')")
        lines.append("                ->group('Group')")
        lines.append(
            f"                    ->itemApi({php_quote(humanize_model_name)}, "
            f"{php_quote(controller_route)}, 'label', {php_quote(api_endpoint)});"
        )
        lines.append("    }")
        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Template registry
# ---------------------------------------------------------------------------

TEMPLATES: Dict[str, Callable[..., str]] = {
    "api": TemplateGenerator.generate_api,
    "controller": TemplateGenerator.generate_controller,
    "model": TemplateGenerator.generate_model,
    "build_summary": TemplateGenerator.generate_build_summary,
}


__all__: List[str] = [
    "TEMPLATES",
    "TemplateGenerator",
]
