"""
tests/test_validators.py
Unit tests for crudgen.validators (preset validation).
"""

from __future__ import annotations

from crudgen.models import GeneratorConfig
from crudgen.validators import (
    ValidationResult,
    validate_api_endpoint,
    validate_model_name,
    validate_module,
    validate_presets,
    validate_table_name,
)

TABLES = ["cms_navitem", "news_article"]


class TestValidationResult:

    def test_empty_is_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid
        assert len(result) == 0

    def test_warning_keeps_valid(self) -> None:
        result = ValidationResult()
        result.add_warning("W", "careful")
        assert result.is_valid
        assert [str(w) for w in result.warnings] == ["[WARNING] W: careful"]

    def test_error_invalidates(self) -> None:
        result = ValidationResult()
        result.add_error("E", "broken")
        assert not result.is_valid
        assert "✗ [E] broken" in result.format_report()

    def test_merge(self) -> None:
        a, b = ValidationResult(), ValidationResult()
        a.add_warning("W", "w")
        b.add_error("E", "e")
        a.merge(b)
        assert len(a) == 2 and not a.is_valid


class TestChecks:

    def test_module(self, config: GeneratorConfig) -> None:
        assert validate_module(config, "cmsadmin").is_valid
        result = validate_module(config, "shopadmin")
        assert [e.code for e in result.errors] == ["MODULE_UNKNOWN"]

    def test_model_name(self) -> None:
        assert len(validate_model_name("NavItem")) == 0
        assert [w.code for w in validate_model_name("nav_item").warnings] == [
            "MODEL_NAME_NOT_CAMELIZED"
        ]
        assert [e.code for e in validate_model_name("__").errors] == ["MODEL_NAME_EMPTY"]

    def test_api_endpoint(self) -> None:
        assert len(validate_api_endpoint("api-cms-navitem")) == 0
        assert [w.code for w in validate_api_endpoint("cms/navitem").warnings] == [
            "API_ENDPOINT_FORMAT"
        ]

    def test_table_name(self) -> None:
        assert validate_table_name("cms_navitem", TABLES).is_valid
        assert not validate_table_name("cms_missing", TABLES).is_valid


class TestValidatePresets:

    def test_nothing_preset(self, config: GeneratorConfig) -> None:
        assert len(validate_presets(config, TABLES)) == 0

    def test_all_valid(self, config: GeneratorConfig) -> None:
        result = validate_presets(
            config,
            TABLES,
            module_name="cmsadmin",
            model_name="NavItem",
            api_endpoint="api-cms-navitem",
            db_table_name="cms_navitem",
        )
        assert result.is_valid and len(result) == 0

    def test_collects_everything(self, config: GeneratorConfig) -> None:
        result = validate_presets(
            config,
            TABLES,
            module_name="nope",
            model_name="nav_item",
            db_table_name="missing",
        )
        assert sorted(e.code for e in result.errors) == ["MODULE_UNKNOWN", "TABLE_UNKNOWN"]
        assert [w.code for w in result.warnings] == ["MODEL_NAME_NOT_CAMELIZED"]
