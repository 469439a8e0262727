"""
tests/conftest.py
Shared fixtures for the crudgen test suite.

Real file I/O and a real SQLite database are used inside pytest's
tmp_path; the only stand-in is ScriptedConsole, which answers prompts from
a queue instead of the terminal.
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict, List, Optional, Sequence, Union

import pytest
import yaml
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    SmallInteger,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine

from crudgen.console import Console
from crudgen.models import ColumnInfo, GeneratorConfig, ModuleInfo
from crudgen.schema import SchemaInspector


# ---------------------------------------------------------------------------
# Scripted console
# ---------------------------------------------------------------------------


class ScriptedConsole(Console):
    """Console answering prompts from a queue; records what was asked."""

    def __init__(self, answers: Sequence[Union[str, bool]] = ()) -> None:
        self.answers: List[Union[str, bool]] = list(answers)
        self.prompts: List[str] = []
        self.defaults: List[Optional[str]] = []
        self.confirms: List[str] = []
        self.clears: int = 0

    def _next(self) -> Union[str, bool]:
        assert self.answers, "Console was asked more questions than scripted."
        return self.answers.pop(0)

    def _read(self, text: str, default: Optional[str]) -> str:
        self.prompts.append(text)
        self.defaults.append(default)
        answer = self._next()
        assert isinstance(answer, str), f"Expected a text answer for {text!r}."
        return answer

    def _read_confirm(self, text: str, default: bool) -> bool:
        self.confirms.append(text)
        answer = self._next()
        assert isinstance(answer, bool), f"Expected a yes/no answer for {text!r}."
        return answer

    def clear(self) -> None:
        self.clears += 1


@pytest.fixture()
def make_console():
    """Factory: ``make_console(["cmsadmin", "NavItem", ...])``."""
    return ScriptedConsole


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


def _create_tables(engine: Engine) -> None:
    metadata = MetaData()
    Table(
        "cms_navitem",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(120), nullable=False),
        Column("body", Text),
        Column("active", Boolean),
        Column("price", Numeric(10, 2)),
        Column("sort_index", SmallInteger),
        Column("user_id", Integer),
        Column("created_at", DateTime),
    )
    Table(
        "news_article",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("headline", String(255), nullable=False),
        Column("teaser", Text),
    )
    metadata.create_all(engine)


@pytest.fixture()
def database_url(tmp_path: pathlib.Path) -> str:
    return f"sqlite:///{tmp_path / 'app.db'}"


@pytest.fixture()
def engine(database_url: str):
    eng = create_engine(database_url)
    _create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def inspector(engine: Engine) -> SchemaInspector:
    return SchemaInspector(engine)


# ---------------------------------------------------------------------------
# Module registry / config
# ---------------------------------------------------------------------------


@pytest.fixture()
def modules(tmp_path: pathlib.Path) -> List[ModuleInfo]:
    root = tmp_path / "modules"
    return [
        ModuleInfo(id="cmsadmin", base_path=root / "cmsadmin", is_admin=True),
        ModuleInfo(id="newsadmin", base_path=root / "newsadmin", is_admin=True),
        ModuleInfo(
            id="admin", base_path=root / "admin", is_admin=True, is_core_module=True
        ),
        ModuleInfo(id="frontend", base_path=root / "frontend"),
    ]


@pytest.fixture()
def config(database_url: str, modules: List[ModuleInfo]) -> GeneratorConfig:
    return GeneratorConfig(
        database_url=database_url,
        framework_version="1.0.0",
        modules=modules,
    )


@pytest.fixture()
def config_dict(database_url: str) -> Dict[str, Any]:
    return {
        "database_url": database_url,
        "framework_version": "1.0.0",
        "modules": [
            {"id": "cmsadmin", "base_path": "modules/cmsadmin", "is_admin": True},
            {
                "id": "admin",
                "base_path": "vendor/admin",
                "is_admin": True,
                "is_core_module": True,
            },
        ],
    }


@pytest.fixture()
def config_yaml_path(config_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "crudgen.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(config_dict, fh, default_flow_style=False)
    return path


# ---------------------------------------------------------------------------
# Column fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_columns() -> List[ColumnInfo]:
    """id (pk), title (string), body (text), active (boolean)."""
    return [
        ColumnInfo(name="id", type="integer", is_primary_key=True, allow_null=False),
        ColumnInfo(name="title", type="string"),
        ColumnInfo(name="body", type="text"),
        ColumnInfo(name="active", type="boolean"),
    ]
