"""
tests/test_selector.py
Tests for module selection (crudgen.selector) and the console prompt logic
it sits on (crudgen.console).
"""

from __future__ import annotations

from typing import List

import pytest

from crudgen.models import ModuleInfo
from crudgen.selector import (
    MODULE_TYPES,
    filter_modules,
    select_module,
    select_module_type,
)


class TestFilterModules:

    def test_no_filters(self, modules: List[ModuleInfo]) -> None:
        assert [m.id for m in filter_modules(modules)] == [
            "cmsadmin", "newsadmin", "admin", "frontend",
        ]

    def test_only_admin(self, modules: List[ModuleInfo]) -> None:
        ids = [m.id for m in filter_modules(modules, only_admin=True)]
        assert ids == ["cmsadmin", "newsadmin", "admin"]

    def test_only_admin_hide_core(self, modules: List[ModuleInfo]) -> None:
        ids = [m.id for m in filter_modules(modules, only_admin=True, hide_core=True)]
        assert ids == ["cmsadmin", "newsadmin"]

    def test_registry_not_mutated(self, modules: List[ModuleInfo]) -> None:
        before = list(modules)
        filter_modules(modules, only_admin=True, hide_core=True)
        assert modules == before


class TestSelectModule:

    def test_selects_module(self, make_console, modules: List[ModuleInfo]) -> None:
        console = make_console(["newsadmin"])
        module = select_module(console, modules, only_admin=True, hide_core=True)
        assert module.id == "newsadmin"
        assert console.prompts == ["Please select a module: [cmsadmin,newsadmin,?]"]

    def test_filtered_module_is_rejected(
        self, make_console, modules: List[ModuleInfo], capsys: pytest.CaptureFixture
    ) -> None:
        console = make_console(["admin", "cmsadmin"])
        module = select_module(console, modules, only_admin=True, hide_core=True)
        assert module.id == "cmsadmin"
        assert "'admin' is not a valid option." in capsys.readouterr().err

    def test_question_mark_lists_options(
        self, make_console, modules: List[ModuleInfo], capsys: pytest.CaptureFixture
    ) -> None:
        console = make_console(["?", "cmsadmin"])
        select_module(console, modules, only_admin=True, hide_core=True)
        out = capsys.readouterr().out
        assert " cmsadmin - cmsadmin" in out
        assert " newsadmin - newsadmin" in out

    def test_custom_text(self, make_console, modules: List[ModuleInfo]) -> None:
        console = make_console(["frontend"])
        select_module(console, modules, text="Where to?")
        assert console.prompts[0].startswith("Where to? [")

    def test_nothing_to_select(self, make_console) -> None:
        core = [ModuleInfo(id="admin", base_path="x", is_admin=True, is_core_module=True)]
        with pytest.raises(LookupError):
            select_module(make_console([]), core, only_admin=True, hide_core=True)


class TestSelectModuleType:

    def test_select_admin(self, make_console) -> None:
        assert select_module_type(make_console(["admin"])) == "admin"

    def test_options(self) -> None:
        assert set(MODULE_TYPES) == {"frontend", "admin"}


class TestConsolePrompt:

    def test_required_reprompts_on_blank(
        self, make_console, capsys: pytest.CaptureFixture
    ) -> None:
        console = make_console(["", "   ", "Album"])
        assert console.prompt("Model Name:", required=True) == "Album"
        assert len(console.prompts) == 3
        assert capsys.readouterr().err.count("A value is required.") == 2

    def test_blank_answer_takes_default(self, make_console) -> None:
        console = make_console([""])
        assert console.prompt("Endpoint:", required=True, default="api-x") == "api-x"
        assert console.defaults == ["api-x"]

    def test_optional_blank(self, make_console) -> None:
        assert make_console([""]).prompt("Anything?") == ""

    def test_answer_is_stripped(self, make_console) -> None:
        assert make_console(["  NavItem "]).prompt("Model:") == "NavItem"

    def test_confirm(self, make_console) -> None:
        console = make_console([True])
        assert console.confirm("Sure?") is True
        assert console.confirms == ["Sure?"]
