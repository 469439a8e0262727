# File: crudgen/selector.py
"""
crudgen - Module Selection
==========================
Enumerated choices over the module registry. The registry is passed in
explicitly and never modified.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from crudgen.console import Console
from crudgen.models import ModuleInfo

logger: logging.Logger = logging.getLogger("crudgen.selector")

MODULE_TYPES: Dict[str, str] = {
    "frontend": "Frontend Modules are mainly used to render views.",
    "admin": (
        "Admin Modules are mainly used when your data management should be "
        "done inside the administration area."
    ),
}


def filter_modules(
    modules: Sequence[ModuleInfo],
    *,
    only_admin: bool = False,
    hide_core: bool = False,
) -> List[ModuleInfo]:
    """Return the modules left after applying the capability filters, in order."""
    result: List[ModuleInfo] = []
    for module in modules:
        if only_admin and not module.is_admin:
            continue
        if hide_core and module.is_core_module:
            continue
        result.append(module)
    return result


def select_module(
    console: Console,
    modules: Sequence[ModuleInfo],
    *,
    only_admin: bool = False,
    hide_core: bool = False,
    text: str = "Please select a module:",
) -> ModuleInfo:
    """
    Ask the user to pick one of the filtered modules.

    Raises:
        LookupError: If the filters leave nothing to choose from.
    """
    candidates: List[ModuleInfo] = filter_modules(
        modules, only_admin=only_admin, hide_core=hide_core
    )
    if not candidates:
        raise LookupError(
            "No module matches the selection "
            f"(only_admin={only_admin}, hide_core={hide_core})."
        )

    by_id: Dict[str, ModuleInfo] = {m.id: m for m in candidates}
    selected: str = console.select(text, {m.id: m.id for m in candidates})
    return by_id[selected]


def select_module_type(console: Console) -> str:
    """Ask whether a frontend or an admin module is wanted."""
    return console.select("What kind of Module you want to create?", MODULE_TYPES)


__all__: List[str] = [
    "MODULE_TYPES",
    "filter_modules",
    "select_module",
    "select_module_type",
]
