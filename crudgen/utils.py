# File: crudgen/utils.py
"""
crudgen - Utility Functions & Helpers
=====================================
Naming transforms used to derive class names, API endpoints, table names
and routes from a raw model name, plus the small file I/O helpers the
emitter writes through.

All naming functions are pure and decorated with ``@lru_cache`` since the
same handful of names is transformed over and over while rendering.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import List

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[\W_]+")
_ADMIN_SUFFIX_RE: re.Pattern[str] = re.compile(r"admin$")
# An upper-case letter not preceded by another upper-case letter
_WORD_START_RE: re.Pattern[str] = re.compile(r"(?<![A-Z])[A-Z]")
_WORD_SEPARATOR_RE: re.Pattern[str] = re.compile(r"[-_.]")


# ---------------------------------------------------------------------------
# Cached naming functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def camelize(name: str) -> str:
    """
    Convert snake_case, kebab-case or space separated text to PascalCase.

    Only the first letter of each word is touched, so already camel-cased
    input passes through unchanged.

    Examples:
        >>> camelize("nav_item")
        'NavItem'
        >>> camelize("navItem")
        'NavItem'
        >>> camelize("NavItem")
        'NavItem'
    """
    words: List[str] = [w for w in _NON_ALPHANUM_RE.split(name) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


@functools.lru_cache(maxsize=None)
def create_class_name(base: str, suffix: str = "") -> str:
    """
    Camelize *base* and append *suffix* unless it already ends with it.

    The suffix check ignores case, so ``foo_controller`` becomes
    ``FooController`` rather than ``FooControllerController``.

    Examples:
        >>> create_class_name("Foo", "Controller")
        'FooController'
        >>> create_class_name("FooController", "Controller")
        'FooController'
    """
    name: str = camelize(base)
    if suffix and name.lower().endswith(suffix.lower()):
        name = name[: -len(suffix)]
    return name + suffix


@functools.lru_cache(maxsize=None)
def strip_admin_suffix(module_name: str) -> str:
    """Return *module_name* without a trailing ``admin``."""
    return _ADMIN_SUFFIX_RE.sub("", module_name)


@functools.lru_cache(maxsize=None)
def underscore_words(name: str) -> str:
    """Join the words of *name* with underscores (``nav item`` -> ``nav_item``)."""
    return "_".join(w for w in _NON_ALPHANUM_RE.split(name) if w)


@functools.lru_cache(maxsize=None)
def suggest_api_endpoint(module_name: str, model_name: str) -> str:
    """
    Suggest the API endpoint for a model.

        >>> suggest_api_endpoint("cmsadmin", "NavItem")
        'api-cms-navitem'
    """
    return f"api-{strip_admin_suffix(module_name)}-{model_name.lower()}"


@functools.lru_cache(maxsize=None)
def suggest_table_name(module_name: str, model_name: str) -> str:
    """
    Suggest the database table name for a model.

        >>> suggest_table_name("cmsadmin", "NavItem")
        'cms_navitem'
    """
    return f"{strip_admin_suffix(module_name)}_{underscore_words(model_name)}".lower()


def php_quote(value: str) -> str:
    """
    Single-quoted PHP string literal for *value*.

        >>> php_quote("o'brien")
        "'o\\\\'brien'"
    """
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


@functools.lru_cache(maxsize=None)
def camel2id(name: str, separator: str = "-") -> str:
    """
    Convert a CamelCase name into a lower-case id.

        >>> camel2id("NavItem")
        'nav-item'
    """
    spaced: str = _WORD_START_RE.sub(lambda m: separator + m.group(0), name)
    return spaced.replace("_", separator).lower().strip(separator)


@functools.lru_cache(maxsize=None)
def camel2words(name: str) -> str:
    """
    Convert a column or class name into capitalised words.

        >>> camel2words("created_at")
        'Created At'
        >>> camel2words("navItem")
        'Nav Item'
    """
    spaced: str = _WORD_START_RE.sub(lambda m: " " + m.group(0), name)
    spaced = _WORD_SEPARATOR_RE.sub(" ", spaced)
    return " ".join(w.capitalize() for w in spaced.lower().split())


@functools.lru_cache(maxsize=None)
def humanize(name: str) -> str:
    """Human-readable title for a model name, e.g. ``NavItem`` -> ``Nav Item``."""
    return camel2words(name)


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, encoding: str = "utf-8") -> int:
    """
    Write *content* to *path* through a temporary file in the same directory.

    The target is only replaced once the full content is on disk, so a
    failed write never leaves a half-written file behind.

    Returns the number of bytes written.
    """
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            encoded: bytes = content.encode(encoding)
            fh.write(encoded)
        os.replace(tmp_path, str(path))
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


def read_file(path: Path, encoding: str = "utf-8") -> str:
    """Read a file and return its content as a string."""
    return path.read_text(encoding=encoding)


def sha256_hex(content: str) -> str:
    """Return SHA-256 hex digest of a string."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "camelize",
    "create_class_name",
    "strip_admin_suffix",
    "underscore_words",
    "suggest_api_endpoint",
    "suggest_table_name",
    "php_quote",
    "camel2id",
    "camel2words",
    "humanize",
    "ensure_directory",
    "write_file",
    "read_file",
    "sha256_hex",
    "count_lines",
]

logger.debug("crudgen.utils loaded — %d public symbols.", len(__all__))
