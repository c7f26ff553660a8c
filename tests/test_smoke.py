"""Smoke tests – verify all modules are importable and free of syntax errors.

This is an infrastructure test (not a unit test), so it lives in the tests
root rather than under ``tests/unit/``.
"""

from __future__ import annotations

import importlib
import sys

import pytest

# ---------------------------------------------------------------------------
# Module lists
# ---------------------------------------------------------------------------

CORE_MODULES: list[str] = [
    "itchy.core.db",
    "itchy.core.db.connection",
    "itchy.core.db.file_queries",
    "itchy.core.db.game_queries",
    "itchy.core.db.models",
    "itchy.core.db.schema",
    "itchy.core.db.search_queries",
    "itchy.core.db.trait_queries",
    "itchy.core.logging",
]

SERVICE_MODULES: list[str] = [
    "itchy.services.library_sync_service",
    "itchy.services.search_service",
]

UTILS_MODULES: list[str] = [
    "itchy.utils.formatting",
    "itchy.utils.traits",
]

INTEGRATION_MODULES: list[str] = [
    "itchy.integrations.itch_api",
    "itchy.integrations.itch_models",
    "itchy.integrations.itch_page_scraper",
]

TOP_LEVEL_MODULES: list[str] = [
    "itchy.config",
    "itchy.main",
    "itchy.version",
]


# ---------------------------------------------------------------------------
# Parametrized import tests
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("module_path", CORE_MODULES)
def test_import_core_modules(module_path: str) -> None:
    """Core module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", SERVICE_MODULES)
def test_import_service_modules(module_path: str) -> None:
    """Service module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", UTILS_MODULES)
def test_import_utils_modules(module_path: str) -> None:
    """Utils module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", INTEGRATION_MODULES)
def test_import_integration_modules(module_path: str) -> None:
    """Integration module must be importable without errors."""
    importlib.import_module(module_path)


@pytest.mark.parametrize("module_path", TOP_LEVEL_MODULES)
def test_import_top_level_modules(module_path: str) -> None:
    """Top-level module must be importable without errors."""
    importlib.import_module(module_path)


# ---------------------------------------------------------------------------
# Circular import check
# ---------------------------------------------------------------------------


def test_no_circular_imports() -> None:
    """All modules can be imported in a fresh subprocess without cycles.

    Uses subprocess isolation to avoid corrupting module references for
    other tests in the same session.
    """
    import os
    import subprocess
    from pathlib import Path

    all_modules = CORE_MODULES + SERVICE_MODULES + UTILS_MODULES + INTEGRATION_MODULES + TOP_LEVEL_MODULES
    import_lines = "; ".join(f"import {m}" for m in all_modules)
    project_root = Path(__file__).resolve().parent.parent
    env = dict(os.environ, PYTHONPATH=os.pathsep.join([str(project_root), os.environ.get("PYTHONPATH", "")]))
    result = subprocess.run(
        [sys.executable, "-c", import_lines],
        capture_output=True,
        text=True,
        timeout=30,
        env=env,
    )
    assert result.returncode == 0, f"Circular import detected:\nstderr: {result.stderr}"


# ---------------------------------------------------------------------------
# Schema file smoke test
# ---------------------------------------------------------------------------


def test_schema_file_is_packaged() -> None:
    """schema.sql ships next to the schema module."""
    from pathlib import Path

    import itchy.core.db.schema as schema

    assert (Path(schema.__file__).parent / "schema.sql").is_file()
