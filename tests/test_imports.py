"""Smoke-check imports for the public symbols of each package."""

from __future__ import annotations

from importlib import import_module
from types import ModuleType

import pytest

MODULES_AND_SYMBOLS = [
    ("numerator.main", "create_app"),
    ("numerator.config", "AppConfig"),
    ("numerator.config", "load_config"),
    ("numerator.dependencies", "include_routers"),
    ("numerator.exceptions", "AppError"),
    ("numerator.queue", "TaskQueue"),
    ("numerator.queue.queue_api", "router"),
    ("numerator.jobs", "JobStore"),
    ("numerator.jobs.jobs_api", "router"),
    ("numerator.stylecode.stylecode_allocator", "allocate_style_code"),
    ("numerator.stylecode.stylecode_service", "StyleCodeService"),
    ("numerator.stylecode.stylecode_api", "router"),
    ("numerator.plm.plm_client", "PlmClient"),
    ("numerator.auth.token_service", "TokenService"),
    ("numerator.auth.token_api", "router"),
    ("numerator.health_api", "router"),
]


@pytest.mark.parametrize(("module_name", "symbol"), MODULES_AND_SYMBOLS)
def test_importable_symbols(module_name: str, symbol: str) -> None:
    """Import modules and verify that public symbols are exposed."""

    module: ModuleType = import_module(module_name)
    assert hasattr(module, symbol), f"{module_name} missing {symbol}"
