from __future__ import annotations

import shutil
import sys
import uuid
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))

from peco import CatalogRegistry  # noqa: E402


@pytest.fixture
def tmp_path() -> Iterator[Path]:
    """Workspace-local tmp_path that avoids platform-specific temp ACL issues."""
    tmp_root = ROOT / "target" / "pytest-tmp"
    tmp_root.mkdir(parents=True, exist_ok=True)
    case_dir = tmp_root / f"case-{uuid.uuid4().hex}"
    case_dir.mkdir()
    try:
        yield case_dir
    finally:
        shutil.rmtree(case_dir, ignore_errors=True)


@pytest.fixture
def registry() -> CatalogRegistry:
    """A registry isolated from the process-wide default."""
    return CatalogRegistry()
