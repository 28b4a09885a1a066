"""
Shared pytest fixtures and configuration for cslcff tests.

Fixture Organization
--------------------
- **fixtures_dir**: Directory holding the sample data files
- **zotero_json / citation_cff**: Sample CSL-JSON export and CFF document
- **scenario_json**: The two-author article used across the suites
- **clean_env**: Removes CSL2CFF_* variables for config tests
"""

import json
from pathlib import Path
from typing import Any, Generator

import pytest

from cslcff.cli import console
from cslcff.core.logging import configure_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SCENARIO_RECORDS: list[dict[str, Any]] = [
    {
        "type": "article",
        "title": "3D printed optics with nanometer resolution",
        "authors": [
            {"family": "Vaidya", "given": "Nina"},
            {"family": "Solgaard", "given": "Olav"},
        ],
        "doi": "10.1038/s41378-018-0015-4",
    }
]


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def zotero_json() -> str:
    """A three-record CSL-JSON export as written by Zotero."""
    return (FIXTURES_DIR / "zotero_export.json").read_text(encoding="utf-8")


@pytest.fixture
def citation_cff() -> str:
    """A CITATION.cff document with two existing references."""
    return (FIXTURES_DIR / "CITATION.cff").read_text(encoding="utf-8")


@pytest.fixture
def scenario_json() -> str:
    return json.dumps(SCENARIO_RECORDS)


@pytest.fixture
def citation_file(tmp_path: Path, citation_cff: str) -> Path:
    """A writable copy of the sample CITATION.cff."""
    path = tmp_path / "CITATION.cff"
    path.write_text(citation_cff, encoding="utf-8")
    return path


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset every CSL2CFF_* environment variable."""
    for name in ("CSL2CFF_CFF_VERSION", "CSL2CFF_MAP_TYPES", "CSL2CFF_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore default logging and console state after each test."""
    yield
    configure_logging(level="WARNING")
    console.set_verbose_mode(False)
