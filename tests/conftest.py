# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from genro_toolbox import reset_smartasync_cache

DATA_DIR = Path(__file__).parent / "data"

XS_NS = 'xmlns:xs="http://www.w3.org/2001/XMLSchema"'


def schema_text(body: str, attrs: str = "") -> str:
    """Wrap body in an xs:schema element."""
    return f"<xs:schema {XS_NS} {attrs}>{body}</xs:schema>"


@pytest.fixture(autouse=True)
def reset_smartasync_caches():
    """Reset smartasync cache before each test.

    This ensures that async context detection starts fresh for each test,
    preventing state leakage between sync and async tests.
    """
    reset_smartasync_cache()
    yield


@pytest.fixture
def sample_xsd() -> Path:
    """Purchase order sample schema."""
    return DATA_DIR / "sample.xsd"


@pytest.fixture
def write_xsd(tmp_path):
    """Factory writing a schema body to a temporary .xsd file."""

    def _write(body: str, name: str = "schema.xsd") -> Path:
        path = tmp_path / name
        path.write_text(schema_text(body))
        return path

    return _write
