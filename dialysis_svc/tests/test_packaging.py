"""
The service runs from dialysis_svc/, so installing the project must not put
its generic top-level packages into site-packages.
"""
from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_install_ships_no_top_level_packages():
    config = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
    setuptools_config = config["tool"]["setuptools"]

    assert setuptools_config["packages"] == []
    assert "py-modules" not in setuptools_config
    assert "package-dir" not in setuptools_config


def test_tests_import_code_through_pytest_pythonpath():
    config = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
    assert config["tool"]["pytest"]["ini_options"]["pythonpath"] == ["dialysis_svc"]
