from pathlib import Path

import pytest
from setuptools import find_namespace_packages

ROOT = Path(__file__).resolve().parents[2]


def test_package_discovery_ships_every_subpackage():
    tomllib = pytest.importorskip("tomllib")
    with open(ROOT / "pyproject.toml", "rb") as f:
        find = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

    assert find["namespaces"] is True
    found = set(find_namespace_packages(where=str(ROOT / find["where"][0]), include=find["include"]))

    assert {
        "rental_market",
        "rental_market.api",
        "rental_market.api.routers",
        "rental_market.core",
        "rental_market.db",
        "rental_market.schemas",
        "rental_market.services",
    } <= found
    assert "tests" not in found
