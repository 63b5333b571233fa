"""Shared fixtures: a temporary asset tree and a registry over it."""

from collections.abc import Callable
from pathlib import Path

import pytest

from preen.registry import Registry

type WriteAsset = Callable[..., Path]


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    root = tmp_path / "assets"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_asset(asset_root: Path) -> WriteAsset:
    """Write a file under the asset root (or *root*) and return its path."""

    def write(name: str, content: str = "", *, root: Path | None = None) -> Path:
        path = (root or asset_root) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def registry(asset_root: Path) -> Registry:
    return Registry([asset_root])
