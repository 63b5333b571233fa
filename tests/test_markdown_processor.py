"""Tests for preen.processors.markdown — Markdown assets via patitas."""

import sys
from pathlib import Path

import pytest

from preen.compiler import Compiler
from preen.config import PipelineConfig
from preen.errors import MarkdownNotInstalledError, PreenError
from preen.processors import MarkdownProcessor
from preen.registry import Registry

pytest.importorskip("patitas")


@pytest.fixture
def markdown_registry(asset_root: Path) -> Registry:
    return Registry.from_config(PipelineConfig(paths=(asset_root,), markdown=True))


class TestMarkdownProcessor:
    def test_engine_only_name_is_html(self, markdown_registry: Registry) -> None:
        assert markdown_registry.content_type_of("readme.md") == "text/html"
        assert markdown_registry.content_type_of("notes.markdown") == "text/html"

    def test_renders_heading(self, markdown_registry: Registry, write_asset) -> None:
        write_asset("readme.md", "# Hello")
        asset = Compiler(markdown_registry).compile("readme.md")
        assert "<h1" in asset.source
        assert "Hello" in asset.source
        assert asset.content_type == "text/html"

    def test_extensionless_reference(self, markdown_registry: Registry, write_asset) -> None:
        write_asset("readme.md", "**bold**")
        asset = Compiler(markdown_registry).compile("readme")
        assert "<strong>" in asset.source

    def test_kida_then_markdown(self, markdown_registry: Registry, write_asset) -> None:
        write_asset("page.md.kida", "# {{ logical_path }}")
        asset = Compiler(markdown_registry).compile("page.md.kida")
        assert "<h1" in asset.source
        assert "page" in asset.source

    def test_empty_source(self, markdown_registry: Registry, write_asset) -> None:
        write_asset("empty.md", "")
        assert Compiler(markdown_registry).compile("empty.md").source == ""


class TestErrors:
    def test_not_installed_error_is_preen_error(self) -> None:
        assert issubclass(MarkdownNotInstalledError, PreenError)

    def test_missing_patitas_names_the_extra(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "patitas", None)
        with pytest.raises(MarkdownNotInstalledError, match=r"preen\[markdown\]"):
            MarkdownProcessor()

    def test_blank_source_renders_nothing(self) -> None:
        assert MarkdownProcessor()(None, "  \n") == ""  # type: ignore[arg-type]
