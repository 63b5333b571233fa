"""Tests for preen.processors.directives — //= require headers."""

from pathlib import Path

import pytest

from preen.context import Context
from preen.errors import DirectiveError, NotFoundError, location_of
from preen.processing import ProcessingChainRunner
from preen.processors import DirectiveProcessor, parse_directives
from preen.registry import Registry


@pytest.fixture
def directive_registry(registry: Registry) -> Registry:
    directives = DirectiveProcessor()
    registry.register_preprocessor("application/javascript", directives)
    registry.register_preprocessor("text/css", directives)
    return registry


def _run(registry: Registry, path: Path) -> tuple[str, Context]:
    runner = ProcessingChainRunner(registry)
    context = Context(registry, registry.logical_path_for(path), path, runner=runner)
    return runner.run(context), context


class TestParseDirectives:
    def test_slash_comments(self) -> None:
        source = "//= require jquery\n//= require_tree ./ui\nvar a;\n"
        assert parse_directives(source) == [(1, "require", ["jquery"]), (2, "require_tree", ["./ui"])]

    def test_block_comment(self) -> None:
        source = "/*\n *= require reset\n *= depend_on theme.json\n */\nbody {}\n"
        assert parse_directives(source) == [(2, "require", ["reset"]), (3, "depend_on", ["theme.json"])]

    def test_hash_comments(self) -> None:
        assert parse_directives("#= require lib\nx = 1\n") == [(1, "require", ["lib"])]

    def test_quoted_argument(self) -> None:
        assert parse_directives('//= require "my lib"\n') == [(1, "require", ["my lib"])]

    def test_only_header_is_scanned(self) -> None:
        source = "var a;\n//= require jquery\n"
        assert parse_directives(source) == []

    def test_plain_comments_ignored(self) -> None:
        source = "// Copyright\n//= require jquery\n// a = b\n"
        assert parse_directives(source) == [(2, "require", ["jquery"])]

    def test_unbalanced_quotes(self) -> None:
        with pytest.raises(DirectiveError, match="malformed directive"):
            parse_directives('//= require "oops\n')


class TestDirectiveProcessor:
    def test_require(self, directive_registry: Registry, write_asset) -> None:
        lib = write_asset("lib.js", "var lib;")
        app = write_asset("app.js", "//= require lib\nvar app;\n")
        source, context = _run(directive_registry, app)
        assert context.required_paths == (str(lib),)
        assert source == "var app;\n"

    def test_keeps_other_header_lines(self, directive_registry: Registry, write_asset) -> None:
        write_asset("lib.js")
        app = write_asset("app.js", "// Copyright\n//= require lib\n//= frobnicate x\nvar app;\n")
        source, _ = _run(directive_registry, app)
        assert source == "// Copyright\n//= frobnicate x\nvar app;\n"

    def test_depend_on(self, directive_registry: Registry, write_asset) -> None:
        settings = write_asset("settings.json", "{}")
        app = write_asset("app.js", "//= depend_on settings.json\n")
        _, context = _run(directive_registry, app)
        assert str(settings) in context.dependency_paths
        assert context.required_paths == ()

    def test_css_block_comment(self, directive_registry: Registry, write_asset) -> None:
        reset = write_asset("reset.css")
        style = write_asset("style.css", "/*\n *= require reset\n */\nbody {}\n")
        source, context = _run(directive_registry, style)
        assert context.required_paths == (str(reset),)
        assert "body {}" in source

    def test_require_directory(self, directive_registry: Registry, write_asset) -> None:
        b = write_asset("ui/b.js")
        a = write_asset("ui/a.js")
        write_asset("ui/style.css")
        write_asset("ui/nested/deep.js")
        app = write_asset("app.js", "//= require_directory ./ui\n")
        _, context = _run(directive_registry, app)
        assert context.required_paths == (str(a), str(b))
        assert str(a.parent) in context.dependency_paths

    def test_require_directory_skips_self(self, directive_registry: Registry, write_asset) -> None:
        other = write_asset("other.js")
        app = write_asset("app.js", "//= require_directory .\n")
        _, context = _run(directive_registry, app)
        assert context.required_paths == (str(other),)

    def test_require_tree(self, directive_registry: Registry, write_asset) -> None:
        top = write_asset("ui/a.js")
        deep = write_asset("ui/nested/deep.js")
        write_asset("ui/nested/skip.css")
        app = write_asset("app.js", "//= require_tree ./ui\n")
        _, context = _run(directive_registry, app)
        assert context.required_paths == (str(top), str(deep))
        assert str(deep.parent) in context.dependency_paths

    def test_directory_must_be_relative(self, directive_registry: Registry, write_asset) -> None:
        app = write_asset("app.js", "//= require_tree ui\n")
        with pytest.raises(DirectiveError, match="relative path"):
            _run(directive_registry, app)

    def test_directory_must_exist(self, directive_registry: Registry, write_asset) -> None:
        app = write_asset("app.js", "//= require_directory ./missing\n")
        with pytest.raises(DirectiveError, match="must be a directory"):
            _run(directive_registry, app)

    def test_wrong_argument_count(self, directive_registry: Registry, write_asset) -> None:
        app = write_asset("app.js", "//= require\n")
        with pytest.raises(DirectiveError, match="invalid arguments"):
            _run(directive_registry, app)

    def test_failure_annotated_with_directive_line(self, directive_registry: Registry, write_asset) -> None:
        write_asset("lib.js")
        app = write_asset("app.js", "//= require lib\n//= require missing\nvar app;\n")
        with pytest.raises(NotFoundError) as excinfo:
            _run(directive_registry, app)
        assert location_of(excinfo.value) == f"{app}:2"

    def test_no_header(self, directive_registry: Registry, write_asset) -> None:
        app = write_asset("app.js", "var app;\n")
        source, context = _run(directive_registry, app)
        assert source == "var app;\n"
        assert context.line is None
