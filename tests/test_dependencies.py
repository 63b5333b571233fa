"""Tests for preen.dependencies — dependency set and required paths."""

from preen.dependencies import DependencyRecorder, DependencySnapshot


class TestDependencyRecorder:
    def test_starts_with_own_path(self) -> None:
        recorder = DependencyRecorder("/app/app.js")
        assert recorder.dependency_paths == {"/app/app.js"}
        assert recorder.required_paths == ()

    def test_add_dependency_is_idempotent(self) -> None:
        recorder = DependencyRecorder("/app/app.js")
        recorder.add_dependency("/app/config.json")
        recorder.add_dependency("/app/config.json")
        assert recorder.dependency_paths == {"/app/app.js", "/app/config.json"}

    def test_add_required_keeps_first_order(self) -> None:
        recorder = DependencyRecorder("/app/app.js")
        assert recorder.add_required("/app/b.js")
        assert recorder.add_required("/app/a.js")
        assert not recorder.add_required("/app/b.js")
        assert recorder.required_paths == ("/app/b.js", "/app/a.js")

    def test_required_are_dependencies(self) -> None:
        recorder = DependencyRecorder("/app/app.js")
        recorder.add_required("/app/lib.js")
        assert "/app/lib.js" in recorder.dependency_paths

    def test_snapshot_is_detached(self) -> None:
        recorder = DependencyRecorder("/app/app.js")
        snapshot = recorder.snapshot()
        recorder.add_required("/app/lib.js")
        assert snapshot == DependencySnapshot(frozenset({"/app/app.js"}), ())
        assert recorder.snapshot() != snapshot
