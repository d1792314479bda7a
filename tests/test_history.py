"""
Unit tests for generation history and rollback
"""

import json

import pytest

from modgen.cli.history import CommandHistory, Operation, OperationTracker, get_history
from modgen.cli.utils import CLIError


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestOperationTracker:
    """Recording operations"""

    def test_records_on_success(self, tmp_path):
        created = _write(tmp_path / "a.ts", "a")

        with OperationTracker("generate modules", {"models": "m.json"}, tmp_path) as tracker:
            tracker.track_file_creation(created)

        history = get_history(tmp_path)
        operation = history.get_last_operation()
        assert operation.operation_id == tracker.operation.operation_id
        assert operation.files_created == [str(created)]
        assert operation.metadata == {"models": "m.json"}

        saved = json.loads((tmp_path / ".modgen" / "history.json").read_text(encoding="utf-8"))
        assert saved["operations"][0]["command"] == "generate modules"

    def test_nothing_recorded_without_changes(self, tmp_path):
        with OperationTracker("generate modules", project_root=tmp_path):
            pass

        assert get_history(tmp_path).get_last_operation() is None

    def test_nothing_recorded_on_failure(self, tmp_path):
        registry = _write(tmp_path / "registry.ts", "before")

        with pytest.raises(RuntimeError):
            with OperationTracker("generate modules", project_root=tmp_path) as tracker:
                tracker.track_file_modification(registry)
                raise RuntimeError("boom")

        history = get_history(tmp_path)
        assert history.get_last_operation() is None
        assert not history.backup_dir(tracker.operation).exists()

    def test_modification_is_backed_up_once(self, tmp_path):
        registry = _write(tmp_path / "src" / "registry.ts", "before")

        with OperationTracker("generate modules", project_root=tmp_path) as tracker:
            tracker.track_file_modification(registry)
            registry.write_text("after", encoding="utf-8")
            tracker.track_file_modification(registry)

        backup = get_history(tmp_path).backup_path(tracker.operation, registry)
        assert backup.read_text(encoding="utf-8") == "before"
        assert tracker.operation.files_modified == [str(registry)]

    def test_missing_file_is_not_tracked_as_modified(self, tmp_path):
        with OperationTracker("generate modules", project_root=tmp_path) as tracker:
            tracker.track_file_modification(tmp_path / "missing.ts")

        assert tracker.operation.files_modified == []


class TestRollback:
    """CommandHistory.rollback_operation()"""

    def test_restores_project_state(self, tmp_path):
        registry = _write(tmp_path / "registry.ts", "before")
        module_dir = tmp_path / "barang"

        with OperationTracker("generate modules", project_root=tmp_path) as tracker:
            tracker.track_file_modification(registry)
            registry.write_text("after", encoding="utf-8")
            created = _write(module_dir / "domain" / "barang.entity.ts", "x")
            tracker.track_directory_creation(module_dir)
            tracker.track_directory_creation(module_dir / "domain")
            tracker.track_file_creation(created)

        history = get_history(tmp_path)
        log = history.rollback_operation(history.get_last_operation())

        assert registry.read_text(encoding="utf-8") == "before"
        assert not module_dir.exists()
        assert f"Deleted: {created}" in log
        assert f"Restored: {registry}" in log
        assert history.get_last_operation() is None
        assert not history.backup_dir(tracker.operation).exists()

    def test_directories_with_foreign_files_are_kept(self, tmp_path):
        module_dir = tmp_path / "barang"

        with OperationTracker("generate modules", project_root=tmp_path) as tracker:
            created = _write(module_dir / "barang.module.ts", "x")
            tracker.track_directory_creation(module_dir)
            tracker.track_file_creation(created)
        _write(module_dir / "notes.md", "mine")

        history = get_history(tmp_path)
        history.rollback_operation(history.get_last_operation())

        assert (module_dir / "notes.md").exists()
        assert not created.exists()

    def test_paths_outside_project_are_refused(self, tmp_path):
        project = tmp_path / "project"
        project.mkdir()
        outside = _write(tmp_path / "outside.ts", "keep")
        history = CommandHistory(project)
        operation = Operation(operation_id="op_test", command="generate modules", timestamp=0.0,
                              files_created=[str(outside)])

        with pytest.raises(CLIError) as exc_info:
            history.rollback_operation(operation)

        assert exc_info.value.error_code == "U003"
        assert outside.exists()


class TestCommandHistory:
    """Persistence and limits"""

    def test_limit_drops_oldest(self, tmp_path):
        history = CommandHistory(tmp_path, limit=2)
        for i in range(3):
            history.add_operation(Operation(operation_id=f"op_{i}", command="c", timestamp=float(i)))

        assert [op.operation_id for op in history.list_operations()] == ["op_1", "op_2"]
        assert [op.operation_id for op in CommandHistory(tmp_path).operations] == ["op_1", "op_2"]

    def test_get_operation(self, tmp_path):
        history = CommandHistory(tmp_path)
        history.add_operation(Operation(operation_id="op_a", command="c", timestamp=0.0))

        assert history.get_operation("op_a").command == "c"
        assert history.get_operation("op_missing") is None

    def test_corrupted_history_starts_fresh(self, tmp_path):
        _write(tmp_path / ".modgen" / "history.json", "{not json")
        assert CommandHistory(tmp_path).operations == []
