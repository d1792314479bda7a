"""
MODGEN CLI - Generation History & Undo System

Tracks generation runs and provides rollback functionality.

Layout:
    .modgen/history.json            - recorded operations
    .modgen/backups/<operation_id>/ - copies of files taken before modification
"""

import json
import os
import shutil
import stat
import threading
import time
import uuid
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from modgen.config import Config
from .utils import CLIError


@dataclass
class Operation:
    """Represents a single generation run that can be undone."""

    operation_id: str
    command: str
    timestamp: float
    files_created: List[str] = field(default_factory=list)
    files_modified: List[str] = field(default_factory=list)
    directories_created: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def generate_id(cls) -> str:
        """Generate a unique operation ID."""
        return f"op_{uuid.uuid4().hex[:8]}_{int(time.time())}"


def _secure(path: Path):
    try:
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
    except OSError:
        # Not supported on every filesystem; the file is still usable
        pass


class CommandHistory:
    """Manages generation history and rollback operations."""

    def __init__(self, project_root: Optional[Path] = None, limit: Optional[int] = None):
        self.project_root = Path(project_root or Path.cwd()).resolve()
        self.state_dir = self.project_root / Config.Internal.HISTORY_DIR_NAME
        self.history_file = self.state_dir / "history.json"
        self.limit = limit or Config.HISTORY_LIMIT
        self._lock = threading.Lock()
        self.operations: List[Operation] = []
        self.load_history()

    def backup_dir(self, operation: Operation) -> Path:
        return self.state_dir / "backups" / operation.operation_id

    def backup_path(self, operation: Operation, file_path: Path) -> Path:
        """Where the pre-modification copy of file_path is kept."""
        relative = Path(file_path).resolve().relative_to(self.project_root)
        return self.backup_dir(operation) / relative

    def load_history(self):
        """Load history from file; a corrupted file starts a fresh history."""
        if not self.history_file.exists():
            self.operations = []
            return

        try:
            data = json.loads(self.history_file.read_text(encoding="utf-8"))
            self.operations = [Operation(**op_data) for op_data in data.get('operations', [])]
        except (json.JSONDecodeError, KeyError, TypeError):
            self.operations = []

    def save_history(self):
        """Save history with an atomic write and owner-only permissions."""
        data = {'operations': [asdict(op) for op in self.operations]}
        with self._lock:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            temp_file = self.history_file.with_suffix('.tmp')
            try:
                temp_file.write_text(json.dumps(data, indent=2), encoding="utf-8")
                _secure(temp_file)
                temp_file.replace(self.history_file)
            except Exception:
                if temp_file.exists():
                    temp_file.unlink()
                raise

    def add_operation(self, operation: Operation):
        """Add a new operation, dropping the oldest ones beyond the limit."""
        self.operations.append(operation)
        if len(self.operations) > self.limit:
            for dropped in self.operations[:-self.limit]:
                shutil.rmtree(self.backup_dir(dropped), ignore_errors=True)
            self.operations = self.operations[-self.limit:]
        self.save_history()

    def get_last_operation(self) -> Optional[Operation]:
        return self.operations[-1] if self.operations else None

    def get_operation(self, operation_id: str) -> Optional[Operation]:
        for op in self.operations:
            if op.operation_id == operation_id:
                return op
        return None

    def list_operations(self, limit: int = 10) -> List[Operation]:
        return self.operations[-limit:] if self.operations else []

    def _check_inside_project(self, file_path: str):
        path = Path(file_path).resolve()
        if path != self.project_root and self.project_root not in path.parents:
            raise CLIError(
                f"Cannot rollback: path {file_path} is outside project directory",
                suggestion="Operation contains unsafe paths. Manual cleanup may be required.",
                error_code="U003"
            )

    def rollback_operation(self, operation: Operation) -> List[str]:
        """
        Undo an operation: delete created files, restore modified ones and
        remove created directories that are empty afterwards.

        Returns:
            Log lines describing each step
        """
        for file_path in operation.files_created + operation.files_modified + operation.directories_created:
            self._check_inside_project(file_path)

        rollback_log = []
        try:
            for file_path in reversed(operation.files_created):
                path = Path(file_path)
                if path.exists():
                    try:
                        path.unlink()
                        rollback_log.append(f"Deleted: {file_path}")
                    except OSError as e:
                        rollback_log.append(f"Failed to delete {file_path}: {e}")

            for file_path in reversed(operation.files_modified):
                backup = self.backup_path(operation, Path(file_path))
                if not backup.exists():
                    rollback_log.append(f"No backup for: {file_path}")
                    continue
                try:
                    Path(file_path).write_bytes(backup.read_bytes())
                    rollback_log.append(f"Restored: {file_path}")
                except OSError as e:
                    rollback_log.append(f"Failed to restore {file_path}: {e}")

        finally:
            # Deepest directories first
            for dir_path in sorted(operation.directories_created, key=len, reverse=True):
                path = Path(dir_path)
                if path.is_dir() and not any(path.iterdir()):
                    try:
                        path.rmdir()
                        rollback_log.append(f"Removed directory: {dir_path}")
                    except OSError:
                        pass  # Directory is locked or was filled meanwhile

            shutil.rmtree(self.backup_dir(operation), ignore_errors=True)

            with self._lock:
                if operation in self.operations:
                    self.operations.remove(operation)
            self.save_history()

        return rollback_log


# Global history instances, one per project root
_history_instances: Dict[Path, CommandHistory] = {}


def get_history(project_root: Optional[Path] = None) -> CommandHistory:
    """Get the command history of a project."""
    root = Path(project_root or Path.cwd()).resolve()
    if root not in _history_instances:
        _history_instances[root] = CommandHistory(root)
    return _history_instances[root]


class OperationTracker:
    """
    Context manager to record a generation run for undo.

    The operation is only added to history if the block succeeds.
    """

    def __init__(self, command: str, metadata: Dict[str, Any] = None, project_root: Optional[Path] = None):
        self.history = get_history(project_root)
        self.operation = Operation(
            operation_id=Operation.generate_id(),
            command=command,
            timestamp=time.time(),
            metadata=metadata or {},
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None and self._has_changes():
            self.history.add_operation(self.operation)
        elif exc_type is not None:
            shutil.rmtree(self.history.backup_dir(self.operation), ignore_errors=True)
        return False  # Don't suppress exceptions

    def _has_changes(self) -> bool:
        op = self.operation
        return bool(op.files_created or op.files_modified or op.directories_created)

    def track_file_creation(self, file_path):
        file_path = str(file_path)
        if file_path not in self.operation.files_created:
            self.operation.files_created.append(file_path)

    def track_file_modification(self, file_path):
        """Back up an existing file before it gets modified."""
        path = Path(file_path)
        if not path.exists() or str(path) in self.operation.files_modified:
            return

        backup = self.history.backup_path(self.operation, path)
        try:
            backup.parent.mkdir(parents=True, exist_ok=True)
            backup.write_bytes(path.read_bytes())
            _secure(backup)
        except (ValueError, OSError) as e:
            raise CLIError(
                f"Failed to create backup for {file_path}: {e}",
                suggestion="Check file permissions and disk space.",
                error_code="U005"
            )
        self.operation.files_modified.append(str(path))

    def track_directory_creation(self, dir_path):
        dir_path = str(dir_path)
        if dir_path not in self.operation.directories_created:
            self.operation.directories_created.append(dir_path)


__all__ = ["CommandHistory", "Operation", "OperationTracker", "get_history"]
