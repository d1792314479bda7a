"""
MODGEN Core - File Materializer

Writes rendered artifacts under a module root.

WARNING: files are always overwritten. Regenerating a module discards any
manual edits made to its generated files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from modgen.config import Config
from .renderer import Artifact


logger = logging.getLogger(__name__)

# Created together with the module root on first generation
MODULE_SUBDIRECTORIES = Config.Internal.MODULE_SUBDIRECTORIES

# Empty directory kept for request/response DTOs
DTO_DIRECTORY = Path("controller") / "dto"


@dataclass
class MaterializeResult:
    """What a materialize call did on disk."""

    base_path: Path
    directories_created: List[Path] = field(default_factory=list)
    files_created: List[Path] = field(default_factory=list)
    files_overwritten: List[Path] = field(default_factory=list)

    @property
    def files_written(self) -> List[Path]:
        return self.files_created + self.files_overwritten


def ensure_module_directories(base_path: Path) -> List[Path]:
    """
    Create the module root and its sub-directories.

    The fixed sub-directory list is only created together with a new module
    root; an existing root is left alone so regeneration can top it up.

    Returns:
        Directories that were created by this call
    """
    created = []

    if not base_path.exists():
        base_path.mkdir(parents=True)
        created.append(base_path)
        for folder in MODULE_SUBDIRECTORIES:
            path = base_path / folder
            path.mkdir()
            created.append(path)
    else:
        logger.warning(f"Folder {base_path} already exists, overwriting generated files")

    dto_dir = base_path / DTO_DIRECTORY
    if not dto_dir.exists():
        dto_dir.mkdir(parents=True)
        created.append(dto_dir)

    return created


def materialize(base_path: Path, artifacts: Iterable[Artifact]) -> MaterializeResult:
    """
    Write artifacts below base_path.

    Raises:
        OSError: On permission or disk failures; nothing is rolled back, a
            repeated run overwrites whatever was left half-written
    """
    base_path = Path(base_path)
    result = MaterializeResult(base_path=base_path)
    result.directories_created = ensure_module_directories(base_path)

    for artifact in artifacts:
        target = base_path / artifact.path
        # Sub-directories may be missing when the root pre-dates them
        target.parent.mkdir(parents=True, exist_ok=True)

        existed = target.exists()
        target.write_text(artifact.content, encoding="utf-8")

        if existed:
            result.files_overwritten.append(target)
            logger.debug(f"Overwrote {target}")
        else:
            result.files_created.append(target)
            logger.debug(f"Created {target}")

    return result
