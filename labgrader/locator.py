"""
Project root detection and file lookup inside a submission tree.

Students push their lab in unpredictable layouts: the project may sit at
the repository root, in a folder named after the lab, or in some other
subfolder. Files are looked up in conventional locations first and then by
a case-insensitive search of the whole tree.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .config import FILE_LOCATIONS, IGNORED_DIRS, MANIFEST_FILENAME, PREFERRED_PROJECT_DIRS, SOURCE_DIRNAME
from .config_loader import GraderConfig
from .models import ResolvedFile

logger = logging.getLogger(__name__)


def _is_file(path: Path) -> bool:
    """Like Path.is_file, but an inaccessible path counts as no file."""
    try:
        return path.is_file()
    except OSError as e:
        logger.warning("Could not check %s: %s", path, e)
        return False


class ProjectLocator:
    """
    Finds the project root of a submission and resolves files within it.
    """

    def __init__(
        self,
        start_dir: Path,
        manifest_name: str = MANIFEST_FILENAME,
        source_dir: str = SOURCE_DIRNAME,
        preferred_dirs: Iterable[str] = PREFERRED_PROJECT_DIRS,
        file_locations: Iterable[str] = FILE_LOCATIONS,
        ignored_dirs: Iterable[str] = IGNORED_DIRS,
    ) -> None:
        """
        Initialize the locator.

        Args:
            start_dir: Directory the grader was started from (usually the repo root).
            manifest_name: File that marks a project folder.
            source_dir: Source subdirectory that marks a project folder.
            preferred_dirs: Known lab folder names, checked before other subfolders.
            file_locations: Conventional directories (relative to the project root)
                checked before searching the tree.
            ignored_dirs: Directory names never descended into.
        """
        self.start_dir = Path(start_dir).resolve()
        self.manifest_name = manifest_name
        self.source_dir = source_dir
        self.preferred_dirs = list(preferred_dirs)
        self.file_locations = list(file_locations)
        self.ignored_dirs = frozenset(ignored_dirs)
        self._project_root: Path | None = None

    @classmethod
    def from_config(cls, start_dir: Path, config: GraderConfig) -> "ProjectLocator":
        """Build a locator from a GraderConfig."""
        return cls(
            start_dir,
            manifest_name=config.manifest_name,
            source_dir=config.source_dir,
            preferred_dirs=config.preferred_project_dirs,
            file_locations=config.file_locations,
            ignored_dirs=config.excluded_dirs,
        )

    def looks_like_project(self, path: Path) -> bool:
        """Return True if `path` holds both the manifest and the source directory."""
        try:
            return (path / self.manifest_name).exists() and (path / self.source_dir).is_dir()
        except OSError:
            return False

    def find_project_root(self) -> Path:
        """
        Pick the most plausible project root.

        Order: the start directory itself, then the preferred lab folders,
        then the first immediate subfolder (in sorted order) that looks like
        a project. Falls back to the start directory.

        Returns:
            Absolute path of the project root.
        """
        if self.looks_like_project(self.start_dir):
            return self.start_dir

        for name in self.preferred_dirs:
            candidate = self.start_dir / name
            if self.looks_like_project(candidate):
                return candidate

        try:
            subdirs = sorted(p for p in self.start_dir.iterdir() if p.is_dir())
        except OSError as e:
            logger.warning("Could not list %s: %s", self.start_dir, e)
            subdirs = []

        for candidate in subdirs:
            if self.looks_like_project(candidate):
                return candidate

        logger.info("No project folder detected under %s; searching from it directly", self.start_dir)
        return self.start_dir

    @property
    def project_root(self) -> Path:
        if self._project_root is None:
            self._project_root = self.find_project_root()
        return self._project_root

    def iter_files(self, root: Path) -> Iterator[Path]:
        """
        Walk every regular file under `root`, skipping ignored directories.

        Directory entries are visited in sorted order so the walk is stable
        for a fixed tree.
        """
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.ignored_dirs)
            for filename in sorted(filenames):
                yield Path(dirpath) / filename

    def _search(self, root: Path, basenames: list[str]) -> Path | None:
        wanted = {name.lower() for name in basenames}
        for path in self.iter_files(root):
            if path.name.lower() in wanted and _is_file(path):
                return path
        return None

    def find_file(self, basenames: list[str]) -> Path | None:
        """
        Locate the first file matching any of `basenames`.

        Args:
            basenames: Acceptable file names, e.g. ["TaskApp.jsx", "TaskApp.js"].

        Returns:
            Absolute path to the file, or None if it is not in the tree.
        """
        root = self.project_root

        for name in basenames:
            for location in self.file_locations:
                candidate = root / location / name
                if _is_file(candidate):
                    return candidate

        found = self._search(root, basenames)
        if found:
            return found

        if root != self.start_dir:
            return self._search(self.start_dir, basenames)

        return None

    def resolve(self, name: str, basenames: list[str]) -> ResolvedFile:
        """Resolve a logical file to a ResolvedFile."""
        path = self.find_file(basenames)
        if path is None:
            logger.info("%s not found (looked for %s)", name, ", ".join(basenames))
        else:
            logger.debug("%s resolved to %s", name, path)
        return ResolvedFile(name=name, candidates=basenames, path=str(path) if path else None)
