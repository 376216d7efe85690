"""
Project Interface
=================

The narrow interface the synchronizer works against. A backend (see
``pbxsync.project.xcode``) maps these calls onto a concrete manifest format;
the synchronizer never touches the format itself.
"""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Protocol


class ProjectError(Exception):
    """Base exception for project manifest errors."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


class LoadError(ProjectError):
    """Raised when a manifest is missing or cannot be parsed."""

    pass


class SaveError(ProjectError):
    """Raised when a manifest cannot be written back."""

    pass


class TargetNotFoundError(ProjectError):
    """Raised when no target matches the configured selector."""

    pass


class FileReference(Protocol):
    """A leaf node pointing at one on-disk file."""

    path: str

    @property
    def full_path(self) -> Path | None: ...


class Group(Protocol):
    """A named container node, analogous to a folder."""

    @property
    def name(self) -> str: ...

    @property
    def full_path(self) -> Path | None: ...

    def children(self) -> list["Group"]: ...

    def files(self) -> list[FileReference]: ...

    def get_or_create_child(self, name: str, path: str | None = None) -> "Group": ...

    def add_file(self, full_path: Path) -> FileReference: ...


class Target(Protocol):
    """A build target owning a compile-sources build phase."""

    @property
    def name(self) -> str: ...

    def add_to_compile_sources(self, file_ref: FileReference) -> None: ...


class Project(Protocol):
    """Root of a loaded manifest."""

    path: Path
    base_dir: Path

    @property
    def main_group(self) -> Group: ...

    @property
    def targets(self) -> list[Target]: ...

    def files(self) -> Iterator[FileReference]: ...

    def find_file_by_full_path(self, full_path: Path) -> FileReference | None: ...

    def select_target(self, selector: str | None = None) -> Target: ...

    def save(self) -> None: ...


ProjectLoader = Callable[[Path], Project]


def normalize_path(path: str | Path) -> Path:
    """Make a path absolute and collapse ``..`` segments lexically.

    Symlinks are not resolved and case is preserved.
    """
    return Path(os.path.normpath(os.path.abspath(path)))


def select_target(targets: list[Target], selector: str | None = None) -> Target:
    """Pick the target to update: the first one, or the one named ``selector``."""
    if not targets:
        raise TargetNotFoundError("Project has no targets")
    if selector is None:
        return targets[0]
    for target in targets:
        if target.name == selector:
            return target
    raise TargetNotFoundError(f"Target not found: {selector}")
