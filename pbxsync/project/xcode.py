"""
Xcode Project Backend
=====================

Implements the project interface on top of the ``pbxproj`` library.

``pbxproj`` owns parsing and writing of ``project.pbxproj``. This module only
indexes the objects the synchronizer needs (groups, file references, targets
and their compile-sources phases) and resolves full paths the way Xcode does.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from loguru import logger
from pbxproj import XcodeProject
from pbxproj.pbxsections import PBXBuildFile, PBXFileReference, PBXGroup

from pbxsync.project.base import (
    LoadError,
    ProjectError,
    SaveError,
    normalize_path,
    select_target,
)

PBXPROJ_NAME = "project.pbxproj"

GROUP_SECTIONS = ("PBXGroup", "PBXVariantGroup", "XCVersionGroup")
SOURCES_PHASE = "PBXSourcesBuildPhase"

GROUP_TREE = "<group>"
ABSOLUTE_TREE = "<absolute>"
SOURCE_ROOT_TREE = "SOURCE_ROOT"

FILE_TYPES = {
    ".c": "sourcecode.c.c",
    ".cpp": "sourcecode.cpp.cpp",
    ".h": "sourcecode.c.h",
    ".hpp": "sourcecode.cpp.h",
    ".m": "sourcecode.c.objc",
    ".mm": "sourcecode.cpp.objcpp",
    ".swift": "sourcecode.swift",
}


def resolve_pbxproj_path(path: str | Path) -> Path:
    """Accept either the ``.xcodeproj`` bundle or the ``project.pbxproj`` inside it."""
    path = Path(path)
    if path.suffix == ".xcodeproj":
        return path / PBXPROJ_NAME
    return path


class XcodeFileReference:
    """A ``PBXFileReference`` seen through the project interface."""

    def __init__(self, project: "XcodeProjectFile", obj: Any):
        self._project = project
        self._obj = obj

    @property
    def id(self) -> str:
        return self._obj.get_id()

    @property
    def path(self) -> str:
        return getattr(self._obj, "path", None) or ""

    @path.setter
    def path(self, value: str) -> None:
        previous = self.full_path
        self._obj["path"] = value
        self._project._reindex(self._obj, previous)

    @property
    def full_path(self) -> Path | None:
        return self._project._resolve(self._obj)

    @property
    def parent(self) -> "XcodeGroup | None":
        parent = self._project._parents.get(self.id)
        return XcodeGroup(self._project, parent) if parent is not None else None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, XcodeFileReference) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"XcodeFileReference(path='{self.path}')"


class XcodeGroup:
    """A ``PBXGroup`` seen through the project interface."""

    def __init__(self, project: "XcodeProjectFile", obj: Any):
        self._project = project
        self._obj = obj

    @property
    def id(self) -> str:
        return self._obj.get_id()

    @property
    def name(self) -> str:
        name = getattr(self._obj, "name", None)
        if name:
            return name
        path = getattr(self._obj, "path", None)
        return Path(path).name if path else ""

    @property
    def path(self) -> str:
        return getattr(self._obj, "path", None) or ""

    @property
    def full_path(self) -> Path | None:
        return self._project._resolve(self._obj)

    def children(self) -> list["XcodeGroup"]:
        groups = []
        for child_id in self._obj.children:
            child = self._project._groups.get(child_id)
            if child is not None:
                groups.append(XcodeGroup(self._project, child))
        return groups

    def files(self) -> list[XcodeFileReference]:
        files = []
        for child_id in self._obj.children:
            child = self._project._file_refs.get(child_id)
            if child is not None:
                files.append(XcodeFileReference(self._project, child))
        return files

    def get_or_create_child(self, name: str, path: str | None = None) -> "XcodeGroup":
        """Return the child group called ``name``, creating it when missing.

        ``path`` is stored on a created group relative to this group; without
        it the group resolves to this group's directory. An existing group is
        returned as is.
        """
        for child in self.children():
            if child.name == name:
                return child
        return self._project._create_group(self._obj, name, path)

    def add_file(self, full_path: Path) -> XcodeFileReference:
        return self._project._create_file_reference(self._obj, full_path)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, XcodeGroup) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"XcodeGroup(name='{self.name}')"


class XcodeTarget:
    """A native target and its compile-sources build phase."""

    def __init__(self, project: "XcodeProjectFile", obj: Any):
        self._project = project
        self._obj = obj

    @property
    def name(self) -> str:
        return getattr(self._obj, "name", None) or ""

    def compile_sources(self) -> list[XcodeFileReference]:
        """File references currently in the compile-sources phase."""
        phase = self._project._sources_phase(self._obj)
        refs = []
        for build_file_id in phase.files:
            build_file = self._project._build_files.get(build_file_id)
            if build_file is None:
                continue
            file_ref = self._project._file_refs.get(getattr(build_file, "fileRef", None))
            if file_ref is not None:
                refs.append(XcodeFileReference(self._project, file_ref))
        return refs

    def add_to_compile_sources(self, file_ref: XcodeFileReference) -> None:
        phase = self._project._sources_phase(self._obj)
        build_file = PBXBuildFile.create(file_ref._obj)
        self._project._register(build_file)
        self._project._build_files[build_file.get_id()] = build_file
        phase.add_build_file(build_file)

    def __repr__(self) -> str:
        return f"XcodeTarget(name='{self.name}')"


class XcodeProjectFile:
    """A loaded ``project.pbxproj`` behind the project interface."""

    def __init__(self, pbx: XcodeProject, path: Path):
        self._pbx = pbx
        self.path = normalize_path(path)
        self.base_dir = self.path.parent.parent

        root_id = getattr(pbx, "rootObject", None)
        self._root = pbx.get_object(root_id) if root_id else None
        if self._root is None:
            raise LoadError(f"Project root object missing in {self.path}", self.path)

        self._groups = {g.get_id(): g for g in pbx.objects.get_objects_in_section(*GROUP_SECTIONS)}
        self._file_refs = {
            f.get_id(): f for f in pbx.objects.get_objects_in_section("PBXFileReference")
        }
        self._build_files = {
            b.get_id(): b for b in pbx.objects.get_objects_in_section("PBXBuildFile")
        }
        self._phases = {p.get_id(): p for p in pbx.objects.get_objects_in_section(SOURCES_PHASE)}
        self._parents: dict[str, Any] = {}
        for group in self._groups.values():
            for child_id in group.children:
                self._parents[child_id] = group
        self._files_by_path: dict[Path, Any] | None = None

        if getattr(self._root, "mainGroup", None) not in self._groups:
            raise LoadError(f"Main group missing in {self.path}", self.path)

    @classmethod
    def load(cls, path: str | Path) -> "XcodeProjectFile":
        """Load a project from its ``.xcodeproj`` bundle or ``project.pbxproj``.

        Raises:
            LoadError: If the file is missing or cannot be parsed
        """
        pbxproj_path = resolve_pbxproj_path(path)
        if not pbxproj_path.is_file():
            raise LoadError(f"Project file not found: {pbxproj_path}", pbxproj_path)
        try:
            pbx = XcodeProject.load(str(pbxproj_path))
        except Exception as error:
            raise LoadError(f"Cannot parse {pbxproj_path}: {error}", pbxproj_path) from error
        logger.debug(f"Loaded {pbxproj_path}")
        return cls(pbx, pbxproj_path)

    def save(self) -> None:
        """Write the project back to the file it was loaded from.

        Raises:
            SaveError: If the file cannot be written
        """
        try:
            self._pbx.save(str(self.path))
        except OSError as error:
            raise SaveError(f"Cannot write {self.path}: {error}", self.path) from error
        logger.debug(f"Saved {self.path}")

    @property
    def main_group(self) -> XcodeGroup:
        return XcodeGroup(self, self._groups[self._root.mainGroup])

    @property
    def targets(self) -> list[XcodeTarget]:
        targets = []
        for target_id in getattr(self._root, "targets", None) or []:
            target = self._pbx.get_object(target_id)
            if target is not None:
                targets.append(XcodeTarget(self, target))
        return targets

    def select_target(self, selector: str | None = None) -> XcodeTarget:
        return select_target(self.targets, selector)

    def files(self) -> Iterator[XcodeFileReference]:
        for obj in self._file_refs.values():
            yield XcodeFileReference(self, obj)

    def find_file_by_full_path(self, full_path: Path) -> XcodeFileReference | None:
        obj = self._file_index().get(normalize_path(full_path))
        return XcodeFileReference(self, obj) if obj is not None else None

    def _register(self, obj: Any) -> None:
        self._pbx.objects[obj.get_id()] = obj

    def _create_group(self, parent: Any, name: str, path: str | None) -> XcodeGroup:
        group = PBXGroup.create(path=path, name=name, tree=GROUP_TREE)
        self._register(group)
        parent.add_child(group)
        self._groups[group.get_id()] = group
        self._parents[group.get_id()] = parent
        logger.debug(f"Created group {name} ({path or 'no path'})")
        return XcodeGroup(self, group)

    def _create_file_reference(self, parent: Any, full_path: Path) -> XcodeFileReference:
        full_path = normalize_path(full_path)
        file_ref = PBXFileReference.create(str(full_path), tree=GROUP_TREE)
        file_ref["lastKnownFileType"] = FILE_TYPES.get(full_path.suffix, "text")
        self._register(file_ref)
        parent.add_child(file_ref)
        self._file_refs[file_ref.get_id()] = file_ref
        self._parents[file_ref.get_id()] = parent
        self._reindex(file_ref, None)
        return XcodeFileReference(self, file_ref)

    def _sources_phase(self, target: Any) -> Any:
        for phase_id in getattr(target, "buildPhases", None) or []:
            phase = self._phases.get(phase_id)
            if phase is not None:
                return phase
        raise ProjectError(
            f"Target {getattr(target, 'name', '?')} has no compile sources build phase", self.path
        )

    def _resolve(self, obj: Any) -> Path | None:
        """Resolve an object's on-disk path from its ``sourceTree`` and parents."""
        tree = getattr(obj, "sourceTree", None) or GROUP_TREE
        path = getattr(obj, "path", None)
        if tree == ABSOLUTE_TREE:
            return normalize_path(path) if path else None
        if tree == SOURCE_ROOT_TREE:
            return normalize_path(self.base_dir / path) if path else self.base_dir
        if tree != GROUP_TREE:
            return None

        parent = self._parents.get(obj.get_id())
        if parent is None:
            directory = self.base_dir
        else:
            directory = self._resolve(parent)
            if directory is None:
                return None
        return normalize_path(directory / path) if path else directory

    def _file_index(self) -> dict[Path, Any]:
        if self._files_by_path is None:
            self._files_by_path = {}
            for obj in self._file_refs.values():
                full_path = self._resolve(obj)
                if full_path is not None:
                    self._files_by_path.setdefault(full_path, obj)
        return self._files_by_path

    def _reindex(self, obj: Any, previous: Path | None) -> None:
        if self._files_by_path is None:
            return
        if previous is not None and self._files_by_path.get(previous) is obj:
            del self._files_by_path[previous]
        full_path = self._resolve(obj)
        if full_path is not None:
            self._files_by_path.setdefault(full_path, obj)


def load_project(path: str | Path) -> XcodeProjectFile:
    """Default project loader used by the synchronizer."""
    return XcodeProjectFile.load(path)
