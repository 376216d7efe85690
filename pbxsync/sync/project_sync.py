"""
Project Synchronization Module
==============================

Brings a project's file tree in line with the source files on disk. The
synchronizer only adds: groups and file references are created, never
removed, and the folder layout under the relation root is mirrored as a
chain of groups under the main group.
"""

import os
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field

from pbxsync.collector import collect_source_files, filter_excluded
from pbxsync.config import SyncConfig
from pbxsync.project.base import Group, Project, ProjectError, ProjectLoader, normalize_path
from pbxsync.project.xcode import load_project
from pbxsync.utils.logging import timeit


class SyncReport(BaseModel):
    """Outcome of one sync run."""

    project_path: Path
    added: list[Path] = Field(default_factory=list, description="Files given a new reference")
    tracked: list[Path] = Field(default_factory=list, description="Files already referenced")
    excluded: list[Path] = Field(default_factory=list, description="Files rejected by a pattern")
    saved: bool = False
    dry_run: bool = False

    @property
    def candidate_count(self) -> int:
        return len(self.added) + len(self.tracked) + len(self.excluded)


class ProjectSynchronizer:
    """Adds every source file the project does not reference yet."""

    def __init__(self, config: SyncConfig, loader: ProjectLoader = load_project):
        """Initialize the ProjectSynchronizer.

        Args:
            config: Paths, filters and target selection for the run
            loader: Callable that loads a project from ``config.project_path``
        """
        self.config = config
        self.loader = loader

    def collect_candidates(self) -> tuple[list[Path], list[Path]]:
        """Scan the source roots and split the result into kept and excluded."""
        files = collect_source_files(self.config.source_roots, self.config.extensions)
        return filter_excluded(files, self.config.exclude_patterns)

    def get_relation_root(self, project: Project) -> Path:
        if self.config.relation_root is None:
            return project.base_dir
        return normalize_path(self.config.relation_root)

    def get_group_chain(self, full_path: Path, relation_root: Path) -> list[str]:
        """Folder names between ``relation_root`` and the file.

        Raises:
            ValueError: If the file is not under ``relation_root``
        """
        return list(full_path.relative_to(relation_root).parts[:-1])

    def get_group_relative_path(self, path: Path, group: Group) -> str | None:
        """Path of ``path`` as stored under ``group``; None when they coincide.

        Raises:
            ProjectError: If the group has no resolvable location
        """
        directory = group.full_path
        if directory is None:
            raise ProjectError(f"Group {group.name} does not resolve to a directory")
        relative = os.path.relpath(path, directory)
        return None if relative == "." else relative

    def resolve_group(self, project: Project, folders: list[str], relation_root: Path) -> Group:
        """Walk the group root and folder chain from the main group, creating missing groups.

        Group root segments are created without a path. Each created folder
        group stores its directory relative to its parent group, which is the
        bare folder name once the chain has reached ``relation_root``.
        """
        group = project.main_group
        for name in self.config.group_root_segments:
            group = group.get_or_create_child(name)

        directory = relation_root
        for name in folders:
            directory = directory / name
            existing = next((child for child in group.children() if child.name == name), None)
            if existing is not None:
                group = existing
            else:
                group = group.get_or_create_child(
                    name, path=self.get_group_relative_path(directory, group)
                )
        return group

    @timeit
    def sync(self, dry_run: bool = False) -> SyncReport:
        """
        Add references for all untracked source files and save the project.

        With ``dry_run`` the project is loaded and compared but neither
        modified nor saved; the report lists what would be added.

        Raises:
            LoadError: If the project cannot be loaded
            SaveError: If the project cannot be written back
            TargetNotFoundError: If no target matches the selector
            ProjectError: If a new reference does not resolve to its file
            ValueError: If a new file lies outside the relation root
        """
        project = self.loader(self.config.project_path)
        target = project.select_target(self.config.target_selector)
        relation_root = self.get_relation_root(project)

        candidates, excluded = self.collect_candidates()
        report = SyncReport(project_path=project.path, excluded=excluded, dry_run=dry_run)
        for path in excluded:
            logger.debug(f"Excluded {path}")

        pending: set[Path] = set()
        for candidate in candidates:
            full_path = normalize_path(candidate)

            if full_path in pending or project.find_file_by_full_path(full_path) is not None:
                logger.debug(f"Already tracked {candidate}")
                report.tracked.append(full_path)
                continue

            if dry_run:
                pending.add(full_path)
                report.added.append(full_path)
                logger.info(f"Would add {candidate}")
                continue

            folders = self.get_group_chain(full_path, relation_root)
            group = self.resolve_group(project, folders, relation_root)
            file_ref = group.add_file(full_path)
            file_ref.path = self.get_group_relative_path(full_path, group)
            if file_ref.full_path != full_path:
                raise ProjectError(
                    f"Reference for {candidate} resolves to {file_ref.full_path}", project.path
                )
            target.add_to_compile_sources(file_ref)

            report.added.append(full_path)
            logger.info(f"Copied over {candidate}")

        if not dry_run:
            project.save()
            report.saved = True
        return report


def sync_project(
    config: SyncConfig, dry_run: bool = False, loader: ProjectLoader = load_project
) -> SyncReport:
    """Run a single sync with ``config``."""
    return ProjectSynchronizer(config, loader=loader).sync(dry_run=dry_run)
